from pydantic import Field
from typing import Optional
from datetime import datetime

from plotdesk.core.constants import (
    EMAIL_MAX_LENGTH,
    NAME_MAX_LENGTH,
    NOTES_MAX_LENGTH,
    PHONE_MAX_LENGTH,
)
from plotdesk.schemas.base import CamelModel, EmailFormModel


class Registration(CamelModel):
    """Lead captured by the public registration form"""
    id: str
    name: str
    phone: str
    email: str
    notes: Optional[str] = None
    created_at: datetime
    is_new: bool = True


class RegistrationForm(EmailFormModel):
    name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    phone: str = Field(..., min_length=1, max_length=PHONE_MAX_LENGTH)
    email: str = Field(..., max_length=EMAIL_MAX_LENGTH)
    notes: Optional[str] = Field(None, max_length=NOTES_MAX_LENGTH)

    error_messages = {
        "name": {
            "string_too_long": f"Name must be less than {NAME_MAX_LENGTH} characters.",
            "*": "Name is required.",
        },
        "phone": {
            "string_too_long": f"Phone must be less than {PHONE_MAX_LENGTH} characters.",
            "*": "A valid phone number is required.",
        },
        "email": {
            "string_too_long": f"Email must be less than {EMAIL_MAX_LENGTH} characters.",
            "*": "A valid email is required.",
        },
        "notes": {"*": f"Notes must be less than {NOTES_MAX_LENGTH} characters."},
    }
