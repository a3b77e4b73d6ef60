from pydantic import Field
from typing import Optional

from plotdesk.core.constants import (
    EMAIL_MAX_LENGTH,
    NAME_MAX_LENGTH,
    NOTES_MAX_LENGTH,
    PHONE_MAX_LENGTH,
    ContactType,
)
from plotdesk.schemas.base import CamelModel, EmailFormModel


class Contact(CamelModel):
    """A seller or buyer kept by the owner"""
    id: str
    name: str
    phone: str
    email: str
    type: ContactType
    notes: Optional[str] = None


class ContactForm(EmailFormModel):
    name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    phone: str = Field(..., min_length=1, max_length=PHONE_MAX_LENGTH)
    email: str = Field(..., max_length=EMAIL_MAX_LENGTH)
    type: ContactType
    notes: Optional[str] = Field(None, max_length=NOTES_MAX_LENGTH)

    error_messages = {
        "name": {
            "string_too_long": f"Name must be less than {NAME_MAX_LENGTH} characters.",
            "*": "Name is required.",
        },
        "phone": {
            "string_too_long": f"Phone must be less than {PHONE_MAX_LENGTH} characters.",
            "*": "Phone number is required.",
        },
        "email": {
            "string_too_long": f"Email must be less than {EMAIL_MAX_LENGTH} characters.",
            "*": "Please enter a valid email.",
        },
        "type": {"*": "Please select a contact type."},
        "notes": {"*": f"Notes must be less than {NOTES_MAX_LENGTH} characters."},
    }
