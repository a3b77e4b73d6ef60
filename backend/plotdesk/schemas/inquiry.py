from pydantic import Field
from datetime import datetime

from plotdesk.core.constants import (
    EMAIL_MAX_LENGTH,
    MESSAGE_MAX_LENGTH,
    MESSAGE_MIN_LENGTH,
    NAME_MAX_LENGTH,
    PLOT_NUMBER_MAX_LENGTH,
)
from plotdesk.schemas.base import CamelModel, EmailFormModel


class Inquiry(CamelModel):
    """Visitor message about a specific plot"""
    id: str
    plot_number: str
    name: str
    email: str
    message: str
    received_at: datetime


class InquiryForm(EmailFormModel):
    plot_number: str = Field(..., min_length=1, max_length=PLOT_NUMBER_MAX_LENGTH)
    name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    email: str = Field(..., max_length=EMAIL_MAX_LENGTH)
    message: str = Field(..., min_length=MESSAGE_MIN_LENGTH, max_length=MESSAGE_MAX_LENGTH)

    error_messages = {
        "plot_number": {
            "string_too_long": f"Plot number must be less than {PLOT_NUMBER_MAX_LENGTH} characters.",
            "*": "Plot number is required.",
        },
        "name": {
            "string_too_long": f"Name must be less than {NAME_MAX_LENGTH} characters.",
            "*": "Name is required.",
        },
        "email": {
            "string_too_long": f"Email must be less than {EMAIL_MAX_LENGTH} characters.",
            "*": "A valid email is required.",
        },
        "message": {
            "string_too_long": f"Message must be less than {MESSAGE_MAX_LENGTH} characters.",
            "*": f"Message must be at least {MESSAGE_MIN_LENGTH} characters.",
        },
    }
