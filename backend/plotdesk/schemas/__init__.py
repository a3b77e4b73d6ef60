from plotdesk.schemas.auth import User, PasswordRecord, AuthUser
from plotdesk.schemas.plot import Plot, PlotForm
from plotdesk.schemas.contact import Contact, ContactForm
from plotdesk.schemas.registration import Registration, RegistrationForm
from plotdesk.schemas.inquiry import Inquiry, InquiryForm
from plotdesk.schemas.common import ActionState, DashboardSummary

__all__ = [
    "User",
    "PasswordRecord",
    "AuthUser",
    "Plot",
    "PlotForm",
    "Contact",
    "ContactForm",
    "Registration",
    "RegistrationForm",
    "Inquiry",
    "InquiryForm",
    "ActionState",
    "DashboardSummary",
]
