# Re-export all models for convenient imports
from plotdesk.models.plot import Plot
from plotdesk.models.user import User, Password
from plotdesk.models.contact import Contact
from plotdesk.models.registration import Registration
from plotdesk.models.inquiry import Inquiry

__all__ = [
    "Plot",
    "User",
    "Password",
    "Contact",
    "Registration",
    "Inquiry",
]
