from plotdesk.services.plot_service import PlotService
from plotdesk.services.user_service import UserService
from plotdesk.services.contact_service import ContactService
from plotdesk.services.registration_service import RegistrationService
from plotdesk.services.inquiry_service import InquiryService
from plotdesk.services.dashboard_service import DashboardService
from plotdesk.services.view_cache import ViewCache, view_cache

__all__ = [
    "PlotService",
    "UserService",
    "ContactService",
    "RegistrationService",
    "InquiryService",
    "DashboardService",
    "ViewCache",
    "view_cache",
]
