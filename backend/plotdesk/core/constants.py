"""
Application constants: validation limits, enumerations and user-facing messages
"""
import enum


class UserRole(str, enum.Enum):
    """User roles"""
    OWNER = "Owner"
    USER = "User"


class ContactType(str, enum.Enum):
    SELLER = "Seller"
    BUYER = "Buyer"


class PlotFacing(str, enum.Enum):
    """Direction the plot entrance faces"""
    NORTH = "North"
    SOUTH = "South"
    EAST = "East"
    WEST = "West"
    NORTH_EAST = "North-East"
    NORTH_WEST = "North-West"
    SOUTH_EAST = "South-East"
    SOUTH_WEST = "South-West"


class PlotStatus(str, enum.Enum):
    AVAILABLE = "Available"
    RESERVED = "Reserved"
    SOLD = "Sold"
    UNDER_NEGOTIATION = "Under Negotiation"


# ==========================================
# Validation limits
# ==========================================
PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 128
PLOT_NUMBER_MAX_LENGTH = 50
PLOT_SIZE_MAX_LENGTH = 100
NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 255
PHONE_MAX_LENGTH = 20
MESSAGE_MIN_LENGTH = 10
MESSAGE_MAX_LENGTH = 1000
NOTES_MAX_LENGTH = 500
DESCRIPTION_MAX_LENGTH = 2000
IMAGE_MAX_SIZE = 4 * 1024 * 1024  # 4MB

UPLOADED_IMAGE_HINT = "custom upload"


class Messages:
    """User-facing result messages"""

    # Success
    PLOT_CREATED = "Plot created successfully."
    PLOT_UPDATED = "Plot updated successfully."
    PLOT_DELETED = "Plot deleted successfully."
    USER_CREATED = "User created successfully."
    USER_DELETED = "User deleted successfully."
    PASSWORD_CHANGED = "Password changed successfully."
    INQUIRY_SUBMITTED = "Inquiry submitted successfully."
    CONTACT_CREATED = "Contact created successfully."
    CONTACT_UPDATED = "Contact updated successfully."
    CONTACT_DELETED = "Contact deleted successfully."
    REGISTRATION_SUBMITTED = "Thank you for registering! We will contact you shortly."
    REGISTRATIONS_MARKED_READ = "Registrations marked as read."

    # Failure
    INVALID_CREDENTIALS = "Invalid email or password."
    CURRENT_PASSWORD_INCORRECT = "Current password is incorrect"
    USER_EXISTS = "A user with this email already exists."
    PLOT_EXISTS = "A plot with this number already exists in the same village."
    PLOT_EXISTS_OTHER = "Another plot with this number already exists in the same village."
    CONTACT_EXISTS = "A contact with this email already exists."
    CONTACT_EXISTS_OTHER = "Another contact with this email already exists."
    REGISTRATION_EXISTS = "This email address has already been registered."
    OWNER_PROTECTED = "The owner account cannot be modified from the dashboard."
    INVALID_INPUT = "Invalid input data."
    INTERNAL_ERROR = "An internal error occurred. Please try again."
    UNAUTHORIZED = "You are not authorized to perform this action."
    IMAGE_REQUIRED = "An image file is required."
    IMAGE_TOO_LARGE = "Image must be less than 4MB."
    INVALID_IMAGE = "Only image files are allowed."
    RESET_DISABLED = "Password reset is not available."
    RESET_ANSWER_INCORRECT = "Incorrect security answer"

    # Validation summaries
    PLOT_CREATE_INVALID = "Failed to create plot. Please check all text fields."
    PLOT_UPDATE_INVALID = "Failed to update plot. Please check all text fields."
    IMAGE_INVALID_CREATE = "Image validation failed. Please provide a valid image file."
    IMAGE_INVALID_UPDATE = "Image validation failed."
    USER_INVALID = "Failed to create user."
    PASSWORD_INVALID = "Failed to change password."
    CONTACT_CREATE_INVALID = "Failed to create contact."
    CONTACT_UPDATE_INVALID = "Failed to update contact."
    REGISTRATION_INVALID = "Failed to submit registration. Please check the fields."


# Views served from the view cache, invalidated by mutations
class Views:
    DASHBOARD = "/dashboard"
    PLOTS = "/plots"
    USERS = "/dashboard/users"
    CONTACTS = "/dashboard/contacts"
    INQUIRIES = "/dashboard/inquiries"
    REGISTRATIONS = "/dashboard/registrations"

    @staticmethod
    def plot(plot_id: str) -> str:
        return f"/plots/{plot_id}"

    @staticmethod
    def plot_edit(plot_id: str) -> str:
        return f"/plots/{plot_id}/edit"

    @staticmethod
    def contact(contact_id: str) -> str:
        return f"/dashboard/contacts/{contact_id}"
