"""
Custom Exceptions for PlotDesk
==============================

Pipelines raise these internally; the action boundary
(plotdesk.services.actions) turns them into failure results so nothing
crosses the service layer in normal operation.

Usage:
    from plotdesk.core.exceptions import PlotNotFoundError, ConflictError

    if plot is None:
        raise PlotNotFoundError(plot_id)
"""

from typing import Optional, Any, Dict, List

from plotdesk.core.constants import Messages


class PlotDeskError(Exception):
    """Base exception for all PlotDesk errors"""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details
        }


# ============================================
# Validation Errors (422-type)
# ============================================

class ValidationError(PlotDeskError):
    """One or more fields failed validation"""

    status_code = 422

    def __init__(self, message: str, errors: Optional[Dict[str, List[str]]] = None):
        super().__init__(message, code="VALIDATION_ERROR", details={"errors": errors or {}})
        self.errors = errors or {}


# ============================================
# Conflict Errors (409-type)
# ============================================

class ConflictError(PlotDeskError):
    """A uniqueness constraint would be violated"""

    status_code = 409

    def __init__(self, message: str):
        super().__init__(message, code="CONFLICT")


# ============================================
# Resource Errors (404-type)
# ============================================

class ResourceNotFoundError(PlotDeskError):
    """Base class for not found errors"""

    status_code = 404

    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(
            f"{resource_type} not found.",
            code=f"{resource_type.upper()}_NOT_FOUND",
            details={"resource_type": resource_type, "resource_id": resource_id}
        )


class PlotNotFoundError(ResourceNotFoundError):
    """Plot not found"""

    def __init__(self, plot_id: str):
        super().__init__("Plot", plot_id)


class UserNotFoundError(ResourceNotFoundError):
    """User not found"""

    def __init__(self, user_id: str):
        super().__init__("User", user_id)


class ContactNotFoundError(ResourceNotFoundError):
    """Contact not found"""

    def __init__(self, contact_id: str):
        super().__init__("Contact", contact_id)


# ============================================
# Authentication & Authorization Errors
# ============================================

class AuthenticationError(PlotDeskError):
    """Credential mismatch or missing session"""

    status_code = 401

    def __init__(self, message: str = Messages.INVALID_CREDENTIALS):
        super().__init__(message, code="AUTH_FAILED")


class AuthorizationError(PlotDeskError):
    """User not authorized for this action"""

    status_code = 403

    def __init__(self, message: str = Messages.UNAUTHORIZED):
        super().__init__(message, code="NOT_AUTHORIZED")


# ============================================
# Storage & Internal Errors (500-type)
# ============================================

class StorageError(PlotDeskError):
    """A collection could not be read or written"""

    def __init__(self, message: str, collection: Optional[str] = None):
        details = {"collection": collection} if collection else {}
        super().__init__(message, code="STORAGE_ERROR", details=details)


class InternalError(PlotDeskError):
    """Unexpected failure, surfaced with a generic message only"""

    def __init__(self, message: str = Messages.INTERNAL_ERROR):
        super().__init__(message, code="INTERNAL_ERROR")


# ============================================
# Content Generation Errors
# ============================================

class ContentGenerationUnavailable(PlotDeskError):
    """AI features are disabled or the provider failed"""

    status_code = 503

    def __init__(self, message: str = "AI features are currently unavailable"):
        super().__init__(message, code="AI_UNAVAILABLE")


# ============================================
# Helper function for API responses
# ============================================

def error_response(error: PlotDeskError) -> Dict[str, Any]:
    """Convert exception to API error response format"""
    return {
        "success": False,
        "message": error.message,
        "error": error.to_dict()
    }
