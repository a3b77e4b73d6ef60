from plotdesk.modules.auth.dependencies import get_current_user, get_optional_user, require_owner

__all__ = ["get_current_user", "get_optional_user", "require_owner"]
