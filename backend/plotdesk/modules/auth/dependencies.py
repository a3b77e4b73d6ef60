from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from typing import Optional

from plotdesk.core.constants import Messages, UserRole
from plotdesk.core.logging_config import set_user_id
from plotdesk.core.security import auth_service
from plotdesk.schemas import AuthUser, User
from plotdesk.storage import DataStore, get_store

security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_optional_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    store: DataStore = Depends(get_store),
) -> Optional[AuthUser]:
    """Identity for the bearer token, None when absent or invalid"""
    if credentials is None:
        return None

    identity = auth_service.verify(credentials.credentials)
    if identity is None:
        return None

    # Tokens outlive deleted users; the account must still exist
    user = await store.get(User, identity.id)
    if user is None:
        return None

    set_user_id(user.id)
    request.state.user_id = user.id
    return AuthUser(id=user.id, email=user.email, role=user.role)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    current_user: Optional[AuthUser] = Depends(get_optional_user),
) -> AuthUser:
    """Get current authenticated user"""
    if credentials is None:
        raise _unauthorized("Not authenticated")
    if current_user is None:
        raise _unauthorized("Invalid or expired token")
    return current_user


async def require_owner(
    current_user: AuthUser = Depends(get_current_user)
) -> AuthUser:
    """Dashboard endpoints are for the Owner only"""
    if current_user.role != UserRole.OWNER:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=Messages.UNAUTHORIZED
        )
    return current_user
