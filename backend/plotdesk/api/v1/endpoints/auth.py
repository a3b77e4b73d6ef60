from fastapi import APIRouter, Depends, Request

from plotdesk.core.logging_config import set_user_id
from plotdesk.core.rate_limiter import auth_rate_limit, strict_rate_limit
from plotdesk.core.security import auth_service
from plotdesk.modules.auth.dependencies import get_current_user
from plotdesk.schemas import AuthUser
from plotdesk.schemas.auth import (
    ChangePasswordRequest,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    ResetPasswordRequest,
)
from plotdesk.services import UserService
from plotdesk.api.deps import action_response, get_user_service

router = APIRouter()


@router.post("/login", response_model=LoginResponse, response_model_exclude_none=True)
@auth_rate_limit()
async def login(
    request: Request,
    credentials: LoginRequest,
    users: UserService = Depends(get_user_service)
):
    """Login with email and password (rate limited: 5/min)"""
    identity = await users.authenticate_user(credentials.email, credentials.password)
    set_user_id(identity.id)

    return LoginResponse(token=auth_service.mint(identity), user=identity)


@router.post("/register", status_code=201)
@strict_rate_limit()
async def register(
    request: Request,
    body: RegisterRequest,
    users: UserService = Depends(get_user_service)
):
    """Public sign-up, answers with a session token on success (rate limited: 3/min)"""
    return action_response(await users.register_user(body.email, body.password))


@router.post("/change-password")
async def change_password(
    body: ChangePasswordRequest,
    current_user: AuthUser = Depends(get_current_user),
    users: UserService = Depends(get_user_service)
):
    """Change the signed-in user's own password"""
    return action_response(
        await users.change_password(current_user.id, body.current_password, body.new_password)
    )


@router.post("/reset-password")
@strict_rate_limit()
async def reset_password(
    request: Request,
    body: ResetPasswordRequest,
    users: UserService = Depends(get_user_service)
):
    """Reset a password with the configured security answer (rate limited: 3/min)"""
    return action_response(
        await users.reset_password(body.email, body.security_answer, body.new_password)
    )


@router.get("/me", response_model=AuthUser)
async def get_current_user_info(
    current_user: AuthUser = Depends(get_current_user)
):
    """Identity carried by the session token"""
    return current_user

