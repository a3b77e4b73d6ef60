from fastapi import APIRouter, Depends
from typing import List

from plotdesk.modules.auth.dependencies import require_owner
from plotdesk.schemas import AuthUser, User
from plotdesk.schemas.auth import AdminPasswordRequest, RegisterRequest
from plotdesk.services import UserService
from plotdesk.api.deps import action_response, get_user_service

router = APIRouter()


@router.get("", response_model=List[User])
async def list_users(
    current_user: AuthUser = Depends(require_owner),
    users: UserService = Depends(get_user_service)
):
    return await users.get_users()


@router.post("", status_code=201)
async def create_user(
    body: RegisterRequest,
    current_user: AuthUser = Depends(require_owner),
    users: UserService = Depends(get_user_service)
):
    """Owner adds a dashboard login"""
    return action_response(await users.create_user(body.email, body.password))


@router.delete("/{user_id}")
async def delete_user(
    user_id: str,
    current_user: AuthUser = Depends(require_owner),
    users: UserService = Depends(get_user_service)
):
    """Delete a login and its credential; the Owner account is refused"""
    return action_response(await users.delete_user(user_id))


@router.post("/{user_id}/password")
async def change_user_password(
    user_id: str,
    body: AdminPasswordRequest,
    current_user: AuthUser = Depends(require_owner),
    users: UserService = Depends(get_user_service)
):
    return action_response(await users.change_user_password(user_id, body.new_password))
