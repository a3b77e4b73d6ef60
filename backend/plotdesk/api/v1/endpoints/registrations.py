from fastapi import APIRouter, Body, Depends
from typing import Any, Dict, List

from plotdesk.core.logging_config import logger
from plotdesk.modules.auth.dependencies import require_owner
from plotdesk.schemas import AuthUser, Registration
from plotdesk.services import RegistrationService
from plotdesk.api.deps import action_response, get_registration_service

router = APIRouter()


@router.post("", status_code=201)
async def create_registration(
    fields: Dict[str, Any] = Body(...),
    registrations: RegistrationService = Depends(get_registration_service)
):
    """Public registration form"""
    return action_response(await registrations.create_registration(fields))


@router.get("", response_model=List[Registration], response_model_exclude_none=True)
async def list_registrations(
    current_user: AuthUser = Depends(require_owner),
    registrations: RegistrationService = Depends(get_registration_service)
):
    """
    Registrations newest first, as they were before this visit.

    Opening the list marks every registration as read.
    """
    listing = await registrations.get_registrations()
    state = await registrations.mark_registrations_as_read()
    if not state.success:
        logger.warning(f"[Registrations] Could not mark registrations as read: {state.message}")
    return listing


@router.get("/new-count")
async def new_registration_count(
    current_user: AuthUser = Depends(require_owner),
    registrations: RegistrationService = Depends(get_registration_service)
):
    return {"count": await registrations.get_new_registration_count()}
