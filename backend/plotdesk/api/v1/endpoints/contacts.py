from fastapi import APIRouter, Body, Depends
from typing import Any, Dict, List

from plotdesk.core.exceptions import ContactNotFoundError
from plotdesk.modules.auth.dependencies import require_owner
from plotdesk.schemas import Contact
from plotdesk.services import ContactService
from plotdesk.api.deps import action_response, get_contact_service

router = APIRouter(dependencies=[Depends(require_owner)])


@router.get("", response_model=List[Contact], response_model_exclude_none=True)
async def list_contacts(contacts: ContactService = Depends(get_contact_service)):
    """Sellers and buyers, newest first"""
    return await contacts.get_contacts()


@router.get("/{contact_id}", response_model=Contact, response_model_exclude_none=True)
async def get_contact(
    contact_id: str,
    contacts: ContactService = Depends(get_contact_service)
):
    contact = await contacts.get_contact(contact_id)
    if contact is None:
        raise ContactNotFoundError(contact_id)
    return contact


@router.post("", status_code=201)
async def create_contact(
    fields: Dict[str, Any] = Body(...),
    contacts: ContactService = Depends(get_contact_service)
):
    return action_response(await contacts.create_contact(fields))


@router.put("/{contact_id}")
async def update_contact(
    contact_id: str,
    fields: Dict[str, Any] = Body(...),
    contacts: ContactService = Depends(get_contact_service)
):
    return action_response(await contacts.update_contact(contact_id, fields))


@router.delete("/{contact_id}")
async def delete_contact(
    contact_id: str,
    contacts: ContactService = Depends(get_contact_service)
):
    return action_response(await contacts.delete_contact(contact_id))
