from fastapi import APIRouter, Body, Depends
from typing import Any, Dict, List

from plotdesk.modules.auth.dependencies import require_owner
from plotdesk.schemas import AuthUser, Inquiry
from plotdesk.services import InquiryService
from plotdesk.api.deps import action_response, get_inquiry_service

router = APIRouter()


@router.post("", status_code=201)
async def submit_inquiry(
    fields: Dict[str, Any] = Body(...),
    inquiries: InquiryService = Depends(get_inquiry_service)
):
    """Visitor question about a plot"""
    return action_response(await inquiries.save_inquiry(fields))


@router.get("", response_model=List[Inquiry])
async def list_inquiries(
    current_user: AuthUser = Depends(require_owner),
    inquiries: InquiryService = Depends(get_inquiry_service)
):
    return await inquiries.get_inquiries()
