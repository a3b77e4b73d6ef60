"""Inquiry Service - visitor messages about a plot"""
from datetime import datetime
from typing import Any, Dict, List

from plotdesk.core.constants import Messages, Views
from plotdesk.core.exceptions import ValidationError
from plotdesk.core.logging_config import logger
from plotdesk.schemas import ActionState, Inquiry, InquiryForm
from plotdesk.services.actions import action
from plotdesk.services.validation import validate_form
from plotdesk.services.view_cache import ViewCache, view_cache
from plotdesk.storage.base import DataStore


class InquiryService:

    def __init__(self, store: DataStore, cache: ViewCache = view_cache):
        self.store = store
        self.cache = cache

    async def get_inquiries(self) -> List[Inquiry]:
        """All inquiries, newest first"""
        cached = self.cache.get(Views.INQUIRIES)
        if cached is not None:
            return cached

        inquiries = list(reversed(await self.store.list(Inquiry)))
        self.cache.set(Views.INQUIRIES, inquiries)
        return inquiries

    @action("save_inquiry")
    async def save_inquiry(self, fields: Dict[str, Any]) -> ActionState:
        form, errors = validate_form(InquiryForm, fields)
        if form is None:
            raise ValidationError(Messages.INVALID_INPUT, errors)

        async with self.store.lock(Inquiry):
            inquiry = await self.store.create(Inquiry, {**form.model_dump(), "received_at": datetime.utcnow()})

        logger.info(f"[Inquiries] Inquiry {inquiry.id} about plot {inquiry.plot_number}")
        self.cache.invalidate(Views.DASHBOARD, Views.INQUIRIES)
        return ActionState.ok(Messages.INQUIRY_SUBMITTED, status_code=201, id=inquiry.id)
