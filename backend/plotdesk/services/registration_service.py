"""
Registration Service - leads from the public registration form

New registrations carry isNew=True until the owner opens the
registrations page, which clears the flag on all of them in one write.
"""
from datetime import datetime
from typing import Any, Dict, List

from plotdesk.core.constants import Messages, Views
from plotdesk.core.exceptions import ConflictError, ValidationError
from plotdesk.core.logging_config import logger
from plotdesk.schemas import ActionState, Registration, RegistrationForm
from plotdesk.services.actions import action
from plotdesk.services.validation import validate_form
from plotdesk.services.view_cache import ViewCache, view_cache
from plotdesk.storage.base import DataStore


class RegistrationService:
    """Registration pipelines bound to a store"""

    def __init__(self, store: DataStore, cache: ViewCache = view_cache):
        self.store = store
        self.cache = cache

    async def get_registrations(self) -> List[Registration]:
        """All registrations, newest first"""
        return list(reversed(await self.store.list(Registration)))

    async def get_new_registration_count(self) -> int:
        return sum(1 for registration in await self.store.list(Registration) if registration.is_new)

    def _invalidate(self) -> None:
        self.cache.invalidate(Views.REGISTRATIONS)
        # The unread badge lives in the dashboard layout
        self.cache.invalidate(Views.DASHBOARD, layout=True)

    @action("create_registration")
    async def create_registration(self, fields: Dict[str, Any]) -> ActionState:
        form, errors = validate_form(RegistrationForm, fields)
        if form is None:
            raise ValidationError(Messages.REGISTRATION_INVALID, errors)

        async with self.store.lock(Registration):
            email = form.email.lower()
            if any(r.email.lower() == email for r in await self.store.list(Registration)):
                raise ConflictError(Messages.REGISTRATION_EXISTS)

            registration = await self.store.create(
                Registration,
                {**form.model_dump(), "created_at": datetime.utcnow(), "is_new": True},
            )

        logger.info(f"[Registrations] New registration {registration.id}")
        self._invalidate()
        return ActionState.ok(
            Messages.REGISTRATION_SUBMITTED,
            status_code=201,
            id=registration.id,
            registration=registration,
        )

    @action("mark_registrations_as_read")
    async def mark_registrations_as_read(self) -> ActionState:
        """Clear isNew everywhere; nothing is written or invalidated when nothing is new"""
        async with self.store.lock(Registration):
            changed = await self.store.mark_registrations_read()

        if changed:
            logger.info(f"[Registrations] Marked {changed} registrations as read")
            self._invalidate()
        return ActionState.ok(Messages.REGISTRATIONS_MARKED_READ, count=changed)
