"""
Contact Service - sellers and buyers kept by the owner

Contact emails are unique case-insensitively.
"""
from typing import Any, Dict, List, Optional

from plotdesk.core.constants import Messages, Views
from plotdesk.core.exceptions import ConflictError, ContactNotFoundError, ValidationError
from plotdesk.core.logging_config import logger
from plotdesk.schemas import ActionState, Contact, ContactForm
from plotdesk.services.actions import action
from plotdesk.services.validation import validate_form
from plotdesk.services.view_cache import ViewCache, view_cache
from plotdesk.storage.base import DataStore


class ContactService:
    """Contact pipelines bound to a store"""

    def __init__(self, store: DataStore, cache: ViewCache = view_cache):
        self.store = store
        self.cache = cache

    async def get_contacts(self) -> List[Contact]:
        """All contacts, newest first"""
        cached = self.cache.get(Views.CONTACTS)
        if cached is not None:
            return cached

        contacts = list(reversed(await self.store.list(Contact)))
        self.cache.set(Views.CONTACTS, contacts)
        return contacts

    async def get_contact(self, contact_id: str) -> Optional[Contact]:
        return await self.store.get(Contact, contact_id)

    async def _email_taken(self, email: str, exclude_id: Optional[str] = None) -> bool:
        email = email.lower()
        return any(
            contact.email.lower() == email and contact.id != exclude_id
            for contact in await self.store.list(Contact)
        )

    def _invalidate(self, contact_id: Optional[str] = None) -> None:
        paths = [Views.DASHBOARD, Views.CONTACTS]
        if contact_id:
            paths.append(Views.contact(contact_id))
        self.cache.invalidate(*paths)

    @action("create_contact")
    async def create_contact(self, fields: Dict[str, Any]) -> ActionState:
        form, errors = validate_form(ContactForm, fields)
        if form is None:
            raise ValidationError(Messages.CONTACT_CREATE_INVALID, errors)

        async with self.store.lock(Contact):
            if await self._email_taken(form.email):
                raise ConflictError(Messages.CONTACT_EXISTS)
            contact = await self.store.create(Contact, form.model_dump())

        logger.info(f"[Contacts] Created {contact.type.value} contact {contact.id}")
        self._invalidate()
        return ActionState.ok(Messages.CONTACT_CREATED, status_code=201, id=contact.id)

    @action("update_contact")
    async def update_contact(self, contact_id: str, fields: Dict[str, Any]) -> ActionState:
        form, errors = validate_form(ContactForm, fields)
        if form is None:
            raise ValidationError(Messages.CONTACT_UPDATE_INVALID, errors)

        async with self.store.lock(Contact):
            if await self._email_taken(form.email, exclude_id=contact_id):
                raise ConflictError(Messages.CONTACT_EXISTS_OTHER)

            # Full replacement: notes left blank are cleared
            if await self.store.update(Contact(id=contact_id, **form.model_dump())) is None:
                raise ContactNotFoundError(contact_id)

        logger.info(f"[Contacts] Updated contact {contact_id}")
        self._invalidate(contact_id)
        return ActionState.ok(Messages.CONTACT_UPDATED, id=contact_id)

    @action("delete_contact")
    async def delete_contact(self, contact_id: str) -> ActionState:
        async with self.store.lock(Contact):
            if not await self.store.delete(Contact, contact_id):
                raise ContactNotFoundError(contact_id)

        logger.info(f"[Contacts] Deleted contact {contact_id}")
        self._invalidate(contact_id)
        return ActionState.ok(Messages.CONTACT_DELETED)
