"""
Copy every collection from one store into another.

Used to move a JSON file store into the database backend. Records get
fresh ids in the target; credentials follow the users they belong to.
"""
from typing import Dict, Type

from plotdesk.core.logging_config import logger
from plotdesk.schemas import Contact, Inquiry, Plot, Registration, User
from plotdesk.schemas.base import CamelModel
from plotdesk.storage import PASSWORDS, DataStore, collection_name

MIGRATED_MODELS = (Plot, User, Inquiry, Contact, Registration)


async def _clear(store: DataStore, model: Type[CamelModel]) -> int:
    """Remove every record of a collection, with the credentials of removed users"""
    existing = await store.list(model)
    for record in existing:
        await store.delete(model, record.id)
        if model is User:
            await store.delete_password(record.email)
    return len(existing)


async def migrate_store(source: DataStore, target: DataStore, force: bool = False) -> Dict[str, int]:
    """
    Returns the number of records copied per collection.

    A collection that already holds records in the target is skipped
    unless force is set, in which case the target collection is replaced
    by the source one. Re-running never duplicates data.
    """
    copied: Dict[str, int] = {}

    for model in MIGRATED_MODELS:
        name = collection_name(model)
        records = await source.list(model)

        if await target.list(model):
            if not force:
                logger.warning(f"[Migrate] Skipping {name}: target already has records")
                copied[name] = 0
                continue
            removed = await _clear(target, model)
            logger.warning(f"[Migrate] Replacing {name}: removed {removed} existing records")

        for record in records:
            await target.create(model, record.model_dump(exclude={"id"}))
        copied[name] = len(records)
        logger.info(f"[Migrate] Copied {len(records)} {name}")

    credentials = 0
    for user in await source.list(User):
        credential = await source.get_password(user.email)
        if credential is not None and (force or await target.get_password(user.email) is None):
            await target.set_password(credential.email, credential.hashed_password)
            credentials += 1
    copied[PASSWORDS] = credentials
    logger.info(f"[Migrate] Copied {credentials} {PASSWORDS}")

    return copied
