"""
Owner account seeding.

Run with: python -m plotdesk.db.seed_data
"""
import asyncio
from typing import Optional

from plotdesk.core.config import settings
from plotdesk.core.logging_config import logger
from plotdesk.schemas import User
from plotdesk.services.user_service import UserService
from plotdesk.storage import DataStore, create_store


async def seed_owner(
    store: DataStore,
    email: Optional[str] = None,
    password: Optional[str] = None,
) -> Optional[User]:
    """Create (or promote) the Owner account from OWNER_EMAIL / OWNER_PASSWORD"""
    return await UserService(store).ensure_owner(
        email or settings.OWNER_EMAIL,
        password if password is not None else settings.OWNER_PASSWORD,
    )


async def main():
    store = create_store()
    await store.init()
    try:
        owner = await seed_owner(store)
        if owner:
            logger.info(f"[Seed] Owner account: {owner.email}")
    finally:
        await store.close()


if __name__ == "__main__":
    asyncio.run(main())
