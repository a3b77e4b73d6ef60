"""
SQL backend through SQLAlchemy async.

Tables use integer primary keys; the string id seen by the rest of the
application is str(pk), and an id that is not all digits simply does not
exist here.
"""
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, AsyncIterator, Dict, List, Optional, Type

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from plotdesk import models
from plotdesk.core.database import build_engine, build_session_factory, get_database_url, init_db
from plotdesk.core.exceptions import StorageError
from plotdesk.core.logging_config import logger
from plotdesk.core.types import parse_int_id
from plotdesk.schemas import Contact, Inquiry, PasswordRecord, Plot, Registration, User
from plotdesk.schemas.base import CamelModel
from plotdesk.storage.base import PASSWORDS, DataStore, R, collection_name

TABLES: Dict[Type[CamelModel], Any] = {
    Plot: models.Plot,
    User: models.User,
    Inquiry: models.Inquiry,
    Contact: models.Contact,
    Registration: models.Registration,
}


class SqlStore(DataStore):
    """Stores every collection as a table in DATABASE_URL"""

    backend = "database"

    def __init__(self, database_url: Optional[str] = None):
        super().__init__()
        self.database_url = get_database_url(database_url)
        self.engine = build_engine(self.database_url)
        self.session_factory = build_session_factory(self.engine)

    async def init(self) -> None:
        try:
            await init_db(self.engine)
        except SQLAlchemyError as e:
            logger.error(f"[Storage] Failed to create tables: {e}")
            raise StorageError("Failed to initialise database") from e
        logger.info(f"[Storage] Database store ready ({self.engine.url.get_backend_name()})")

    async def close(self) -> None:
        await self.engine.dispose()

    @asynccontextmanager
    async def _session(self, name: str) -> AsyncIterator[AsyncSession]:
        async with self.session_factory() as session:
            try:
                yield session
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error(f"[Storage] Database error on {name}: {e}")
                raise StorageError(f"Failed to access {name} data", collection=name) from e

    @staticmethod
    def _to_record(model: Type[R], row: Any) -> R:
        values = {column.key: getattr(row, column.key) for column in row.__table__.columns}
        values["id"] = str(row.id)
        return model.model_validate(values)

    @staticmethod
    def _column_values(record: CamelModel, table: Any) -> Dict[str, Any]:
        columns = {column.key for column in table.__table__.columns}
        return {k: v for k, v in record.model_dump(exclude={"id"}).items() if k in columns}

    # ========== Collections ==========

    async def list(self, model: Type[R]) -> List[R]:
        name = collection_name(model)
        table = TABLES[model]

        async with self._session(name) as session:
            result = await session.execute(select(table).order_by(table.id))
            rows = result.scalars().all()

        logger.log_storage_event("read", name, records=len(rows))
        return [self._to_record(model, row) for row in rows]

    async def get(self, model: Type[R], record_id: str) -> Optional[R]:
        name = collection_name(model)
        pk = parse_int_id(record_id)
        if pk is None:
            return None

        async with self._session(name) as session:
            row = await session.get(TABLES[model], pk)

        return self._to_record(model, row) if row is not None else None

    async def create(self, model: Type[R], data: Dict[str, Any]) -> R:
        name = collection_name(model)
        table = TABLES[model]
        # Validate before touching the database, the real id comes from the insert
        draft = model.model_validate({**data, "id": "0"})

        async with self._session(name) as session:
            row = table(**self._column_values(draft, table))
            session.add(row)
            await session.commit()
            await session.refresh(row)

        logger.log_storage_event("insert", name, records=1)
        return self._to_record(model, row)

    async def update(self, record: R) -> Optional[R]:
        model = type(record)
        name = collection_name(model)
        table = TABLES[model]
        pk = parse_int_id(record.id)
        if pk is None:
            return None

        async with self._session(name) as session:
            row = await session.get(table, pk)
            if row is None:
                return None
            for key, value in self._column_values(record, table).items():
                setattr(row, key, value)
            await session.commit()

        logger.log_storage_event("update", name, records=1)
        return record

    async def delete(self, model: Type[CamelModel], record_id: str) -> bool:
        name = collection_name(model)
        table = TABLES[model]
        pk = parse_int_id(record_id)
        if pk is None:
            return False

        async with self._session(name) as session:
            result = await session.execute(delete(table).where(table.id == pk))
            await session.commit()

        logger.log_storage_event("delete", name, records=result.rowcount)
        return result.rowcount > 0

    # ========== Passwords ==========

    async def get_password(self, email: str) -> Optional[PasswordRecord]:
        async with self._session(PASSWORDS) as session:
            result = await session.execute(
                select(models.Password).where(func.lower(models.Password.email) == email.lower())
            )
            row = result.scalar_one_or_none()

        if row is None:
            return None
        return PasswordRecord(email=row.email, hashed_password=row.hashed_password, updated_at=row.updated_at)

    async def set_password(self, email: str, hashed_password: str) -> PasswordRecord:
        now = datetime.utcnow()

        async with self._session(PASSWORDS) as session:
            result = await session.execute(
                select(models.Password).where(func.lower(models.Password.email) == email.lower())
            )
            row = result.scalar_one_or_none()
            if row is None:
                session.add(models.Password(email=email, hashed_password=hashed_password, updated_at=now))
            else:
                row.hashed_password = hashed_password
                row.updated_at = now
            await session.commit()

        logger.log_storage_event("upsert", PASSWORDS, records=1)
        return PasswordRecord(email=email, hashed_password=hashed_password, updated_at=now)

    async def delete_password(self, email: str) -> bool:
        async with self._session(PASSWORDS) as session:
            result = await session.execute(
                delete(models.Password).where(func.lower(models.Password.email) == email.lower())
            )
            await session.commit()

        return result.rowcount > 0

    # ========== Registrations ==========

    async def mark_registrations_read(self) -> int:
        name = collection_name(Registration)

        async with self._session(name) as session:
            result = await session.execute(
                update(models.Registration)
                .where(models.Registration.is_new.is_(True))
                .values(is_new=False)
            )
            await session.commit()

        if result.rowcount:
            logger.log_storage_event("update", name, records=result.rowcount)
        return result.rowcount
