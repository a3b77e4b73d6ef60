"""
JSON flat-file backend.

Each collection is one file holding the full array of records. A missing
file reads as an empty collection; a file that exists but cannot be read
or parsed raises StorageError. Writes go to a temp file that replaces the
original, so readers never see a half-written array.
"""
import asyncio
import json
import uuid
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Type

import aiofiles
import aiofiles.os

from plotdesk.core.exceptions import StorageError
from plotdesk.core.logging_config import logger
from plotdesk.core.types import generate_uuid
from plotdesk.schemas import PasswordRecord, Registration
from plotdesk.schemas.base import CamelModel
from plotdesk.storage.base import PASSWORDS, DataStore, R, collection_name


class FileStore(DataStore):
    """Stores every collection as <data_dir>/<collection>.json"""

    backend = "file"

    def __init__(self, data_dir: Path):
        super().__init__()
        self.data_dir = Path(data_dir)
        # Serialises read-modify-write per file, separate from the public lock()
        self._io_locks: Dict[str, asyncio.Lock] = {}

    def _path(self, name: str) -> Path:
        return self.data_dir / f"{name}.json"

    def _io_lock(self, name: str) -> asyncio.Lock:
        if name not in self._io_locks:
            self._io_locks[name] = asyncio.Lock()
        return self._io_locks[name]

    async def init(self) -> None:
        await aiofiles.os.makedirs(self.data_dir, exist_ok=True)
        logger.info(f"[Storage] File store ready at {self.data_dir}")

    # ========== Raw file access ==========

    async def _read(self, name: str) -> List[Dict[str, Any]]:
        path = self._path(name)
        try:
            async with aiofiles.open(path, "r", encoding="utf-8") as f:
                content = await f.read()
        except FileNotFoundError:
            return []
        except OSError as e:
            logger.error(f"[Storage] Failed to read {path}: {e}")
            raise StorageError(f"Failed to read {name} data", collection=name) from e

        if not content.strip():
            return []

        try:
            rows = json.loads(content)
        except json.JSONDecodeError as e:
            logger.error(f"[Storage] Corrupt data file {path}: {e}")
            raise StorageError(f"Corrupt {name} data", collection=name) from e

        if not isinstance(rows, list):
            logger.error(f"[Storage] Data file {path} does not contain an array")
            raise StorageError(f"Corrupt {name} data", collection=name)

        logger.log_storage_event("read", name, records=len(rows))
        return rows

    async def _write(self, name: str, rows: List[Dict[str, Any]]) -> None:
        path = self._path(name)
        tmp_path = path.with_name(f".{path.name}.{uuid.uuid4().hex[:8]}.tmp")
        payload = json.dumps(rows, indent=2, ensure_ascii=False, default=str)

        try:
            await aiofiles.os.makedirs(self.data_dir, exist_ok=True)
            async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
                await f.write(payload)
            await aiofiles.os.replace(tmp_path, path)
        except OSError as e:
            logger.error(f"[Storage] Failed to write {path}: {e}")
            try:
                await aiofiles.os.remove(tmp_path)
            except OSError:
                pass
            raise StorageError(f"Failed to write {name} data", collection=name) from e

        logger.log_storage_event("write", name, records=len(rows))

    @staticmethod
    def _dump(record: CamelModel) -> Dict[str, Any]:
        return record.model_dump(mode="json", by_alias=True, exclude_none=True)

    def _load(self, model: Type[R], row: Dict[str, Any], name: str) -> R:
        try:
            return model.model_validate(row)
        except ValueError as e:
            logger.error(f"[Storage] Invalid record in {name}: {e}")
            raise StorageError(f"Corrupt {name} data", collection=name) from e

    # ========== Collections ==========

    async def list(self, model: Type[R]) -> List[R]:
        name = collection_name(model)
        return [self._load(model, row, name) for row in await self._read(name)]

    async def get(self, model: Type[R], record_id: str) -> Optional[R]:
        for record in await self.list(model):
            if record.id == record_id:
                return record
        return None

    async def create(self, model: Type[R], data: Dict[str, Any]) -> R:
        name = collection_name(model)
        record = model.model_validate({**data, "id": generate_uuid()})

        async with self._io_lock(name):
            rows = await self._read(name)
            rows.append(self._dump(record))
            await self._write(name, rows)

        return record

    async def update(self, record: R) -> Optional[R]:
        name = collection_name(type(record))

        async with self._io_lock(name):
            rows = await self._read(name)
            for index, row in enumerate(rows):
                if row.get("id") == record.id:
                    rows[index] = self._dump(record)
                    await self._write(name, rows)
                    return record

        return None

    async def delete(self, model: Type[CamelModel], record_id: str) -> bool:
        name = collection_name(model)

        async with self._io_lock(name):
            rows = await self._read(name)
            remaining = [row for row in rows if row.get("id") != record_id]
            if len(remaining) == len(rows):
                return False
            await self._write(name, remaining)

        return True

    # ========== Passwords ==========

    async def get_password(self, email: str) -> Optional[PasswordRecord]:
        for row in await self._read(PASSWORDS):
            if str(row.get("email", "")).lower() == email.lower():
                return self._load(PasswordRecord, row, PASSWORDS)
        return None

    async def set_password(self, email: str, hashed_password: str) -> PasswordRecord:
        record = PasswordRecord(email=email, hashed_password=hashed_password, updated_at=datetime.utcnow())

        async with self._io_lock(PASSWORDS):
            rows = [
                row for row in await self._read(PASSWORDS)
                if str(row.get("email", "")).lower() != email.lower()
            ]
            rows.append(self._dump(record))
            await self._write(PASSWORDS, rows)

        return record

    async def delete_password(self, email: str) -> bool:
        async with self._io_lock(PASSWORDS):
            rows = await self._read(PASSWORDS)
            remaining = [row for row in rows if str(row.get("email", "")).lower() != email.lower()]
            if len(remaining) == len(rows):
                return False
            await self._write(PASSWORDS, remaining)

        return True

    # ========== Registrations ==========

    async def mark_registrations_read(self) -> int:
        name = collection_name(Registration)

        async with self._io_lock(name):
            rows = await self._read(name)
            changed = 0
            for row in rows:
                if row.get("isNew"):
                    row["isNew"] = False
                    changed += 1
            if changed:
                await self._write(name, rows)

        return changed
