"""
Persistence backends.

The backend is picked once per process from STORAGE_BACKEND; request
handlers receive it through the get_store() dependency.
"""
from typing import Optional

from plotdesk.core.config import Settings, settings
from plotdesk.storage.base import DataStore, COLLECTIONS, PASSWORDS, collection_name
from plotdesk.storage.file_store import FileStore
from plotdesk.storage.sql_store import SqlStore

_store: Optional[DataStore] = None


def create_store(config: Settings = settings) -> DataStore:
    """Build the backend named by configuration"""
    backend = config.STORAGE_BACKEND.lower()
    if backend == "file":
        return FileStore(config.data_path)
    if backend == "database":
        return SqlStore(config.DATABASE_URL)
    raise ValueError(f"Unknown STORAGE_BACKEND '{config.STORAGE_BACKEND}' (expected 'file' or 'database')")


def get_store() -> DataStore:
    """Dependency for getting the process-wide store"""
    global _store
    if _store is None:
        _store = create_store()
    return _store


def set_store(store: Optional[DataStore]) -> None:
    global _store
    _store = store


__all__ = [
    "DataStore",
    "FileStore",
    "SqlStore",
    "COLLECTIONS",
    "PASSWORDS",
    "collection_name",
    "create_store",
    "get_store",
    "set_store",
]
