"""
Repository interface shared by the file and database backends.

Every backend stores the same collections with the same record shapes;
ids are opaque strings assigned by the backend on create.
"""
import asyncio
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Type, TypeVar

from plotdesk.schemas import Contact, Inquiry, PasswordRecord, Plot, Registration, User
from plotdesk.schemas.base import CamelModel

R = TypeVar("R", bound=CamelModel)

# Record type -> collection name (file name / table name)
COLLECTIONS: Dict[Type[CamelModel], str] = {
    Plot: "plots",
    User: "users",
    Inquiry: "inquiries",
    Contact: "contacts",
    Registration: "registrations",
}
PASSWORDS = "passwords"


def collection_name(model: Type[CamelModel]) -> str:
    try:
        return COLLECTIONS[model]
    except KeyError:
        raise ValueError(f"{model.__name__} is not a stored collection")


class DataStore(ABC):
    """
    Persistence for all collections.

    list() returns records oldest first. lock(model) gives callers a
    per-collection lock to hold across a uniqueness check and the write
    that depends on it.
    """

    backend: str = "abstract"

    def __init__(self) -> None:
        self._locks: Dict[str, asyncio.Lock] = {}

    def lock(self, model: Type[CamelModel]) -> asyncio.Lock:
        name = collection_name(model)
        if name not in self._locks:
            self._locks[name] = asyncio.Lock()
        return self._locks[name]

    async def init(self) -> None:
        """Prepare the backend (create directories / tables)"""

    async def close(self) -> None:
        """Release backend resources"""

    @abstractmethod
    async def list(self, model: Type[R]) -> List[R]:
        ...

    @abstractmethod
    async def get(self, model: Type[R], record_id: str) -> Optional[R]:
        ...

    @abstractmethod
    async def create(self, model: Type[R], data: Dict[str, Any]) -> R:
        """Persist a new record from field data (without id) and return it"""

    @abstractmethod
    async def update(self, record: R) -> Optional[R]:
        """Replace the stored record with the same id, None if it is gone"""

    @abstractmethod
    async def delete(self, model: Type[CamelModel], record_id: str) -> bool:
        ...

    @abstractmethod
    async def get_password(self, email: str) -> Optional[PasswordRecord]:
        ...

    @abstractmethod
    async def set_password(self, email: str, hashed_password: str) -> PasswordRecord:
        """Insert or replace the credential for email"""

    @abstractmethod
    async def delete_password(self, email: str) -> bool:
        ...

    @abstractmethod
    async def mark_registrations_read(self) -> int:
        """Clear isNew on every registration in one write, return how many changed"""
