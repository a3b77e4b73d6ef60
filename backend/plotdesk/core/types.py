"""Identifier helpers shared by the storage backends"""
import uuid
from typing import Optional


def generate_uuid() -> str:
    """Generate a UUID string"""
    return str(uuid.uuid4())


def parse_int_id(record_id: str) -> Optional[int]:
    """Native integer key for an opaque string id, None if it cannot be one"""
    if not isinstance(record_id, str) or not record_id.isdigit():
        return None
    return int(record_id)
