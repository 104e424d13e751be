"""
Column defaults and serialization helpers shared by the models.
"""
import uuid
from datetime import datetime, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


def isoformat(value):
    return value.isoformat() if value else None
