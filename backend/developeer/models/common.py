"""Helpers shared by all Developeer models."""

from datetime import datetime, timezone
import uuid

from pydantic import ConfigDict
from pydantic.alias_generators import to_camel

# snake_case in Python and MongoDB, camelCase on the wire
CAMEL_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    extra="ignore",
)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def new_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:12].upper()}"
