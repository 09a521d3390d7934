"""Conversions at the persistence boundary.

Timestamps are timezone-aware UTC datetimes in the domain and
``YYYY-MM-DD HH:MM:SS[.ffffff]`` UTC strings in stored rows. Structured
fields are JSON strings validated against pydantic schemas; a malformed
blob reads back as an empty list and is logged.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

import pydantic
from pydantic import BaseModel, TypeAdapter

from atelier.domain.exceptions import PersistenceError

logger = logging.getLogger(__name__)

STORAGE_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_storage_time(value: datetime | None) -> str | None:
    if value is None:
        return None
    utc = as_utc(value)
    text = utc.strftime(STORAGE_TIME_FORMAT)
    if utc.microsecond:
        text += f".{utc.microsecond:06d}"
    return text


def from_storage_time(raw: str | None) -> datetime | None:
    """Parse a stored timestamp. Also accepts ISO-8601 with a ``T``."""
    if raw is None or raw == "":
        return None
    try:
        return as_utc(datetime.fromisoformat(raw))
    except ValueError as exc:
        raise PersistenceError(f"Invalid stored timestamp {raw!r}") from exc


def encode_blob(records: list[BaseModel]) -> str:
    return json.dumps([r.model_dump(mode="json") for r in records])


def decode_blob(
    raw: Any,
    adapter: TypeAdapter,
    *,
    record_id: str,
    field: str,
) -> list:
    """Validate a stored blob, degrading to an empty list when malformed."""
    if raw is None or raw == "":
        return []
    try:
        if isinstance(raw, str):
            return adapter.validate_json(raw)
        return adapter.validate_python(raw)
    except pydantic.ValidationError as exc:
        logger.warning(
            "Malformed %s on record %s, reading it as empty: %s",
            field,
            record_id,
            exc.errors(include_url=False)[:1],
        )
        return []
