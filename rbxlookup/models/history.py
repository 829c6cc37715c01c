"""Search-history log models."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SearchType(str, Enum):  # noqa: UP042 - StrEnum requires Python 3.11+
    """What kind of query a history entry records."""

    USERNAME = "username"


def utc_now_iso() -> str:
    """Current time as an ISO-8601 UTC string (the format every timestamp uses)."""
    return datetime.now(tz=timezone.utc).isoformat()  # noqa: UP017


def parse_iso_timestamp(value: str) -> datetime | None:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC.

    Accepts a trailing ``Z``.  Returns ``None`` when *value* is not ISO-8601.
    """
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)  # noqa: UP017
    return parsed


class SearchHistoryEntry(BaseModel):
    """One append-only search-log row.

    ``id`` is ``None`` until the store assigns it.  ``timestamp`` is always
    stored in the :func:`utc_now_iso` format so that it sorts as text.
    """

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    id: int | None = None
    query: str
    type: SearchType = SearchType.USERNAME
    timestamp: str = Field(default_factory=utc_now_iso)
    success: bool = True

    @field_validator("timestamp")
    @classmethod
    def _normalize_timestamp(cls, value: str) -> str:
        parsed = parse_iso_timestamp(value)
        if parsed is None:
            raise ValueError(f"not an ISO-8601 timestamp: {value!r}")
        return parsed.astimezone(timezone.utc).isoformat()  # noqa: UP017
