"""User-profile domain models.

All models are frozen Pydantic v2 models.  Python attributes are snake_case;
JSON (both the Roblox payloads and our API responses) uses camelCase, so the
profile-facing models share an ``alias_generator`` and accept either form on
input.

Key relationships:
    - NormalizedUserProfile is the validated shape of the Roblox user payload
      and is stored as a JSON blob inside CachedUserRecord.user_data.
    - CachedUserUpdate is the partial-upsert payload for the user cache.
    - UserLookupResult is what UserResolver returns and the API serves.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr
from pydantic.alias_generators import to_camel

# Sentinel used by the stats endpoint when counts could not be fetched.
NOT_AVAILABLE = "N/A"

_CAMEL_CONFIG = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class UserStats(BaseModel):
    """Friend / follower / following counts for one user."""

    model_config = _CAMEL_CONFIG

    friends: StrictInt
    followers: StrictInt
    following: StrictInt

    @classmethod
    def zero(cls) -> UserStats:
        return cls(friends=0, followers=0, following=0)


class NormalizedUserProfile(BaseModel):
    """Validated and default-filled Roblox user profile.

    ``id`` and ``name`` are required and strictly typed; everything else is
    optional and filled with its default when absent upstream.
    """

    model_config = _CAMEL_CONFIG

    id: StrictInt
    name: StrictStr
    display_name: StrictStr | None = None
    description: StrictStr = ""
    created: StrictStr | None = None
    is_banned: StrictBool = False
    external_app_display_name: StrictStr | None = None
    has_verified_badge: StrictBool = False
    previous_usernames: list[StrictStr] | None = None
    stats: UserStats | None = None

    def to_document(self) -> dict[str, Any]:
        """Return the camelCase JSON document stored in the cache."""
        return self.model_dump(mode="json", by_alias=True)


class CachedUserRecord(BaseModel):
    """One row of the user cache as stored in SQLite."""

    model_config = ConfigDict(frozen=True)

    id: int | None = None
    user_id: str
    user_data: dict[str, Any]
    avatar_url: str | None = None
    timestamp: str
    is_terminated: bool = False


class CachedUserUpdate(BaseModel):
    """Partial upsert payload for the user cache.

    Only fields that were explicitly set are written when a record already
    exists (``model_dump(exclude_unset=True)``), so ``CachedUserUpdate(
    user_id="1", avatar_url=None)`` clears the avatar but keeps ``user_data``.
    """

    model_config = ConfigDict(frozen=True)

    user_id: str
    user_data: dict[str, Any] | None = None
    avatar_url: str | None = None
    timestamp: str | None = None
    is_terminated: bool | None = None

    def provided_fields(self) -> dict[str, Any]:
        """Return the explicitly-set fields other than ``user_id``."""
        fields = self.model_dump(exclude_unset=True)
        fields.pop("user_id", None)
        return fields


class UserLookupResult(BaseModel):
    """Result of resolving one user id.

    ``stats`` and ``previous_usernames`` are only populated on the
    terminated-account path and are omitted from the payload otherwise.
    """

    model_config = _CAMEL_CONFIG

    source: Literal["cache", "api"]
    data: dict[str, Any]
    avatar_url: str | None = None
    is_terminated: bool = False
    stats: UserStats | None = None
    previous_usernames: list[str] | None = None

    def to_payload(self) -> dict[str, Any]:
        payload = self.model_dump(mode="json", by_alias=True)
        for key in ("stats", "previousUsernames"):
            if payload[key] is None:
                payload.pop(key)
        return payload


class StatsSummary(BaseModel):
    """Response of the stats aggregator: three counts or the ``"N/A"`` triple."""

    model_config = ConfigDict(frozen=True)

    friends: int | Literal["N/A"] = Field(description="Friend count or 'N/A'")
    followers: int | Literal["N/A"] = Field(description="Follower count or 'N/A'")
    following: int | Literal["N/A"] = Field(description="Following count or 'N/A'")

    @classmethod
    def from_stats(cls, stats: UserStats) -> StatsSummary:
        return cls(friends=stats.friends, followers=stats.followers, following=stats.following)

    @classmethod
    def unavailable(cls) -> StatsSummary:
        return cls(friends=NOT_AVAILABLE, followers=NOT_AVAILABLE, following=NOT_AVAILABLE)
