"""Shapes of the secondary Roblox API payloads.

The primary profile payload is :class:`~rbxlookup.models.user.NormalizedUserProfile`;
the models here cover the avatar, status, relation-count, username-history
and username-lookup endpoints.  Unknown keys are ignored.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, StrictBool, StrictInt, StrictStr
from pydantic.alias_generators import to_camel

_CAMEL_CONFIG = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class Relation(str, Enum):  # noqa: UP042 - StrEnum requires Python 3.11+
    """Relation counters exposed by friends.roblox.com.

    Values are the URL path segments of the ``/v1/users/{id}/<relation>/count``
    endpoints.
    """

    FRIENDS = "friends"
    FOLLOWERS = "followers"
    FOLLOWING = "followings"


class UserStatus(BaseModel):
    """``GET /v1/users/{id}/status``."""

    model_config = _CAMEL_CONFIG

    status: StrictStr


class RelationCount(BaseModel):
    """``GET /v1/users/{id}/{relation}/count``."""

    model_config = _CAMEL_CONFIG

    count: StrictInt


class AvatarThumbnail(BaseModel):
    model_config = _CAMEL_CONFIG

    target_id: StrictInt | None = None
    state: StrictStr | None = None
    image_url: StrictStr


class AvatarThumbnails(BaseModel):
    """``GET /v1/users/avatar-headshot``; one entry per requested user id."""

    model_config = _CAMEL_CONFIG

    data: list[AvatarThumbnail]

    def first_image_url(self) -> str | None:
        return self.data[0].image_url if self.data else None


class UsernameHistoryItem(BaseModel):
    model_config = _CAMEL_CONFIG

    name: StrictStr


class UsernameHistory(BaseModel):
    """``GET /v1/users/{id}/username-history``."""

    model_config = _CAMEL_CONFIG

    data: list[UsernameHistoryItem]

    def names(self) -> list[str]:
        return [item.name for item in self.data]


class UsernameMatch(BaseModel):
    model_config = _CAMEL_CONFIG

    id: StrictInt
    name: StrictStr | None = None
    requested_username: StrictStr | None = None
    display_name: StrictStr | None = None
    has_verified_badge: StrictBool = False


class UsernameLookup(BaseModel):
    """``POST /v1/usernames/users``."""

    model_config = _CAMEL_CONFIG

    data: list[UsernameMatch]
