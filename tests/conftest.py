"""Shared pytest fixtures for the rbxlookup test suite."""

from __future__ import annotations

from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio

from rbxlookup.interfaces.profile_service import IProfileService
from rbxlookup.models.upstream import Relation
from rbxlookup.providers.store.sqlite_user_store import SQLiteUserStore

# ---------------------------------------------------------------------------
# Sample upstream payloads
# ---------------------------------------------------------------------------

_AVATAR_URL = "https://tr.rbxcdn.com/headshot/150/150/AvatarHeadshot/Png"


def _user_payload(user_id: int = 1, name: str = "Roblox", **overrides: Any) -> dict[str, Any]:
    """Return a profile payload as served by users.roblox.com."""
    payload: dict[str, Any] = {
        "id": user_id,
        "name": name,
        "displayName": name,
        "description": "Welcome to the Roblox profile!",
        "created": "2006-02-27T21:06:40.3Z",
        "isBanned": False,
        "externalAppDisplayName": None,
        "hasVerifiedBadge": True,
    }
    payload.update(overrides)
    return payload


def _avatar_payload(url: str = _AVATAR_URL) -> dict[str, Any]:
    return {"data": [{"targetId": 1, "state": "Completed", "imageUrl": url}]}


@pytest.fixture
def mock_profile_service() -> MagicMock:
    """Return an IProfileService mock whose calls all succeed by default."""
    service = MagicMock(spec=IProfileService)
    service.get_user = AsyncMock(return_value=_user_payload())
    service.get_avatar_headshot = AsyncMock(return_value=_avatar_payload())
    service.get_username_history = AsyncMock(
        return_value={"data": [{"name": "OldName1"}, {"name": "OldName2"}]}
    )
    service.lookup_usernames = AsyncMock(
        return_value={"data": [{"id": 456, "name": "robloxuser123", "requestedUsername": "robloxuser123"}]}
    )

    counts = {Relation.FRIENDS: 12, Relation.FOLLOWERS: 340, Relation.FOLLOWING: 7}

    async def _relation_count(user_id: str, relation: Relation) -> dict[str, Any]:
        return {"count": counts[relation]}

    service.get_relation_count = AsyncMock(side_effect=_relation_count)
    service.get_status = AsyncMock(return_value={"status": "building stuff"})
    service.get_provider_name = MagicMock(return_value="roblox")
    return service


@pytest_asyncio.fixture
async def user_store(tmp_path: Path) -> SQLiteUserStore:
    """Create and initialize a store backed by a temp DB."""
    store = SQLiteUserStore(db_path=tmp_path / "rbxlookup_test.db")
    await store.initialize()
    return store
