"""Unit tests for SQLiteUserStore.

Tests cover: initialize, append_search_history, get_recent_searches,
get_cached_user and the partial-upsert semantics of upsert_cached_user.

Each test uses a temporary SQLite database to ensure isolation.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from rbxlookup.models.history import SearchHistoryEntry, SearchType
from rbxlookup.models.user import CachedUserUpdate
from rbxlookup.providers.store.sqlite_user_store import SQLiteUserStore
from rbxlookup.utils.errors import StorageError

SAMPLE_USER_DATA = {"id": 1, "name": "Roblox", "displayName": "Roblox", "isBanned": False}


# ═══════════════════════════════════════════════════════════════════════
# initialize
# ═══════════════════════════════════════════════════════════════════════


class TestInitialize:
    @pytest.mark.asyncio
    async def test_creates_parent_directory(self, tmp_path: Path):
        db_path = tmp_path / "nested" / "dir" / "store.db"
        store = SQLiteUserStore(db_path=db_path)
        await store.initialize()
        assert db_path.exists()

    @pytest.mark.asyncio
    async def test_initialize_is_idempotent(self, user_store):
        await user_store.initialize()
        assert await user_store.get_recent_searches(10) == []

    def test_provider_name(self, tmp_path: Path):
        assert SQLiteUserStore(db_path=tmp_path / "x.db").get_provider_name() == "sqlite_user_store"


# ═══════════════════════════════════════════════════════════════════════
# Search history
# ═══════════════════════════════════════════════════════════════════════


class TestSearchHistory:
    @pytest.mark.asyncio
    async def test_append_assigns_id(self, user_store):
        entry = await user_store.append_search_history(
            SearchHistoryEntry(query="robloxuser123", type=SearchType.USERNAME, success=True)
        )
        assert entry.id is not None
        assert entry.query == "robloxuser123"
        assert entry.type == "username"

    @pytest.mark.asyncio
    async def test_recent_searches_newest_first(self, user_store):
        for i, ts in enumerate(
            ["2024-01-01T00:00:00+00:00", "2024-03-01T00:00:00+00:00", "2024-02-01T00:00:00+00:00"]
        ):
            await user_store.append_search_history(
                SearchHistoryEntry(query=f"user{i}", timestamp=ts, success=i != 1)
            )

        results = await user_store.get_recent_searches(10)
        assert [r.query for r in results] == ["user1", "user2", "user0"]
        assert results[0].success is False
        assert results[1].success is True

    @pytest.mark.asyncio
    async def test_recent_searches_respects_limit(self, user_store):
        for i in range(5):
            await user_store.append_search_history(
                SearchHistoryEntry(query=f"user{i}", timestamp=f"2024-01-0{i + 1}T00:00:00+00:00")
            )

        results = await user_store.get_recent_searches(2)
        assert [r.query for r in results] == ["user4", "user3"]

    @pytest.mark.asyncio
    async def test_identical_timestamps_break_ties_by_insertion(self, user_store):
        ts = "2024-01-01T00:00:00+00:00"
        await user_store.append_search_history(SearchHistoryEntry(query="first", timestamp=ts))
        await user_store.append_search_history(SearchHistoryEntry(query="second", timestamp=ts))

        results = await user_store.get_recent_searches(10)
        assert [r.query for r in results] == ["second", "first"]

    @pytest.mark.asyncio
    async def test_zero_limit_returns_empty(self, user_store):
        await user_store.append_search_history(SearchHistoryEntry(query="someone"))
        assert await user_store.get_recent_searches(0) == []

    @pytest.mark.asyncio
    async def test_empty_table(self, user_store):
        assert await user_store.get_recent_searches() == []


# ═══════════════════════════════════════════════════════════════════════
# User cache
# ═══════════════════════════════════════════════════════════════════════


class TestUserCache:
    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self, user_store):
        assert await user_store.get_cached_user("1") is None

    @pytest.mark.asyncio
    async def test_insert_then_get(self, user_store):
        record = await user_store.upsert_cached_user(
            CachedUserUpdate(
                user_id="1",
                user_data=SAMPLE_USER_DATA,
                avatar_url="https://example.com/a.png",
                timestamp="2024-01-01T00:00:00+00:00",
                is_terminated=False,
            )
        )
        assert record.id is not None
        assert record.user_data == SAMPLE_USER_DATA

        fetched = await user_store.get_cached_user("1")
        assert fetched == record
        assert fetched.avatar_url == "https://example.com/a.png"
        assert fetched.is_terminated is False

    @pytest.mark.asyncio
    async def test_insert_without_timestamp_uses_now(self, user_store):
        record = await user_store.upsert_cached_user(
            CachedUserUpdate(user_id="1", user_data=SAMPLE_USER_DATA)
        )
        assert record.timestamp
        assert record.avatar_url is None
        assert record.is_terminated is False

    @pytest.mark.asyncio
    async def test_insert_without_user_data_raises(self, user_store):
        with pytest.raises(StorageError):
            await user_store.upsert_cached_user(CachedUserUpdate(user_id="1", avatar_url="x"))

    @pytest.mark.asyncio
    async def test_partial_update_keeps_unspecified_fields(self, user_store):
        await user_store.upsert_cached_user(
            CachedUserUpdate(
                user_id="1",
                user_data=SAMPLE_USER_DATA,
                avatar_url="https://example.com/old.png",
                timestamp="2024-01-01T00:00:00+00:00",
            )
        )

        updated = await user_store.upsert_cached_user(
            CachedUserUpdate(user_id="1", avatar_url="https://example.com/new.png")
        )

        assert updated.avatar_url == "https://example.com/new.png"
        assert updated.user_data == SAMPLE_USER_DATA
        assert updated.timestamp == "2024-01-01T00:00:00+00:00"

    @pytest.mark.asyncio
    async def test_explicit_none_clears_avatar(self, user_store):
        await user_store.upsert_cached_user(
            CachedUserUpdate(user_id="1", user_data=SAMPLE_USER_DATA, avatar_url="x")
        )
        updated = await user_store.upsert_cached_user(CachedUserUpdate(user_id="1", avatar_url=None))
        assert updated.avatar_url is None
        assert updated.user_data == SAMPLE_USER_DATA

    @pytest.mark.asyncio
    async def test_explicit_none_user_data_is_ignored(self, user_store):
        await user_store.upsert_cached_user(
            CachedUserUpdate(user_id="1", user_data=SAMPLE_USER_DATA)
        )
        updated = await user_store.upsert_cached_user(
            CachedUserUpdate(user_id="1", user_data=None, is_terminated=True)
        )
        assert updated.user_data == SAMPLE_USER_DATA
        assert updated.is_terminated is True

    @pytest.mark.asyncio
    async def test_upsert_keeps_one_row_per_user(self, user_store):
        first = await user_store.upsert_cached_user(
            CachedUserUpdate(user_id="1", user_data=SAMPLE_USER_DATA)
        )
        second = await user_store.upsert_cached_user(
            CachedUserUpdate(user_id="1", user_data={**SAMPLE_USER_DATA, "name": "Renamed"})
        )
        assert second.id == first.id
        assert second.user_data["name"] == "Renamed"


# ═══════════════════════════════════════════════════════════════════════
# Failure wrapping
# ═══════════════════════════════════════════════════════════════════════


class TestStorageErrors:
    @pytest.mark.asyncio
    async def test_uninitialized_store_raises_storage_error(self, tmp_path: Path):
        store = SQLiteUserStore(db_path=tmp_path / "never_initialized.db")
        with pytest.raises(StorageError) as exc_info:
            await store.get_recent_searches(5)
        assert exc_info.value.provider_name == "sqlite_user_store"
        assert exc_info.value.details


# ═══════════════════════════════════════════════════════════════════════
# Concurrent writers
# ═══════════════════════════════════════════════════════════════════════


class TestConcurrentUpserts:
    @pytest.mark.asyncio
    async def test_simultaneous_first_writes_do_not_collide(self, user_store):
        for round_number in range(20):
            user_id = f"race-{round_number}"
            first, second = await asyncio.gather(
                user_store.upsert_cached_user(
                    CachedUserUpdate(user_id=user_id, user_data={**SAMPLE_USER_DATA, "name": "A"})
                ),
                user_store.upsert_cached_user(
                    CachedUserUpdate(user_id=user_id, user_data={**SAMPLE_USER_DATA, "name": "B"})
                ),
            )

            assert first.id == second.id
            stored = await user_store.get_cached_user(user_id)
            assert stored.user_data["name"] in {"A", "B"}

    @pytest.mark.asyncio
    async def test_simultaneous_partial_and_full_writes(self, user_store):
        await user_store.upsert_cached_user(
            CachedUserUpdate(user_id="1", user_data=SAMPLE_USER_DATA, avatar_url="old")
        )

        await asyncio.gather(
            user_store.upsert_cached_user(CachedUserUpdate(user_id="1", avatar_url="new")),
            user_store.upsert_cached_user(
                CachedUserUpdate(user_id="1", user_data={**SAMPLE_USER_DATA, "name": "Renamed"})
            ),
        )

        stored = await user_store.get_cached_user("1")
        assert stored.avatar_url == "new"
        assert stored.user_data["name"] == "Renamed"


# ═══════════════════════════════════════════════════════════════════════
# Timestamp normalization
# ═══════════════════════════════════════════════════════════════════════


class TestHistoryTimestamps:
    @pytest.mark.asyncio
    async def test_mixed_utc_notations_sort_chronologically(self, user_store):
        # 10:00 UTC, 09:30 UTC and 10:15 UTC, written in three notations.
        await user_store.append_search_history(
            SearchHistoryEntry(query="zulu", timestamp="2024-01-01T10:00:00Z")
        )
        await user_store.append_search_history(
            SearchHistoryEntry(query="offset", timestamp="2024-01-01T10:30:00+01:00")
        )
        await user_store.append_search_history(
            SearchHistoryEntry(query="naive", timestamp="2024-01-01T10:15:00")
        )

        results = await user_store.get_recent_searches(10)

        assert [r.query for r in results] == ["naive", "zulu", "offset"]
        assert results[1].timestamp == "2024-01-01T10:00:00+00:00"
        assert results[2].timestamp == "2024-01-01T09:30:00+00:00"

    def test_non_iso_timestamp_rejected(self):
        with pytest.raises(ValueError):
            SearchHistoryEntry(query="x", timestamp="last tuesday")
