"""SQLite-backed persistence store.

Persists the user cache and the search-history log to a local SQLite
database (``data/rbxlookup.db`` by default).  Uses ``aiosqlite`` for async
I/O with one connection per operation, so a single store instance can be
shared by concurrent requests.  ``user_data`` is stored as a JSON blob.
"""

from __future__ import annotations

import json
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator

import aiosqlite
import structlog

from rbxlookup.interfaces.user_store import IUserStore
from rbxlookup.models.history import SearchHistoryEntry, utc_now_iso
from rbxlookup.models.user import CachedUserRecord, CachedUserUpdate
from rbxlookup.utils.errors import StorageError

logger = structlog.get_logger(logger_name=__name__)

_DEFAULT_DB_PATH = Path("data/rbxlookup.db")

_CREATE_TABLES_SQL = [
    """\
CREATE TABLE IF NOT EXISTS search_history (
    id        INTEGER PRIMARY KEY AUTOINCREMENT,
    query     TEXT    NOT NULL,
    type      TEXT    NOT NULL,
    timestamp TEXT    NOT NULL,
    success   INTEGER NOT NULL DEFAULT 1
);
""",
    """\
CREATE TABLE IF NOT EXISTS user_cache (
    id            INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id       TEXT    NOT NULL UNIQUE,
    user_data     TEXT    NOT NULL,
    avatar_url    TEXT,
    timestamp     TEXT    NOT NULL,
    is_terminated INTEGER NOT NULL DEFAULT 0
);
""",
]

_CREATE_INDICES_SQL = [
    "CREATE INDEX IF NOT EXISTS idx_search_history_timestamp ON search_history(timestamp);",
]

_INSERT_SEARCH_SQL = """\
INSERT INTO search_history (query, type, timestamp, success)
VALUES (?, ?, ?, ?);
"""

_RECENT_SEARCHES_SQL = """\
SELECT id, query, type, timestamp, success
FROM search_history
ORDER BY timestamp DESC, id DESC
LIMIT ?;
"""

_SELECT_USER_SQL = """\
SELECT id, user_id, user_data, avatar_url, timestamp, is_terminated
FROM user_cache
WHERE user_id = ?;
"""

# {assignments} lists only the columns the caller provided.
_UPSERT_USER_SQL = """\
INSERT INTO user_cache (user_id, user_data, avatar_url, timestamp, is_terminated)
VALUES (?, ?, ?, ?, ?)
ON CONFLICT(user_id)
DO UPDATE SET {assignments};
"""

# Columns an upsert may overwrite.  user_data, timestamp and is_terminated
# are NOT NULL, so an explicit None for them is ignored rather than written.
_NON_NULL_COLUMNS = frozenset({"user_data", "timestamp", "is_terminated"})
_UPDATABLE_COLUMNS = ("user_data", "avatar_url", "timestamp", "is_terminated")


class SQLiteUserStore(IUserStore):
    """SQLite-backed user-cache and search-history persistence."""

    def __init__(self, db_path: str | Path = _DEFAULT_DB_PATH) -> None:
        self._db_path = Path(db_path)

    @asynccontextmanager
    async def _connect(self, operation: str) -> AsyncIterator[aiosqlite.Connection]:
        try:
            async with aiosqlite.connect(str(self._db_path)) as db:
                db.row_factory = aiosqlite.Row
                yield db
        except aiosqlite.Error as exc:
            logger.error("user_store_operation_failed", operation=operation, error=str(exc))
            raise StorageError(
                message=f"Storage operation failed: {operation}",
                provider_name=self.get_provider_name(),
                details=str(exc),
            ) from exc

    async def initialize(self) -> None:
        """Create both tables and their indices if they don't exist."""
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        async with self._connect("initialize") as db:
            for table_sql in _CREATE_TABLES_SQL:
                await db.execute(table_sql)
            for idx_sql in _CREATE_INDICES_SQL:
                await db.execute(idx_sql)
            await db.commit()
        logger.info("user_store_initialized", path=str(self._db_path))

    # -- Search history ------------------------------------------------------

    async def append_search_history(self, entry: SearchHistoryEntry) -> SearchHistoryEntry:
        async with self._connect("append_search_history") as db:
            cursor = await db.execute(
                _INSERT_SEARCH_SQL,
                (entry.query, _enum_value(entry.type), entry.timestamp, int(entry.success)),
            )
            await db.commit()
            row_id = cursor.lastrowid

        logger.info("search_history_appended", query=entry.query, success=entry.success)
        return entry.model_copy(update={"id": row_id})

    async def get_recent_searches(self, limit: int = 10) -> list[SearchHistoryEntry]:
        if limit <= 0:
            return []
        async with self._connect("get_recent_searches") as db:
            cursor = await db.execute(_RECENT_SEARCHES_SQL, (limit,))
            rows = await cursor.fetchall()

        return [
            SearchHistoryEntry(
                id=row["id"],
                query=row["query"],
                type=row["type"],
                timestamp=row["timestamp"],
                success=bool(row["success"]),
            )
            for row in rows
        ]

    # -- User cache ------------------------------------------------------------

    async def get_cached_user(self, user_id: str) -> CachedUserRecord | None:
        async with self._connect("get_cached_user") as db:
            cursor = await db.execute(_SELECT_USER_SQL, (user_id,))
            row = await cursor.fetchone()
        return self._row_to_record(row) if row is not None else None

    async def upsert_cached_user(self, update: CachedUserUpdate) -> CachedUserRecord:
        """Write *update* in a single statement; concurrent writers never collide.

        With ``user_data`` the write is ``INSERT ... ON CONFLICT DO UPDATE``
        touching only the provided columns.  Without it the record must
        already exist and only an ``UPDATE`` is issued.
        """
        fields = {
            column: value
            for column, value in update.provided_fields().items()
            if not (value is None and column in _NON_NULL_COLUMNS)
        }
        columns = [column for column in _UPDATABLE_COLUMNS if column in fields]

        async with self._connect("upsert_cached_user") as db:
            if "user_data" in fields:
                assignments = ", ".join(f"{column} = excluded.{column}" for column in columns)
                await db.execute(
                    _UPSERT_USER_SQL.format(assignments=assignments),
                    (
                        update.user_id,
                        json.dumps(fields["user_data"]),
                        fields.get("avatar_url"),
                        fields.get("timestamp") or utc_now_iso(),
                        int(bool(fields.get("is_terminated"))),
                    ),
                )
            elif columns:
                assignments = ", ".join(f"{column} = ?" for column in columns)
                cursor = await db.execute(
                    f"UPDATE user_cache SET {assignments} WHERE user_id = ?;",
                    [*(_to_column_value(c, fields[c]) for c in columns), update.user_id],
                )
                if cursor.rowcount == 0:
                    raise self._missing_user_data(update.user_id)

            await db.commit()
            cursor = await db.execute(_SELECT_USER_SQL, (update.user_id,))
            row = await cursor.fetchone()

        if row is None:
            raise self._missing_user_data(update.user_id)

        logger.info("user_cache_upserted", user_id=update.user_id, columns=columns)
        return self._row_to_record(row)

    def _missing_user_data(self, user_id: str) -> StorageError:
        return StorageError(
            message="Cannot insert a cache record without user_data",
            provider_name=self.get_provider_name(),
            details=f"user_id={user_id}",
        )

    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this provider."""
        return "sqlite_user_store"

    @staticmethod
    def _row_to_record(row: aiosqlite.Row) -> CachedUserRecord:
        return CachedUserRecord(
            id=row["id"],
            user_id=row["user_id"],
            user_data=json.loads(row["user_data"]),
            avatar_url=row["avatar_url"],
            timestamp=row["timestamp"],
            is_terminated=bool(row["is_terminated"]),
        )


def _enum_value(value: Any) -> Any:
    return getattr(value, "value", value)


def _to_column_value(column: str, value: Any) -> Any:
    if column == "user_data":
        return json.dumps(value)
    if column == "is_terminated":
        return int(bool(value))
    return value
