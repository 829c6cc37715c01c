"""Abstract base class for the persistence store.

Defines the contract for the two durable entities: the per-user cache and
the append-only search-history log.  Implementations may use SQLite (local),
PostgreSQL, or any other backend.  The store holds no business logic;
freshness decisions belong to the resolvers.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from rbxlookup.models.history import SearchHistoryEntry
from rbxlookup.models.user import CachedUserRecord, CachedUserUpdate


class IUserStore(ABC):
    """Contract for user-cache and search-history persistence.

    All operations are async to support network-backed stores.  Failures
    surface as :class:`~rbxlookup.utils.errors.StorageError`; nothing fails
    silently.
    """

    @abstractmethod
    async def initialize(self) -> None:
        """Create tables/indices if they don't exist.  Called at startup."""

    @abstractmethod
    async def append_search_history(self, entry: SearchHistoryEntry) -> SearchHistoryEntry:
        """Insert *entry* and return it with its store-assigned ``id``."""

    @abstractmethod
    async def get_recent_searches(self, limit: int = 10) -> list[SearchHistoryEntry]:
        """Return at most *limit* entries, newest timestamp first."""

    @abstractmethod
    async def get_cached_user(self, user_id: str) -> CachedUserRecord | None:
        """Return the cache record for *user_id*, or ``None``."""

    @abstractmethod
    async def upsert_cached_user(self, update: CachedUserUpdate) -> CachedUserRecord:
        """Insert a new record or merge the provided fields into the existing one.

        Parameters
        ----------
        update:
            Only fields explicitly set on the update are written to an
            existing record; the rest keep their stored values.  Inserting a
            new record requires ``user_data``.

        Returns
        -------
        CachedUserRecord
            The record as stored after the write.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this provider."""
