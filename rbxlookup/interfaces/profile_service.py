"""Abstract base class for the upstream profile service.

Defines the contract for fetching Roblox user data.  Implementations return
the raw decoded JSON payload of each call; validating it against the
expected shape is the caller's job (see :mod:`rbxlookup.models.validation`).

Every method raises:

- :class:`~rbxlookup.utils.errors.UpstreamStatusError` when the service
  answers with an HTTP error status (``400`` on :meth:`get_user` signals a
  terminated account);
- :class:`~rbxlookup.utils.errors.ProviderUnavailableError` on network
  errors and timeouts.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from rbxlookup.models.upstream import Relation


class IProfileService(ABC):
    """Contract for the upstream user-profile API."""

    @abstractmethod
    async def get_user(self, user_id: str) -> Any:
        """Fetch the core profile document for *user_id*."""

    @abstractmethod
    async def get_avatar_headshot(self, user_id: str) -> Any:
        """Fetch the avatar headshot thumbnail listing for *user_id*."""

    @abstractmethod
    async def get_username_history(self, user_id: str) -> Any:
        """Fetch previous usernames of *user_id*, oldest first."""

    @abstractmethod
    async def lookup_usernames(self, usernames: list[str]) -> Any:
        """Resolve usernames to user ids in one batch call.

        Banned users are included in the results.
        """

    @abstractmethod
    async def get_relation_count(self, user_id: str, relation: Relation) -> Any:
        """Fetch a single friends / followers / following counter."""

    @abstractmethod
    async def get_status(self, user_id: str) -> Any:
        """Fetch the user's status line."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this provider."""
