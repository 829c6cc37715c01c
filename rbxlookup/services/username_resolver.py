"""Username to user-id resolution with search-history logging.

Every accepted call appends exactly one search-history entry, written once
the upstream outcome is known: ``success=False`` when the lookup fails, the
payload is invalid or nothing matches, ``success=True`` otherwise.  Empty
input is rejected before any upstream call or history write.
"""

from __future__ import annotations

import structlog

from rbxlookup.interfaces.profile_service import IProfileService
from rbxlookup.interfaces.user_store import IUserStore
from rbxlookup.models.history import SearchHistoryEntry, SearchType
from rbxlookup.models.validation import validate_username_lookup
from rbxlookup.utils.errors import (
    InvalidInputError,
    RbxLookupError,
    ResolutionError,
    UserNotFoundError,
)

logger = structlog.get_logger(logger_name=__name__)

_FAILURE_MESSAGE = "Failed to fetch user ID"


class UsernameResolver:
    """Resolves a display username to an opaque user id."""

    def __init__(self, profile_service: IProfileService, store: IUserStore) -> None:
        self._profiles = profile_service
        self._store = store

    async def resolve_username(self, username: str | None) -> str:
        """Return the user id (as a string) of the first match for *username*.

        Raises
        ------
        InvalidInputError
            *username* is missing or blank; nothing is logged.
        UserNotFoundError
            The lookup succeeded with zero matches.
        ResolutionError
            The upstream call failed or returned an invalid payload.
        """
        if username is None or not username.strip():
            raise InvalidInputError(message="Username is required")

        try:
            payload = await self._profiles.lookup_usernames([username])
        except RbxLookupError as exc:
            await self._record(username, success=False)
            logger.error("username_lookup_failed", username=username, error=exc.message)
            raise ResolutionError(
                message=_FAILURE_MESSAGE,
                provider_name=exc.provider_name,
                details=exc.message,
            ) from exc

        validation = validate_username_lookup(payload)
        if not validation.ok:
            await self._record(username, success=False)
            logger.error("username_lookup_invalid", username=username, errors=validation.errors)
            raise ResolutionError(
                message=_FAILURE_MESSAGE,
                provider_name=self._profiles.get_provider_name(),
                details=validation.error_summary(),
            )

        matches = validation.unwrap().data
        if not matches:
            await self._record(username, success=False)
            logger.info("username_not_found", username=username)
            raise UserNotFoundError(message="User not found")

        await self._record(username, success=True)
        user_id = str(matches[0].id)
        logger.info("username_resolved", username=username, user_id=user_id)
        return user_id

    async def _record(self, username: str, *, success: bool) -> SearchHistoryEntry:
        return await self._store.append_search_history(
            SearchHistoryEntry(query=username, type=SearchType.USERNAME, success=success)
        )
