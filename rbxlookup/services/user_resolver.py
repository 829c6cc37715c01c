"""Cache-augmented user-record resolution.

# ─── RESOLUTION FLOW ─────────────────────────────────────────────────
#
#   resolve(user_id)
#     1. store.get_cached_user        fresh (< ttl)?  -> source="cache"
#     2. profiles.get_user            validate_user_profile (fatal if bad)
#     3. avatar headshot              best-effort, null on failure
#     4. store.upsert_cached_user     -> source="api"
#
#   Terminated accounts: Roblox answers HTTP 400 on the profile endpoint.
#   Instead of failing, the resolver recovers what it can, concurrently and
#   each call best-effort:
#     a. username history            -> [] on failure
#     b. relation counts             -> all zeros on failure
#     c. avatar headshot             -> null on failure
#   and synthesizes a banned profile that is cached with is_terminated=True.
#
#   Any other upstream failure is fatal and nothing is written.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone

import structlog

from rbxlookup.interfaces.profile_service import IProfileService
from rbxlookup.interfaces.user_store import IUserStore
from rbxlookup.models.history import parse_iso_timestamp, utc_now_iso
from rbxlookup.models.user import (
    CachedUserRecord,
    CachedUserUpdate,
    NormalizedUserProfile,
    UserLookupResult,
    UserStats,
)
from rbxlookup.models.validation import (
    validate_avatar_thumbnails,
    validate_user_profile,
    validate_username_history,
)
from rbxlookup.services.stats_aggregator import StatsAggregator
from rbxlookup.utils.concurrency import best_effort
from rbxlookup.utils.errors import RbxLookupError, ResolutionError, UpstreamStatusError

logger = structlog.get_logger(logger_name=__name__)

_DEFAULT_CACHE_TTL_SECONDS = 3600
_FAILURE_MESSAGE = "Failed to fetch user data"

# Roblox reports terminated accounts as a 400 on GET /v1/users/{id}.
_TERMINATED_STATUS_CODE = 400
_TERMINATED_NAME = "Terminated Account"
_TERMINATED_DESCRIPTION = (
    "This account has been terminated for violating Roblox Terms of Service."
)


class UserResolver:
    """Resolves a user id to a normalized profile, consulting the cache first.

    All dependencies are constructor-injected; the store handle is shared
    with the rest of the application.
    """

    def __init__(
        self,
        profile_service: IProfileService,
        store: IUserStore,
        stats_aggregator: StatsAggregator,
        cache_ttl_seconds: int = _DEFAULT_CACHE_TTL_SECONDS,
    ) -> None:
        self._profiles = profile_service
        self._store = store
        self._stats = stats_aggregator
        self._cache_ttl_seconds = cache_ttl_seconds

    # ── Public API ─────────────────────────────────────────────────────

    async def resolve(self, user_id: str) -> UserLookupResult:
        """Return the profile for *user_id* from the cache or the upstream API.

        Raises
        ------
        ResolutionError
            When the upstream fetch fails for any reason other than a
            terminated account, or the profile payload fails validation.
        """
        cached = await self._store.get_cached_user(user_id)
        if cached is not None and self._is_fresh(cached):
            logger.info("user_cache_hit", user_id=user_id)
            return UserLookupResult(
                source="cache",
                data=cached.user_data,
                avatar_url=cached.avatar_url,
                is_terminated=cached.is_terminated,
            )

        logger.info("user_cache_miss", user_id=user_id, stale=cached is not None)

        try:
            payload = await self._profiles.get_user(user_id)
        except UpstreamStatusError as exc:
            if exc.status_code == _TERMINATED_STATUS_CODE:
                return await self._recover_terminated(user_id)
            raise self._fatal(user_id, exc) from exc
        except RbxLookupError as exc:
            raise self._fatal(user_id, exc) from exc

        validation = validate_user_profile(payload)
        if not validation.ok:
            logger.error("user_profile_invalid", user_id=user_id, errors=validation.errors)
            raise ResolutionError(
                message=_FAILURE_MESSAGE,
                provider_name=self._profiles.get_provider_name(),
                details=validation.error_summary(),
            )
        profile = validation.unwrap()

        avatar_url = await best_effort(
            self._fetch_avatar_url(user_id),
            None,
            event="avatar_fetch_failed",
            logger=logger,
            user_id=user_id,
        )

        document = profile.to_document()
        await self._store.upsert_cached_user(
            CachedUserUpdate(
                user_id=user_id,
                user_data=document,
                avatar_url=avatar_url,
                timestamp=utc_now_iso(),
                is_terminated=profile.is_banned,
            )
        )

        return UserLookupResult(
            source="api",
            data=document,
            avatar_url=avatar_url,
            is_terminated=profile.is_banned,
        )

    # ── Terminated-account recovery ────────────────────────────────────

    async def _recover_terminated(self, user_id: str) -> UserLookupResult:
        logger.info("terminated_account_detected", user_id=user_id)

        previous_usernames, stats, avatar_url = await asyncio.gather(
            best_effort(
                self._fetch_previous_usernames(user_id),
                [],
                event="username_history_fetch_failed",
                logger=logger,
                user_id=user_id,
            ),
            best_effort(
                self._stats.fetch_counts(user_id),
                UserStats.zero(),
                event="terminated_stats_fetch_failed",
                logger=logger,
                user_id=user_id,
            ),
            best_effort(
                self._fetch_avatar_url(user_id),
                None,
                event="avatar_fetch_failed",
                logger=logger,
                user_id=user_id,
            ),
        )

        profile = NormalizedUserProfile(
            id=_numeric_id(user_id),
            name=_TERMINATED_NAME,
            display_name=_TERMINATED_NAME,
            description=_TERMINATED_DESCRIPTION,
            is_banned=True,
            previous_usernames=previous_usernames,
            stats=stats,
        )
        document = profile.to_document()

        await self._store.upsert_cached_user(
            CachedUserUpdate(
                user_id=user_id,
                user_data=document,
                avatar_url=avatar_url,
                timestamp=utc_now_iso(),
                is_terminated=True,
            )
        )

        return UserLookupResult(
            source="api",
            data=document,
            avatar_url=avatar_url,
            is_terminated=True,
            stats=stats,
            previous_usernames=previous_usernames,
        )

    # ── Best-effort sub-calls (raise on failure; callers supply defaults) ──

    async def _fetch_avatar_url(self, user_id: str) -> str | None:
        payload = await self._profiles.get_avatar_headshot(user_id)
        return validate_avatar_thumbnails(payload).unwrap().first_image_url()

    async def _fetch_previous_usernames(self, user_id: str) -> list[str]:
        payload = await self._profiles.get_username_history(user_id)
        return validate_username_history(payload).unwrap().names()

    # ── Helpers ────────────────────────────────────────────────────────

    def _is_fresh(self, record: CachedUserRecord) -> bool:
        written_at = parse_iso_timestamp(record.timestamp)
        if written_at is None:
            logger.warning("user_cache_timestamp_invalid", user_id=record.user_id, timestamp=record.timestamp)
            return False
        age = (datetime.now(tz=timezone.utc) - written_at).total_seconds()  # noqa: UP017
        return age < self._cache_ttl_seconds

    def _fatal(self, user_id: str, exc: RbxLookupError) -> ResolutionError:
        logger.error(
            "user_resolution_failed",
            user_id=user_id,
            error_type=type(exc).__name__,
            error=exc.message,
        )
        return ResolutionError(
            message=_FAILURE_MESSAGE,
            provider_name=exc.provider_name,
            details=exc.message,
        )


def _numeric_id(user_id: str) -> int:
    """Numeric form of *user_id* for the synthesized profile; 0 if not numeric."""
    return int(user_id) if user_id.isdecimal() else 0
