"""FastAPI routes for rbxlookup.

Service dependencies are resolved from ``app.state`` via FastAPI's
``Depends`` using the ``Annotated`` pattern, so tests can build an app with
mocked services without touching ``main.py``.

# ─── API ROUTE MAP ────────────────────────────────────────────────────
#
# Endpoint                          Method  Description
# ─────────────────────────────────────────────────────────────────────
# /api/users/{user_id}              GET     Cached / upstream profile lookup
# /api/users/by-username            POST    Username -> user id (logged)
# /api/users/{user_id}/status       GET     Validated status passthrough
# /api/users/{user_id}/stats        GET     Friend/follower/following counts
# /api/search-history               GET     Recent username searches
# /api/health                       GET     Health check
#
# Application errors raised by the services are turned into JSON error
# bodies by ErrorHandlingMiddleware (see middleware.py).
# ──────────────────────────────────────────────────────────────────────
"""

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from rbxlookup import __version__
from rbxlookup.api.schemas import (
    ErrorResponse,
    HealthResponse,
    UsernameLookupRequest,
    UsernameLookupResponse,
)
from rbxlookup.interfaces.user_store import IUserStore
from rbxlookup.models.history import SearchHistoryEntry
from rbxlookup.models.upstream import UserStatus
from rbxlookup.models.user import StatsSummary, UserLookupResult
from rbxlookup.services.stats_aggregator import StatsAggregator
from rbxlookup.services.status_service import StatusService
from rbxlookup.services.user_resolver import UserResolver
from rbxlookup.services.username_resolver import UsernameResolver
from rbxlookup.utils.errors import StorageError
from rbxlookup.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

router = APIRouter(prefix="/api")

_DEFAULT_HISTORY_LIMIT = 10


# ---------------------------------------------------------------------------
# Dependency injection helpers: resolve singletons from app.state
# ---------------------------------------------------------------------------


def _get_user_resolver(request: Request) -> UserResolver:
    """Return the user resolver from application state."""
    return request.app.state.user_resolver


def _get_username_resolver(request: Request) -> UsernameResolver:
    """Return the username resolver from application state."""
    return request.app.state.username_resolver


def _get_stats_aggregator(request: Request) -> StatsAggregator:
    """Return the stats aggregator from application state."""
    return request.app.state.stats_aggregator


def _get_status_service(request: Request) -> StatusService:
    """Return the status service from application state."""
    return request.app.state.status_service


def _get_user_store(request: Request) -> IUserStore:
    """Return the persistence store from application state."""
    return request.app.state.user_store


def _get_default_history_limit(request: Request) -> int:
    return getattr(request.app.state, "search_history_default_limit", _DEFAULT_HISTORY_LIMIT)


UserResolverDep = Annotated[UserResolver, Depends(_get_user_resolver)]
UsernameResolverDep = Annotated[UsernameResolver, Depends(_get_username_resolver)]
StatsAggregatorDep = Annotated[StatsAggregator, Depends(_get_stats_aggregator)]
StatusServiceDep = Annotated[StatusService, Depends(_get_status_service)]
UserStoreDep = Annotated[IUserStore, Depends(_get_user_store)]
DefaultHistoryLimitDep = Annotated[int, Depends(_get_default_history_limit)]


# ---------------------------------------------------------------------------
# User endpoints
# ---------------------------------------------------------------------------


@router.post(
    "/users/by-username",
    response_model=UsernameLookupResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="Resolve a username to a user id",
)
async def get_user_by_username(
    body: UsernameLookupRequest,
    resolver: UsernameResolverDep,
) -> JSONResponse:
    """Look up *username* upstream and record the attempt in search history."""
    user_id = await resolver.resolve_username(body.username)
    return JSONResponse(content=UsernameLookupResponse(user_id=user_id).model_dump(by_alias=True))


@router.get(
    "/users/{user_id}",
    responses={200: {"model": UserLookupResult}, 500: {"model": ErrorResponse}},
    summary="Get a user profile (cached for up to the configured TTL)",
)
async def get_user(user_id: str, resolver: UserResolverDep) -> JSONResponse:
    """Return the normalized profile, avatar and terminated flag for *user_id*."""
    result = await resolver.resolve(user_id)
    return JSONResponse(content=result.to_payload())


@router.get(
    "/users/{user_id}/status",
    response_model=UserStatus,
    responses={500: {"model": ErrorResponse}},
    summary="Get a user's status line",
)
async def get_user_status(user_id: str, service: StatusServiceDep) -> UserStatus:
    return await service.get_status(user_id)


@router.get(
    "/users/{user_id}/stats",
    response_model=StatsSummary,
    summary="Get friend, follower and following counts",
)
async def get_user_stats(user_id: str, aggregator: StatsAggregatorDep) -> StatsSummary:
    """Always 200; every count is ``"N/A"`` if any of them could not be fetched."""
    return await aggregator.get_stats(user_id)


# ---------------------------------------------------------------------------
# Search history
# ---------------------------------------------------------------------------


@router.get(
    "/search-history",
    response_model=list[SearchHistoryEntry],
    responses={500: {"model": ErrorResponse}},
    summary="Get the most recent username searches",
)
async def get_search_history(
    store: UserStoreDep,
    default_limit: DefaultHistoryLimitDep,
    limit: Annotated[int | None, Query(ge=0, description="Maximum entries to return")] = None,
) -> list[SearchHistoryEntry]:
    """Return up to *limit* searches, newest first."""
    effective_limit = default_limit if limit is None else limit
    try:
        return await store.get_recent_searches(effective_limit)
    except StorageError as exc:
        _logger.error("search_history_fetch_failed", limit=effective_limit, error=exc.details)
        raise StorageError(
            message="Failed to fetch search history",
            provider_name=exc.provider_name,
            details=exc.details or exc.message,
        ) from exc


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------


@router.get("/health", response_model=HealthResponse, summary="Health check")
async def health(store: UserStoreDep) -> HealthResponse:
    return HealthResponse(status="ok", version=__version__, store=store.get_provider_name())
