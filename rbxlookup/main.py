"""rbxlookup FastAPI application entry point.

Wires together the Roblox provider, the SQLite store, and the services via
dependency injection.  Loads configuration from ``.env`` and
``config/config.yaml`` and configures structured logging.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

import httpx
import structlog
import uvicorn
from fastapi import FastAPI

from rbxlookup import __version__
from rbxlookup.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
)
from rbxlookup.api.routes import router as api_router
from rbxlookup.config.loader import load_config
from rbxlookup.config.settings import Settings
from rbxlookup.providers.roblox.roblox_api_provider import RobloxAPIProvider
from rbxlookup.providers.store.sqlite_user_store import SQLiteUserStore
from rbxlookup.services.stats_aggregator import StatsAggregator
from rbxlookup.services.status_service import StatusService
from rbxlookup.services.user_resolver import UserResolver
from rbxlookup.services.username_resolver import UsernameResolver
from rbxlookup.utils.logging import configure_logging, get_logger

# ---------------------------------------------------------------------------
# Module-level settings & logging
# ---------------------------------------------------------------------------

settings = Settings()
config = load_config(settings=settings)

configure_logging(
    log_level=settings.log_level,
    json_output=(settings.app_env == "production"),
)
_logger: structlog.BoundLogger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Full DI assembly for the FastAPI application
# ---------------------------------------------------------------------------


def _build_all(app_config: dict[str, Any]) -> dict[str, Any]:
    """Construct every provider and service instance for the application.

    *app_config* is the merged result of :func:`load_config`.  Returns a flat
    dict of named components to be stored on ``app.state``.
    """
    roblox_cfg = app_config["roblox"]
    timeout = app_config["upstream"]["timeout_seconds"]

    # -- Shared resources --
    http_client = httpx.AsyncClient(timeout=timeout)

    # -- Providers --
    profile_service = RobloxAPIProvider(
        http_client,
        users_base_url=roblox_cfg["users_base_url"],
        thumbnails_base_url=roblox_cfg["thumbnails_base_url"],
        friends_base_url=roblox_cfg["friends_base_url"],
        timeout=timeout,
        avatar_size=roblox_cfg["avatar_size"],
        avatar_format=roblox_cfg["avatar_format"],
        avatar_circular=roblox_cfg["avatar_circular"],
        username_history_limit=roblox_cfg["username_history_limit"],
    )
    user_store = SQLiteUserStore(db_path=app_config["storage"]["database_path"])

    # -- Services --
    stats_aggregator = StatsAggregator(profile_service=profile_service)
    user_resolver = UserResolver(
        profile_service=profile_service,
        store=user_store,
        stats_aggregator=stats_aggregator,
        cache_ttl_seconds=app_config["cache"]["ttl_seconds"],
    )
    username_resolver = UsernameResolver(profile_service=profile_service, store=user_store)
    status_service = StatusService(profile_service=profile_service)

    return {
        "http_client": http_client,
        "profile_service": profile_service,
        "user_store": user_store,
        "stats_aggregator": stats_aggregator,
        "user_resolver": user_resolver,
        "username_resolver": username_resolver,
        "status_service": status_service,
        "search_history_default_limit": app_config["search_history"]["default_limit"],
    }


# ---------------------------------------------------------------------------
# Application lifespan (startup / shutdown)
# ---------------------------------------------------------------------------


@asynccontextmanager
async def _lifespan(application: FastAPI):  # noqa: ANN201
    """Initialise all providers and services on startup, clean up on shutdown."""
    components = _build_all(config)

    for key, value in components.items():
        setattr(application.state, key, value)

    # Creates both tables if needed
    await components["user_store"].initialize()

    _logger.info(
        "app_startup",
        version=__version__,
        environment=settings.app_env,
        database_path=config["storage"]["database_path"],
        cache_ttl_seconds=config["cache"]["ttl_seconds"],
    )

    yield

    # -- Shutdown: close shared httpx client --
    http_client: httpx.AsyncClient = components["http_client"]
    await http_client.aclose()
    _logger.info("app_shutdown", message="HTTP client closed")


# ---------------------------------------------------------------------------
# FastAPI application factory
# ---------------------------------------------------------------------------


def create_app() -> FastAPI:
    """Build and configure the FastAPI application."""
    application = FastAPI(
        title="rbxlookup API",
        version=__version__,
        description=(
            "Look up Roblox users by id or username.  Profiles are cached in "
            "SQLite, terminated accounts are recovered from the data that is "
            "still reachable, and every username search is logged."
        ),
        lifespan=_lifespan,
    )

    # -- Middleware (order matters: last added = first executed) --
    application.add_middleware(ErrorHandlingMiddleware)
    application.add_middleware(RequestLoggingMiddleware)
    configure_cors(application, allowed_origins=settings.cors_origins)

    # -- API routes --
    application.include_router(api_router)

    return application


app = create_app()

# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    uvicorn.run(
        "rbxlookup.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=(settings.app_env == "development"),
    )
