"""Roblox web-API provider implementing IProfileService.

Talks to the public users / thumbnails / friends endpoints over a shared
``httpx.AsyncClient``.  Every call returns the decoded JSON body untouched;
HTTP error statuses become :class:`UpstreamStatusError` and transport
failures become :class:`ProviderUnavailableError`.  No retries are made: a
single failure is final for that call.
"""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from rbxlookup.interfaces.profile_service import IProfileService
from rbxlookup.models.upstream import Relation
from rbxlookup.utils.errors import (
    ProviderUnavailableError,
    UpstreamStatusError,
    UpstreamValidationError,
)

logger = structlog.get_logger(logger_name=__name__)

_DEFAULT_TIMEOUT = 10.0
_USERS_BASE_URL = "https://users.roblox.com"
_THUMBNAILS_BASE_URL = "https://thumbnails.roblox.com"
_FRIENDS_BASE_URL = "https://friends.roblox.com"


class RobloxAPIProvider(IProfileService):
    """Profile service backed by the public Roblox web APIs.

    The ``httpx.AsyncClient`` is injected for testability and shared with
    the rest of the application; its lifecycle belongs to the app.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        *,
        users_base_url: str = _USERS_BASE_URL,
        thumbnails_base_url: str = _THUMBNAILS_BASE_URL,
        friends_base_url: str = _FRIENDS_BASE_URL,
        timeout: float = _DEFAULT_TIMEOUT,
        avatar_size: str = "150x150",
        avatar_format: str = "Png",
        avatar_circular: bool = True,
        username_history_limit: int = 10,
    ) -> None:
        self._client = http_client
        self._users_url = users_base_url.rstrip("/")
        self._thumbnails_url = thumbnails_base_url.rstrip("/")
        self._friends_url = friends_base_url.rstrip("/")
        self._timeout = timeout
        self._avatar_params = {
            "size": avatar_size,
            "format": avatar_format,
            "isCircular": "true" if avatar_circular else "false",
        }
        self._username_history_limit = username_history_limit

    # ------------------------------------------------------------------
    # IProfileService implementation
    # ------------------------------------------------------------------

    async def get_user(self, user_id: str) -> Any:
        return await self._request("GET", f"{self._users_url}/v1/users/{user_id}")

    async def get_avatar_headshot(self, user_id: str) -> Any:
        return await self._request(
            "GET",
            f"{self._thumbnails_url}/v1/users/avatar-headshot",
            params={"userIds": user_id, **self._avatar_params},
        )

    async def get_username_history(self, user_id: str) -> Any:
        return await self._request(
            "GET",
            f"{self._users_url}/v1/users/{user_id}/username-history",
            params={"limit": self._username_history_limit, "sortOrder": "Asc"},
        )

    async def lookup_usernames(self, usernames: list[str]) -> Any:
        return await self._request(
            "POST",
            f"{self._users_url}/v1/usernames/users",
            json={"usernames": usernames, "excludeBannedUsers": False},
        )

    async def get_relation_count(self, user_id: str, relation: Relation) -> Any:
        return await self._request(
            "GET",
            f"{self._friends_url}/v1/users/{user_id}/{relation.value}/count",
        )

    async def get_status(self, user_id: str) -> Any:
        return await self._request("GET", f"{self._users_url}/v1/users/{user_id}/status")

    def get_provider_name(self) -> str:
        return "roblox"

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _request(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any | None = None,
    ) -> Any:
        try:
            if method == "POST":
                response = await self._client.post(url, json=json, timeout=self._timeout)
            else:
                response = await self._client.get(url, params=params, timeout=self._timeout)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            logger.info("roblox_http_error", method=method, url=url, status=status_code)
            raise UpstreamStatusError(
                status_code=status_code,
                provider_name=self.get_provider_name(),
                details=f"{method} {url} returned {status_code}",
            ) from exc
        except httpx.TimeoutException as exc:
            logger.warning("roblox_request_timeout", method=method, url=url)
            raise ProviderUnavailableError(
                message=f"Timeout calling {url}",
                provider_name=self.get_provider_name(),
                details=str(exc) or type(exc).__name__,
            ) from exc
        except httpx.HTTPError as exc:
            logger.warning("roblox_request_failed", method=method, url=url, error=str(exc))
            raise ProviderUnavailableError(
                message=f"HTTP error calling {url}: {exc}",
                provider_name=self.get_provider_name(),
                details=str(exc) or type(exc).__name__,
            ) from exc

        try:
            return response.json()
        except ValueError as exc:
            raise UpstreamValidationError(
                message=f"Non-JSON response from {url}",
                provider_name=self.get_provider_name(),
                details=str(exc),
            ) from exc
