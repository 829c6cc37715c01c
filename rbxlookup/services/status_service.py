"""Validated passthrough of a user's status line."""

from __future__ import annotations

import structlog

from rbxlookup.interfaces.profile_service import IProfileService
from rbxlookup.models.upstream import UserStatus
from rbxlookup.models.validation import validate_user_status
from rbxlookup.utils.errors import RbxLookupError, ResolutionError

logger = structlog.get_logger(logger_name=__name__)

_FAILURE_MESSAGE = "Failed to fetch user status"


class StatusService:
    def __init__(self, profile_service: IProfileService) -> None:
        self._profiles = profile_service

    async def get_status(self, user_id: str) -> UserStatus:
        try:
            payload = await self._profiles.get_status(user_id)
        except RbxLookupError as exc:
            logger.error("user_status_failed", user_id=user_id, error=exc.message)
            raise ResolutionError(
                message=_FAILURE_MESSAGE,
                provider_name=exc.provider_name,
                details=exc.message,
            ) from exc

        validation = validate_user_status(payload)
        if not validation.ok:
            logger.error("user_status_invalid", user_id=user_id, errors=validation.errors)
            raise ResolutionError(
                message=_FAILURE_MESSAGE,
                provider_name=self._profiles.get_provider_name(),
                details=validation.error_summary(),
            )
        return validation.unwrap()
