"""Explicit validators for every upstream payload shape.

Each ``validate_*`` function returns a :class:`ValidationResult` instead of
raising, so call sites branch on ``result.ok``.  Validation is also
normalization: the returned model has every optional field filled with its
default.  Required fields that are missing or of the wrong type make the
whole payload fail (no partial records).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from rbxlookup.models.upstream import (
    AvatarThumbnails,
    RelationCount,
    UsernameHistory,
    UsernameLookup,
    UserStatus,
)
from rbxlookup.models.user import NormalizedUserProfile
from rbxlookup.utils.errors import UpstreamValidationError

_M = TypeVar("_M", bound=BaseModel)


@dataclass(frozen=True)
class ValidationResult(Generic[_M]):
    """Outcome of validating one payload: either ``value`` or ``errors``."""

    value: _M | None = None
    errors: list[str] = field(default_factory=list)
    shape: str = ""

    @property
    def ok(self) -> bool:
        return self.value is not None

    def error_summary(self) -> str:
        return "; ".join(self.errors)

    def unwrap(self) -> _M:
        """Return the value or raise :class:`UpstreamValidationError`."""
        if self.value is None:
            raise UpstreamValidationError(
                message=f"Invalid {self.shape} payload",
                provider_name="roblox",
                details=self.error_summary(),
            )
        return self.value


def _validate(model_cls: type[_M], payload: Any) -> ValidationResult[_M]:
    shape = model_cls.__name__
    if not isinstance(payload, dict):
        return ValidationResult(
            errors=[f"expected a JSON object, got {type(payload).__name__}"],
            shape=shape,
        )
    try:
        return ValidationResult(value=model_cls.model_validate(payload), shape=shape)
    except ValidationError as exc:
        errors = [
            f"{'.'.join(str(part) for part in err['loc']) or '<root>'}: {err['msg']}"
            for err in exc.errors()
        ]
        return ValidationResult(errors=errors, shape=shape)


def validate_user_profile(payload: Any) -> ValidationResult[NormalizedUserProfile]:
    return _validate(NormalizedUserProfile, payload)


def validate_user_status(payload: Any) -> ValidationResult[UserStatus]:
    return _validate(UserStatus, payload)


def validate_relation_count(payload: Any) -> ValidationResult[RelationCount]:
    return _validate(RelationCount, payload)


def validate_avatar_thumbnails(payload: Any) -> ValidationResult[AvatarThumbnails]:
    return _validate(AvatarThumbnails, payload)


def validate_username_history(payload: Any) -> ValidationResult[UsernameHistory]:
    return _validate(UsernameHistory, payload)


def validate_username_lookup(payload: Any) -> ValidationResult[UsernameLookup]:
    return _validate(UsernameLookup, payload)
