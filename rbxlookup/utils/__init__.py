"""Utility modules for rbxlookup.

- **errors** -- exception hierarchy rooted at RbxLookupError.
- **concurrency** -- best-effort and fail-together joins for upstream calls.
- **logging** -- structlog setup with console/JSON dual rendering.
"""

from rbxlookup.utils.concurrency import best_effort, gather_all
from rbxlookup.utils.errors import (
    InvalidInputError,
    ProviderUnavailableError,
    RbxLookupError,
    ResolutionError,
    StorageError,
    UpstreamStatusError,
    UpstreamValidationError,
    UserNotFoundError,
)
from rbxlookup.utils.logging import configure_logging, get_logger

__all__ = [
    "InvalidInputError",
    "ProviderUnavailableError",
    "RbxLookupError",
    "ResolutionError",
    "StorageError",
    "UpstreamStatusError",
    "UpstreamValidationError",
    "UserNotFoundError",
    "best_effort",
    "configure_logging",
    "gather_all",
    "get_logger",
]
