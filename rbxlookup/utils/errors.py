"""Custom exception hierarchy for rbxlookup.

All application exceptions inherit from :class:`RbxLookupError`, which
carries an optional ``provider_name`` so error handlers can identify which
external service (e.g. "roblox", "sqlite") caused the failure, and an
optional ``details`` string with the underlying error text that is safe to
return to API clients.

    RbxLookupError  (base)
    +-- UpstreamValidationError  (upstream JSON does not match its schema)
    +-- ProviderUnavailableError (network error / timeout talking upstream)
    +-- UpstreamStatusError      (upstream answered with an HTTP error status)
    +-- ResolutionError          (a lookup failed fatally for this request)
    +-- UserNotFoundError        (username lookup returned zero matches)
    +-- InvalidInputError        (missing or empty client input)
    +-- StorageError             (SQLite read/write failure)

The API middleware maps ``InvalidInputError`` to 400, ``UserNotFoundError``
to 404 and everything else to 500.
"""


class RbxLookupError(Exception):
    """Base exception for all rbxlookup errors.

    The ``__str__`` method prefixes the provider name in brackets
    for structured log output, e.g. ``[roblox] Request timed out``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
        details: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        self._details = details
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    @property
    def details(self) -> str | None:
        return self._details

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Upstream (Roblox) errors
# ---------------------------------------------------------------------------

class UpstreamValidationError(RbxLookupError):
    """Raised when an upstream response does not match its expected shape."""

    def __init__(
        self,
        message: str = "Upstream response failed validation",
        provider_name: str | None = None,
        details: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name, details=details)


class ProviderUnavailableError(RbxLookupError):
    """Raised when an external service is unreachable or times out."""

    def __init__(
        self,
        message: str = "External service is unavailable",
        provider_name: str | None = None,
        details: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name, details=details)


class UpstreamStatusError(RbxLookupError):
    """Raised when the upstream service answers with an HTTP error status.

    Roblox answers ``400`` on the profile endpoint for terminated accounts,
    so callers inspect :attr:`status_code` before treating this as fatal.
    """

    def __init__(
        self,
        status_code: int,
        message: str | None = None,
        provider_name: str | None = None,
        details: str | None = None,
    ) -> None:
        self._status_code = status_code
        super().__init__(
            message=message or f"Request failed with status code {status_code}",
            provider_name=provider_name,
            details=details,
        )

    @property
    def status_code(self) -> int:
        return self._status_code

    @property
    def is_client_error(self) -> bool:
        return 400 <= self._status_code < 500


# ---------------------------------------------------------------------------
# Request-level errors
# ---------------------------------------------------------------------------

class ResolutionError(RbxLookupError):
    """Raised when a lookup fails fatally; ``details`` holds the upstream cause."""

    def __init__(
        self,
        message: str = "Failed to resolve user",
        provider_name: str | None = None,
        details: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name, details=details)


class UserNotFoundError(RbxLookupError):
    """Raised when a username lookup yields zero matches."""

    def __init__(
        self,
        message: str = "User not found",
        provider_name: str | None = None,
        details: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name, details=details)


class InvalidInputError(RbxLookupError):
    """Raised when a required request field is missing or empty."""

    def __init__(
        self,
        message: str = "Invalid input",
        provider_name: str | None = None,
        details: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name, details=details)


# ---------------------------------------------------------------------------
# Persistence errors
# ---------------------------------------------------------------------------

class StorageError(RbxLookupError):
    """Raised when the persistence store fails to read or write."""

    def __init__(
        self,
        message: str = "Storage operation failed",
        provider_name: str | None = None,
        details: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name, details=details)
