"""rbxlookup API layer: routes, schemas, and middleware."""

from rbxlookup.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
)
from rbxlookup.api.routes import router
from rbxlookup.api.schemas import (
    ErrorResponse,
    HealthResponse,
    UsernameLookupRequest,
    UsernameLookupResponse,
)

__all__ = [
    "ErrorHandlingMiddleware",
    "RequestLoggingMiddleware",
    "configure_cors",
    "router",
    "ErrorResponse",
    "HealthResponse",
    "UsernameLookupRequest",
    "UsernameLookupResponse",
]
