"""Pydantic request/response schemas for the rbxlookup API.

Response bodies for users, stats, status and search history reuse the
domain models in :mod:`rbxlookup.models`; this module holds the shapes that
exist only at the HTTP edge.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class UsernameLookupRequest(BaseModel):
    """Body of ``POST /api/users/by-username``.

    ``username`` is optional here so that a missing field is answered with
    our own 400 instead of FastAPI's 422.
    """

    username: str | None = Field(default=None, description="Roblox username to resolve")


class UsernameLookupResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    user_id: str


class HealthResponse(BaseModel):
    """Application health check response."""

    status: str
    version: str
    store: str


class ErrorResponse(BaseModel):
    """Standard error response body."""

    error: str
    details: str | None = None
