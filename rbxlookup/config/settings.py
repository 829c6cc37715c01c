"""Application settings loaded from environment variables via pydantic-settings.

Values are read from environment variables first, then from a ``.env`` file
in the working directory, then fall back to the defaults below.  Field
``cache_ttl_seconds`` maps to env var ``CACHE_TTL_SECONDS`` and so on.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """rbxlookup application settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # === Persistence ===
    database_path: str = "data/rbxlookup.db"

    # === Upstream (Roblox web APIs) ===
    # Per-request timeout for every outbound call.  No retries are made.
    upstream_timeout_seconds: float = 10.0

    # === Cache / history ===
    cache_ttl_seconds: int = 3600
    search_history_default_limit: int = 10

    # === App Config ===
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    app_env: str = "development"
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]
