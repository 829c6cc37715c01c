"""Unit tests for the assembly functions in rbxlookup/main.py.

Components are built from a merged config dict, the same shape
:func:`load_config` returns, so no network or database is touched.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from fastapi import FastAPI

from rbxlookup.config.loader import load_config
from rbxlookup.config.settings import Settings


def _settings(**overrides) -> Settings:
    defaults = {
        "database_path": "data/rbxlookup.db",
        "upstream_timeout_seconds": 10.0,
        "cache_ttl_seconds": 3600,
        "search_history_default_limit": 10,
        "app_env": "test",
    }
    defaults.update(overrides)
    return Settings(**defaults)


# ======================================================================
# _build_all
# ======================================================================


class TestBuildAll:
    @pytest.mark.asyncio
    async def test_env_overrides_reach_components(self, tmp_path: Path) -> None:
        from rbxlookup.main import _build_all

        config = load_config(
            path=str(tmp_path / "missing.yaml"),
            settings=_settings(
                database_path=str(tmp_path / "custom.db"),
                upstream_timeout_seconds=2.5,
                cache_ttl_seconds=60,
                search_history_default_limit=3,
            ),
        )

        components = _build_all(config)
        try:
            assert components["user_store"]._db_path == tmp_path / "custom.db"
            assert components["user_resolver"]._cache_ttl_seconds == 60
            assert components["profile_service"]._timeout == 2.5
            assert components["search_history_default_limit"] == 3
        finally:
            await components["http_client"].aclose()

    @pytest.mark.asyncio
    async def test_yaml_roblox_section_reaches_provider(self, tmp_path: Path) -> None:
        from rbxlookup.main import _build_all

        yaml_path = tmp_path / "config.yaml"
        yaml_path.write_text("roblox:\n  users_base_url: http://users.local/\n")

        components = _build_all(load_config(path=str(yaml_path), settings=_settings()))
        try:
            assert components["profile_service"]._users_url == "http://users.local"
            assert components["profile_service"]._friends_url == "https://friends.roblox.com"
        finally:
            await components["http_client"].aclose()


# ======================================================================
# create_app
# ======================================================================


class TestCreateApp:
    def test_returns_fastapi_with_routes(self) -> None:
        from rbxlookup.main import create_app

        application = create_app()

        assert isinstance(application, FastAPI)
        paths = {route.path for route in application.routes}
        assert "/api/health" in paths
        assert "/api/users/{user_id}" in paths
