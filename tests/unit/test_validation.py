"""Unit tests for the upstream payload validators."""

from __future__ import annotations

import pytest

from rbxlookup.models.validation import (
    validate_avatar_thumbnails,
    validate_relation_count,
    validate_user_profile,
    validate_user_status,
    validate_username_history,
    validate_username_lookup,
)
from rbxlookup.utils.errors import UpstreamValidationError


class TestValidateUserProfile:
    def test_minimal_payload_fills_defaults(self):
        result = validate_user_profile({"id": 1, "name": "Roblox"})
        assert result.ok
        profile = result.value
        assert profile.description == ""
        assert profile.is_banned is False
        assert profile.has_verified_badge is False
        assert profile.display_name is None

    def test_document_is_camel_case(self):
        profile = validate_user_profile(
            {"id": 1, "name": "Roblox", "displayName": "Roblox", "isBanned": True}
        ).unwrap()
        document = profile.to_document()
        assert document["displayName"] == "Roblox"
        assert document["isBanned"] is True
        assert "display_name" not in document

    def test_unknown_keys_ignored(self):
        assert validate_user_profile({"id": 1, "name": "Roblox", "extra": [1, 2]}).ok

    @pytest.mark.parametrize(
        "payload",
        [
            {"name": "Roblox"},
            {"id": 1},
            {"id": "1", "name": "Roblox"},
            {"id": 1, "name": 42},
            {"id": 1, "name": "Roblox", "isBanned": "yes"},
            None,
            [],
            "not json",
        ],
    )
    def test_rejects_malformed(self, payload):
        result = validate_user_profile(payload)
        assert not result.ok
        assert result.errors
        with pytest.raises(UpstreamValidationError):
            result.unwrap()


class TestSecondaryShapes:
    def test_status(self):
        assert validate_user_status({"status": "hi"}).unwrap().status == "hi"
        assert not validate_user_status({"status": None}).ok

    def test_relation_count(self):
        assert validate_relation_count({"count": 5}).unwrap().count == 5
        assert not validate_relation_count({"count": "5"}).ok
        assert not validate_relation_count({}).ok

    def test_avatar_first_image(self):
        thumbs = validate_avatar_thumbnails(
            {"data": [{"targetId": 1, "state": "Completed", "imageUrl": "https://x/a.png"}]}
        ).unwrap()
        assert thumbs.first_image_url() == "https://x/a.png"

    def test_avatar_empty_data(self):
        assert validate_avatar_thumbnails({"data": []}).unwrap().first_image_url() is None

    def test_avatar_missing_url_is_invalid(self):
        assert not validate_avatar_thumbnails({"data": [{"targetId": 1}]}).ok

    def test_username_history_names(self):
        history = validate_username_history({"data": [{"name": "a"}, {"name": "b"}]}).unwrap()
        assert history.names() == ["a", "b"]

    def test_username_lookup(self):
        lookup = validate_username_lookup(
            {"data": [{"id": 456, "name": "robloxuser123", "requestedUsername": "robloxuser123"}]}
        ).unwrap()
        assert lookup.data[0].id == 456
        assert lookup.data[0].requested_username == "robloxuser123"

    def test_username_lookup_requires_data(self):
        result = validate_username_lookup({"users": []})
        assert not result.ok
        assert "data" in result.error_summary()
