"""Unit tests for request path masking and settings-derived URLs."""

import pytest

from ubos.config import Settings
from ubos.util.observability import mask_token_path


class TestMaskTokenPath:
    """Invitation tokens must not reach trace attributes."""

    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("/invitations/abcDEF123_-xyz/accept", "/invitations/***/accept"),
            ("/invitations/abcDEF123_-xyz/validate", "/invitations/***/validate"),
        ],
    )
    def test_masks_token_routes(self, path, expected):
        assert mask_token_path(path) == expected

    @pytest.mark.parametrize(
        "path",
        [
            "/invitations",
            "/invitations/stats",
            "/invitations/3f2b1c9e-6a0d-4c5e-9b7a-1d2e3f4a5b6c/resend",
            "/health",
        ],
    )
    def test_leaves_other_paths_alone(self, path):
        assert mask_token_path(path) == path


class TestSettings:
    """Tests for URLs derived from environment and host."""

    def test_development_frontend_is_local(self):
        settings = Settings(environment="development", frontend_host="localhost")

        assert settings.api.frontend_url == "http://localhost:3000"
        assert settings.api.cors_origins[0] == "http://localhost:3000"

    def test_production_uses_https(self):
        settings = Settings(
            environment="production",
            frontend_host="app.ubos.example",
            cors_origins=[],
        )

        assert settings.api.frontend_url == "https://app.ubos.example"
        assert settings.api.cors_origins == ["https://app.ubos.example"]
