"""Unit tests for JWT utilities and JWTService."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from ubos.config import AuthSettings
from ubos.domain.service import JWTService
from ubos.util.jwt import JWTError, create_token, verify_token

SETTINGS = AuthSettings(jwt_secret="test-secret", jwt_expiry_days=1)


class TestJWT:
    """Tests for token encoding and decoding."""

    def test_round_trip_carries_user_and_organization(self):
        token = create_token("user-1", "org-1", SETTINGS)

        payload = verify_token(token, SETTINGS)

        assert payload.user_id == "user-1"
        assert payload.organization_id == "org-1"
        assert payload.exp > datetime.now(timezone.utc)

    def test_wrong_secret_is_rejected(self):
        token = create_token("user-1", "org-1", SETTINGS)

        with pytest.raises(JWTError, match="Invalid token"):
            verify_token(token, AuthSettings(jwt_secret="other-secret"))

    def test_expired_token_is_rejected(self):
        token = jwt.encode(
            {
                "user_id": "user-1",
                "organization_id": "org-1",
                "exp": datetime.now(timezone.utc) - timedelta(minutes=1),
            },
            SETTINGS.jwt_secret,
            algorithm=SETTINGS.jwt_algorithm,
        )

        with pytest.raises(JWTError, match="expired"):
            verify_token(token, SETTINGS)

    def test_token_without_organization_is_rejected(self):
        """Tokens minted without an organization cannot act on invitations."""
        token = jwt.encode(
            {"user_id": "user-1", "exp": datetime.now(timezone.utc) + timedelta(hours=1)},
            SETTINGS.jwt_secret,
            algorithm=SETTINGS.jwt_algorithm,
        )

        with pytest.raises(JWTError):
            verify_token(token, SETTINGS)


class TestJWTService:
    def test_verify_round_trip(self):
        service = JWTService(SETTINGS)
        token = service.create_token("user-1", "org-1")

        assert service.verify_token(token).organization_id == "org-1"

    def test_garbage_is_rejected(self):
        with pytest.raises(JWTError):
            JWTService(SETTINGS).verify_token("garbage")
