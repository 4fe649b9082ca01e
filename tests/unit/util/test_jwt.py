"""Unit tests for JWT helpers."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import jwt
import pytest

from comnet.config import AuthSettings
from comnet.util.jwt import JWTError, create_token, verify_token

SETTINGS = AuthSettings(jwt_secret="unit-test-secret-with-at-least-32-bytes")


class TestJWT:
    def test_claims_survive_encoding(self):
        user_id, network_id = str(uuid4()), str(uuid4())

        payload = verify_token(create_token(user_id, "ada", network_id, SETTINGS), SETTINGS)

        assert payload.user_id == user_id
        assert payload.username == "ada"
        assert payload.network_id == network_id
        assert payload.exp > datetime.now(timezone.utc) + timedelta(days=6)

    def test_network_claim_is_optional(self):
        payload = verify_token(create_token("u1", "ada", None, SETTINGS), SETTINGS)

        assert payload.network_id is None

    def test_expired_token_is_rejected(self):
        token = jwt.encode(
            {
                "user_id": "u1",
                "username": "ada",
                "exp": datetime.now(timezone.utc) - timedelta(minutes=1),
            },
            SETTINGS.jwt_secret,
            algorithm=SETTINGS.jwt_algorithm,
        )

        with pytest.raises(JWTError, match="expired"):
            verify_token(token, SETTINGS)

    def test_token_signed_with_other_secret_is_rejected(self):
        other = AuthSettings(jwt_secret="another-secret-that-is-also-32-bytes-long")
        token = create_token("u1", "ada", None, other)

        with pytest.raises(JWTError, match="Invalid token"):
            verify_token(token, SETTINGS)

    def test_token_without_required_claims_is_rejected(self):
        token = jwt.encode(
            {"sub": "u1", "exp": datetime.now(timezone.utc) + timedelta(hours=1)},
            SETTINGS.jwt_secret,
            algorithm=SETTINGS.jwt_algorithm,
        )

        with pytest.raises(JWTError, match="payload"):
            verify_token(token, SETTINGS)
