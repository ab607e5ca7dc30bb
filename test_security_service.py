from datetime import datetime, timedelta

import pytest
from jose import jwt

from mini_jira.core import get_settings
from mini_jira.models.user import User, UserRole
from mini_jira.services.security_service import SecurityService

settings = get_settings()


class TestPasswordHashing:

    def test_create_password_hash(self):
        password = "testpassword123"
        hash_result = SecurityService.create_password_hash(password)

        assert hash_result != password
        assert hash_result.startswith("$2b$")

    def test_verify_password_correct(self):
        hash_password = SecurityService.create_password_hash("testpassword123")
        assert SecurityService.verify_password("testpassword123", hash_password) is True

    def test_verify_password_incorrect(self):
        hash_password = SecurityService.create_password_hash("testpassword123")
        assert SecurityService.verify_password("wrongpassword", hash_password) is False


class TestTokens:
    """Access/refresh token issue and verification"""

    def setup_method(self):
        self.user = User(
            id=7,
            email="test@x.com",
            name="Test User",
            password_hash="$2b$12$test_hashed_password",
            role=UserRole.MEMBER,
        )

    def _raw_token(self, claims, **overrides):
        now = datetime.utcnow()
        payload = {
            "iat": now,
            "exp": now + timedelta(minutes=5),
            "iss": settings.JWT_ISSUER,
            "aud": settings.JWT_AUDIENCE,
            **claims,
        }
        payload.update(overrides)
        return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

    def test_create_tokens_pair(self):
        tokens = SecurityService.create_tokens(self.user)

        assert set(tokens) == {"token", "refresh_token"}
        assert tokens["token"] != tokens["refresh_token"]

    def test_access_token_claims(self):
        token = SecurityService.create_tokens(self.user)["token"]
        payload = SecurityService.verify_token(token)

        assert payload["sub"] == "7"
        assert payload["email"] == "test@x.com"
        assert payload["role"] == "member"
        assert payload["iss"] == settings.JWT_ISSUER
        assert payload["aud"] == settings.JWT_AUDIENCE
        assert "type" not in payload

    def test_access_token_ignores_type_claim(self):
        token = SecurityService.create_access_token({"sub": "7", "type": "refresh"})
        assert SecurityService.verify_token(token) is not None

    def test_refresh_token_claims(self):
        token = SecurityService.create_tokens(self.user)["refresh_token"]
        payload = SecurityService.verify_refresh_token(token)

        assert payload["sub"] == "7"
        assert payload["type"] == "refresh"
        assert payload["jti"]

    def test_refresh_tokens_are_unique(self):
        first = SecurityService.create_refresh_token({"sub": "7"})
        second = SecurityService.create_refresh_token({"sub": "7"})
        assert first != second

    def test_refresh_token_rejected_as_access(self):
        token = SecurityService.create_tokens(self.user)["refresh_token"]
        assert SecurityService.verify_token(token) is None

    def test_access_token_rejected_as_refresh(self):
        token = SecurityService.create_tokens(self.user)["token"]
        assert SecurityService.verify_refresh_token(token) is None

    def test_expired_token(self):
        token = SecurityService.create_access_token(
            {"sub": "7"}, expires_delta=timedelta(seconds=-1)
        )
        assert SecurityService.verify_token(token) is None

    def test_wrong_audience(self):
        token = self._raw_token({"sub": "7"}, aud="someone-else")
        assert SecurityService.verify_token(token) is None

    def test_wrong_issuer(self):
        token = self._raw_token({"sub": "7"}, iss="someone-else")
        assert SecurityService.verify_token(token) is None

    def test_wrong_secret(self):
        now = datetime.utcnow()
        token = jwt.encode(
            {
                "sub": "7",
                "exp": now + timedelta(minutes=5),
                "iss": settings.JWT_ISSUER,
                "aud": settings.JWT_AUDIENCE,
            },
            "not-the-secret",
            algorithm=settings.ALGORITHM,
        )
        assert SecurityService.verify_token(token) is None

    def test_missing_subject(self):
        token = self._raw_token({})
        assert SecurityService.verify_token(token) is None

    @pytest.mark.parametrize("garbage", ["", "not-a-token", "a.b.c"])
    def test_malformed_token(self, garbage):
        assert SecurityService.verify_token(garbage) is None
        assert SecurityService.verify_refresh_token(garbage) is None
