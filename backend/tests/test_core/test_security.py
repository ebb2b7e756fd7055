"""Tests for access token verification."""

from datetime import timedelta

from jose import jwt

from app.core.config import settings
from app.core.security import decode_access_token
from tests.mocks.tokens import make_token


class TestDecodeAccessToken:
    def test_returns_claims(self):
        payload = decode_access_token(make_token("olivia"))

        assert payload["sub"] == "olivia"
        assert payload["type"] == "access"
        assert payload["exp"] > payload["iat"]

    def test_expired_token_rejected(self):
        assert decode_access_token(make_token("olivia", expires_in=timedelta(seconds=-10))) is None

    def test_wrong_key_rejected(self):
        assert decode_access_token(make_token("olivia", key="other-key")) is None

    def test_wrong_type_rejected(self):
        assert decode_access_token(make_token("olivia", token_type="refresh")) is None

    def test_missing_type_counts_as_access(self):
        token = jwt.encode({"sub": "olivia"}, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
        assert decode_access_token(token)["sub"] == "olivia"

    def test_missing_subject_rejected(self):
        token = jwt.encode({"type": "access"}, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
        assert decode_access_token(token) is None

    def test_garbage_rejected(self):
        assert decode_access_token("not-a-jwt") is None
