"""Tests for password hashing and credential tokens."""

from datetime import timedelta

import jwt
import pytest

from tailordesk.core.security import (
    create_access_token,
    create_password_reset_token,
    decode_access_token,
    decode_password_reset_token,
    hash_password,
    password_fingerprint,
    read_token_claims,
    verify_password,
)


class TestPasswordHashing:
    """Test Argon2 password helpers."""

    def test_hash_and_verify(self):
        hashed = hash_password("s3cret-thread")

        assert hashed != "s3cret-thread"
        assert verify_password("s3cret-thread", hashed) is True
        assert verify_password("wrong", hashed) is False


class TestAccessTokens:
    """Test JWT creation and verification."""

    def test_round_trip_keeps_claims(self):
        token = create_access_token({"id": 7, "email": "a@b.co"}, timedelta(minutes=5))

        claims = decode_access_token(token)

        assert claims["id"] == 7
        assert claims["email"] == "a@b.co"
        assert claims["exp"] > claims["iat"]

    def test_expired_token_rejected(self):
        token = create_access_token({"id": 7}, timedelta(seconds=-1))

        with pytest.raises(jwt.ExpiredSignatureError):
            decode_access_token(token)

    def test_token_signed_with_other_secret_rejected(self, monkeypatch):
        token = create_access_token({"id": 7}, timedelta(minutes=5))
        monkeypatch.setenv("JWT_SECRET", "a-different-secret")

        with pytest.raises(jwt.InvalidSignatureError):
            decode_access_token(token)

    def test_garbage_rejected(self):
        with pytest.raises(jwt.InvalidTokenError):
            decode_access_token("not.a.token")

    def test_read_claims_ignores_signature_and_expiry(self, monkeypatch):
        token = create_access_token({"id": 7}, timedelta(seconds=-1))
        monkeypatch.setenv("JWT_SECRET", "a-different-secret")

        assert read_token_claims(token)["id"] == 7


class TestPasswordResetTokens:
    """Test reset tokens bound to the current password hash."""

    def test_round_trip(self):
        hashed = hash_password("s3cret-thread")
        token = create_password_reset_token(42, hashed)

        user_id, fingerprint = decode_password_reset_token(token)

        assert user_id == 42
        assert fingerprint == password_fingerprint(hashed)

    def test_fingerprint_changes_with_password(self):
        first = hash_password("s3cret-thread")
        second = hash_password("s3cret-thread")

        assert password_fingerprint(first) != password_fingerprint(second)
        assert password_fingerprint(first) == password_fingerprint(first)

    def test_login_token_rejected(self):
        token = create_access_token({"id": 42, "userId": 42}, timedelta(hours=1))

        with pytest.raises(jwt.InvalidTokenError, match="Not a password reset token"):
            decode_password_reset_token(token)

    def test_expires_after_an_hour(self):
        token = create_password_reset_token(42, hash_password("s3cret-thread"))

        claims = decode_access_token(token)

        assert claims["exp"] - claims["iat"] == 3600
