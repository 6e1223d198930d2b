"""Tests for credential cookie helpers."""

from datetime import timedelta
from unittest.mock import MagicMock

import pytest

from tailordesk.core.cookies import (
    AUTH_COOKIE_NAME,
    auth_cookie_options,
    delete_auth_cookie,
    is_development,
    set_auth_cookie,
)


class TestAuthCookieOptions:
    """Test the shared cookie attributes."""

    def test_development_cookie_is_not_secure(self):
        assert is_development() is True
        assert auth_cookie_options() == {
            "httponly": True,
            "secure": False,
            "path": "/",
            "samesite": "lax",
        }

    def test_production_cookie_is_secure(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "production")

        assert is_development() is False
        assert auth_cookie_options()["secure"] is True

    def test_environment_defaults_to_development(self, monkeypatch):
        monkeypatch.delenv("ENVIRONMENT", raising=False)

        assert is_development() is True


class TestSetAndDelete:
    """Set and delete must agree on every attribute."""

    @pytest.mark.parametrize("environment", ["development", "production"])
    def test_delete_uses_same_attributes_as_set(self, monkeypatch, environment):
        monkeypatch.setenv("ENVIRONMENT", environment)
        response = MagicMock()

        set_auth_cookie(response, "token-value", timedelta(days=7))
        delete_auth_cookie(response)

        set_kwargs = response.set_cookie.call_args.kwargs
        delete_kwargs = response.delete_cookie.call_args.kwargs
        set_kwargs.pop("max_age")

        assert response.set_cookie.call_args.args == (AUTH_COOKIE_NAME, "token-value")
        assert response.delete_cookie.call_args.args == (AUTH_COOKIE_NAME,)
        assert delete_kwargs == set_kwargs

    def test_set_cookie_max_age_in_seconds(self):
        response = MagicMock()

        set_auth_cookie(response, "token-value", timedelta(days=90))

        assert response.set_cookie.call_args.kwargs["max_age"] == 90 * 24 * 60 * 60
