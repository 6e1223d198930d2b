"""
Credential cookie helpers.

The ``auth_token`` cookie is always set and deleted with the same
attributes: browsers only drop a cookie when path and flags match.
"""

import os
from datetime import timedelta
from typing import Any

from starlette.responses import Response

AUTH_COOKIE_NAME = "auth_token"
AUTH_COOKIE_PATH = "/"


def is_development() -> bool:
    return os.getenv("ENVIRONMENT", "development") == "development"


def auth_cookie_options() -> dict[str, Any]:
    """Attributes shared by every set and delete of the credential cookie."""
    return {
        "httponly": True,
        "secure": not is_development(),
        "path": AUTH_COOKIE_PATH,
        "samesite": "lax",
    }


def set_auth_cookie(response: Response, token: str, max_age: timedelta) -> None:
    response.set_cookie(
        AUTH_COOKIE_NAME,
        token,
        max_age=int(max_age.total_seconds()),
        **auth_cookie_options(),
    )


def delete_auth_cookie(response: Response) -> None:
    response.delete_cookie(AUTH_COOKIE_NAME, **auth_cookie_options())
