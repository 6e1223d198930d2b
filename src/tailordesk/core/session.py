"""
Server-side session mechanism.

The session lives in the signed cookie managed by Starlette's
``SessionMiddleware``; ``CookieSessionBackend`` reads and writes the
authentication part of it. Backends are async so a shared store (Redis,
database) can replace the cookie without touching the routes.
"""

from abc import ABC, abstractmethod
from datetime import timedelta

import pydantic
from starlette.requests import Request

from tailordesk.core.logging import get_logger
from tailordesk.models.session import Session, SessionUser
from tailordesk.utils.datetime import now_utc, parse_iso

logger = get_logger(__name__)

# Matches the SessionMiddleware cookie max_age
SESSION_MAX_AGE = timedelta(days=14)

SESSION_USER_KEY = "user"
SESSION_EXPIRES_KEY = "expires_at"


class SessionBackend(ABC):
    """Per-request access to the server session."""

    @abstractmethod
    async def get(self, request: Request) -> Session:
        """Read the session for ``request``. Must not modify it."""

    @abstractmethod
    async def set_user(self, request: Request, user: SessionUser) -> Session:
        """Mark the request's session as authenticated for ``user``."""

    @abstractmethod
    async def clear(self, request: Request) -> None:
        """Drop all session state. Clearing an empty session is a no-op."""


class CookieSessionBackend(SessionBackend):
    """Session state stored in ``request.session``."""

    def __init__(self, max_age: timedelta = SESSION_MAX_AGE):
        self.max_age = max_age

    async def get(self, request: Request) -> Session:
        data = request.session
        raw_user = data.get(SESSION_USER_KEY)
        if not raw_user:
            return Session.unauthenticated()

        expires_at = parse_iso(data.get(SESSION_EXPIRES_KEY))
        if expires_at is not None and expires_at <= now_utc():
            return Session.unauthenticated()

        try:
            user = SessionUser.model_validate(raw_user)
        except pydantic.ValidationError:
            logger.warning("session.invalid_user_payload")
            return Session.unauthenticated()

        return Session.for_user(user, expires_at=expires_at)

    async def set_user(self, request: Request, user: SessionUser) -> Session:
        now = now_utc()
        expires_at = now + self.max_age
        request.session[SESSION_USER_KEY] = user.model_dump(mode="json")
        request.session[SESSION_EXPIRES_KEY] = expires_at.isoformat()
        return Session.for_user(user, expires_at=expires_at)

    async def clear(self, request: Request) -> None:
        request.session.clear()
