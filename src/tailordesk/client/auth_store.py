"""
Client-side auth store.

Holds the signed-in user and credential token for one client instance,
restores them from persistent storage at bootstrap, and mirrors the server
session as a read model.
"""

import asyncio
from datetime import datetime, timedelta

import httpx
import jwt
import pydantic

from tailordesk.client.api import AuthApi, AuthApiError
from tailordesk.client.storage import (
    AUTH_TOKEN_KEY,
    LAST_LOGIN_KEY,
    REFRESH_TOKEN_KEY,
    USER_KEY,
    CredentialStorage,
)
from tailordesk.core.logging import get_logger
from tailordesk.core.security import read_token_claims
from tailordesk.models.auth_schemas import LogoutResult
from tailordesk.models.enums import SessionStatus
from tailordesk.models.session import Session, SessionUser
from tailordesk.utils.datetime import from_timestamp, now_utc

logger = get_logger(__name__)

SESSION_DURATION = timedelta(hours=8)
EXTENDED_SESSION_DURATION = timedelta(days=30)

LOCAL_LOGOUT_MESSAGE = "Logged out locally"


def read_credential(token: str) -> tuple[SessionUser | None, datetime | None]:
    """Decode the user and expiry carried by a credential token, or (None, None)."""
    try:
        claims = read_token_claims(token)
        user = SessionUser.model_validate(claims)
    except (jwt.InvalidTokenError, pydantic.ValidationError):
        return None, None

    exp = claims.get("exp")
    expiry = from_timestamp(exp) if isinstance(exp, (int, float)) else None
    return user, expiry


class AuthStore:
    """Authentication state of a client application."""

    store_id = "auth"

    def __init__(self, storage: CredentialStorage, api: AuthApi | None = None):
        self.storage = storage
        self.api = api

        self.user: SessionUser | None = None
        self.token: str | None = None
        self.refresh_token: str | None = None
        self.session_expiry: datetime | None = None
        self.is_refreshing = False

        self._pending = False
        self._init_task: asyncio.Task | None = None

    @property
    def is_logged_in(self) -> bool:
        return (
            self.token is not None
            and self.session_expiry is not None
            and now_utc() < self.session_expiry
        )

    @property
    def status(self) -> SessionStatus:
        if self._pending:
            return SessionStatus.PENDING
        if self.is_logged_in and self.user is not None:
            return SessionStatus.AUTHENTICATED
        return SessionStatus.UNAUTHENTICATED

    @property
    def session(self) -> Session:
        status = self.status
        if status == SessionStatus.AUTHENTICATED:
            return Session.for_user(self.user, expires_at=self.session_expiry)
        return Session(status=status)

    @property
    def initialized(self) -> bool:
        return self._init_task is not None and self._init_task.done()

    async def init(self) -> None:
        """
        Restore a previously persisted session.

        Runs once per store. Every caller, including one that overlaps the
        first, returns only after the restore has finished.
        """
        if self._init_task is None:
            self._pending = True
            self._init_task = asyncio.create_task(self._run_init())
        await asyncio.shield(self._init_task)

    async def _run_init(self) -> None:
        try:
            await asyncio.to_thread(self._restore)
        finally:
            self._pending = False

    def _restore(self) -> None:
        token = self.storage.get(AUTH_TOKEN_KEY)
        if not token:
            logger.info("auth_store.no_stored_credential")
            return

        user, token_expiry = read_credential(token)
        if user is None:
            logger.warning("auth_store.unreadable_credential")
            self.clear_auth_state()
            return

        now = now_utc()
        if token_expiry is not None and token_expiry <= now:
            logger.info("auth_store.credential_expired", user_id=user.id)
            self.clear_auth_state()
            return

        expiry = now + SESSION_DURATION
        if token_expiry is not None:
            expiry = min(expiry, token_expiry)

        self.user = user
        self.token = token
        self.refresh_token = self.storage.get(REFRESH_TOKEN_KEY)
        self.session_expiry = expiry
        logger.info("auth_store.restored", user_id=user.id)

    def set_auth_state(
        self,
        user: SessionUser,
        token: str,
        refresh_token: str | None = None,
        remember: bool = False,
    ) -> Session:
        """
        Record a successful sign-in and persist it.

        Raises:
            ValueError: If ``token`` is empty
        """
        if not token:
            raise ValueError("No token provided")

        duration = EXTENDED_SESSION_DURATION if remember else SESSION_DURATION
        now = now_utc()

        self.user = user
        self.token = token
        self.refresh_token = refresh_token
        self.session_expiry = now + duration

        self._persist(now)
        return self.session

    def _persist(self, login_time: datetime) -> None:
        self.storage.set(USER_KEY, self.user.model_dump(mode="json"))
        self.storage.set(AUTH_TOKEN_KEY, self.token)
        if self.refresh_token:
            self.storage.set(REFRESH_TOKEN_KEY, self.refresh_token)
        else:
            self.storage.remove(REFRESH_TOKEN_KEY)
        self.storage.set(LAST_LOGIN_KEY, login_time.isoformat())

    def clear_auth_state(self) -> None:
        self.user = None
        self.token = None
        self.refresh_token = None
        self.session_expiry = None
        self.storage.clear_credentials()

    def _require_api(self) -> AuthApi:
        if self.api is None:
            raise RuntimeError("AuthStore has no AuthApi configured")
        return self.api

    async def login(self, email: str, password: str, remember: bool = False) -> Session:
        """
        Sign in against the server.

        Raises:
            AuthApiError: If the server rejects the credentials
        """
        api = self._require_api()
        self._pending = True
        try:
            response = await api.login(email, password, remember=remember)
        finally:
            self._pending = False

        logger.info("auth_store.login", user_id=response.user.id, remember=remember)
        return self.set_auth_state(response.user, response.token, remember=remember)

    async def logout(self) -> LogoutResult:
        """
        Sign out: local state is cleared first, then the server is told.

        A server failure does not undo the local logout.
        """
        token = self.token
        self.clear_auth_state()

        if self.api is None:
            return LogoutResult(success=True, message=LOCAL_LOGOUT_MESSAGE)

        try:
            result = await self.api.logout(token)
        except (AuthApiError, httpx.HTTPError) as exc:
            logger.warning("auth_store.server_logout_failed", error=str(exc))
            return LogoutResult(success=True, message=LOCAL_LOGOUT_MESSAGE)

        if not result.success:
            logger.warning("auth_store.server_logout_reported_failure", message=result.message)
        return result

    async def refresh_session(self) -> bool:
        """Exchange the current token for a fresh one. Concurrent calls are skipped."""
        if self.is_refreshing:
            logger.info("auth_store.refresh_in_progress")
            return False
        if self.api is None:
            return False

        self.is_refreshing = True
        try:
            response = await self.api.refresh(self.token)
        except (AuthApiError, httpx.HTTPError) as exc:
            logger.warning("auth_store.refresh_failed", error=str(exc))
            return False
        finally:
            self.is_refreshing = False

        self.user = response.user
        if response.token:
            now = now_utc()
            self.token = response.token
            self.session_expiry = now + SESSION_DURATION
            self._persist(now)
        return True

    def get_auth_headers(self) -> dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}
