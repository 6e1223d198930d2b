# File: src/tailordesk/models/session.py
"""Session read model shared by the server backend and the client auth store."""

from datetime import datetime
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, model_validator

from tailordesk.models.enums import SessionStatus


class SessionUser(BaseModel):
    """Identity kept in the server session and carried by the credential token."""

    id: int
    email: str
    name: str
    avatar: str | None = None

    model_config = ConfigDict(from_attributes=True)


class Session(BaseModel):
    """
    Authentication state of one connection.

    An authenticated session always names its user.
    """

    status: SessionStatus = SessionStatus.UNAUTHENTICATED
    user_id: int | None = Field(None, description="Authenticated user id")
    expires_at: datetime | None = None
    user: SessionUser | None = None

    @model_validator(mode="after")
    def check_authenticated_has_user(self) -> "Session":
        if self.status == SessionStatus.AUTHENTICATED and self.user_id is None:
            raise ValueError("authenticated session requires user_id")
        return self

    @classmethod
    def unauthenticated(cls) -> "Session":
        return cls(status=SessionStatus.UNAUTHENTICATED)

    @classmethod
    def for_user(cls, user: SessionUser, expires_at: datetime | None = None) -> "Session":
        return cls(
            status=SessionStatus.AUTHENTICATED,
            user_id=user.id,
            expires_at=expires_at,
            user=user,
        )

    @property
    def is_authenticated(self) -> bool:
        return self.status == SessionStatus.AUTHENTICATED


@runtime_checkable
class SessionStore(Protocol):
    """Read interface every session holder exposes to the bootstrap layer."""

    @property
    def status(self) -> SessionStatus: ...

    @property
    def session(self) -> Session: ...
