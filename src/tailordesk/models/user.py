# File: src/tailordesk/models/user.py
"""User model for authentication."""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tailordesk.core.db import Base
from tailordesk.utils.datetime import now_utc_naive

if TYPE_CHECKING:
    from tailordesk.models.client import Client


class User(Base):
    """A tailoring business owner who signs in and manages clients."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(
        String(200),
        nullable=False,
    )

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
    )

    hashed_password: Mapped[str] = mapped_column(
        String,
        nullable=False,
    )

    avatar: Mapped[str | None] = mapped_column(String(500), nullable=True)
    business_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)

    has_completed_setup: Mapped[bool] = mapped_column(
        default=False,
        nullable=False,
    )

    is_active: Mapped[bool] = mapped_column(
        default=True,
        nullable=False,
        index=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        nullable=False,
        default=now_utc_naive,
    )

    updated_at: Mapped[datetime] = mapped_column(
        nullable=False,
        default=now_utc_naive,
        onupdate=now_utc_naive,
    )

    # Relationships
    clients: Mapped[list["Client"]] = relationship(
        "Client",
        back_populates="user",
        cascade="all, delete-orphan",
    )

    @property
    def display_name(self) -> str:
        """Return the name, falling back to email."""
        return self.name.strip() or self.email

    def __repr__(self) -> str:
        return f"<User(email={self.email}, is_active={self.is_active})>"
