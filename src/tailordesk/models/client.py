# File: src/tailordesk/models/client.py
"""Client model: a customer of the tailoring business."""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tailordesk.core.db import Base
from tailordesk.utils.datetime import now_utc_naive

if TYPE_CHECKING:
    from tailordesk.models.order import Order
    from tailordesk.models.user import User


class Client(Base):
    """
    A customer record owned by one user.

    Orders reference clients by ``client_id``; deleting a client removes
    its orders.
    """

    __tablename__ = "clients"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    address: Mapped[str | None] = mapped_column(String(500), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

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
    user: Mapped["User"] = relationship("User", back_populates="clients")

    orders: Mapped[list["Order"]] = relationship(
        "Order",
        back_populates="client",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Client(id={self.id}, name={self.name})>"
