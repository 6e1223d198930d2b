# File: src/tailordesk/models/order.py
"""Order model: work ordered by a client."""

from datetime import date, datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy import JSON, Date, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tailordesk.core.db import Base
from tailordesk.models.enums import OrderStatus
from tailordesk.utils.datetime import now_utc_naive

if TYPE_CHECKING:
    from tailordesk.models.client import Client


class Order(Base):
    """An order placed by a client."""

    __tablename__ = "orders"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    client_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("clients.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    due_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    total_amount: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

    status: Mapped[OrderStatus] = mapped_column(
        String(20),
        nullable=False,
        default=OrderStatus.PENDING.value,
        index=True,
    )

    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Free-form garment details (fabric, style references, fittings)
    details: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        nullable=False,
        default=now_utc_naive,
    )

    updated_at: Mapped[datetime] = mapped_column(
        nullable=False,
        default=now_utc_naive,
        onupdate=now_utc_naive,
    )

    client: Mapped["Client"] = relationship("Client", back_populates="orders")

    def __repr__(self) -> str:
        return f"<Order(id={self.id}, client_id={self.client_id}, status={self.status})>"
