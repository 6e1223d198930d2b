# File: src/tailordesk/models/order_schemas.py
"""Pydantic schemas for Order reads, filters and aggregates."""

from datetime import date, datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from tailordesk.models.enums import OrderStatus, SortOrder


class OrderRead(BaseModel):
    """Schema for reading an order from the database."""

    id: int
    client_id: int
    due_date: date | None = None
    total_amount: float = Field(..., ge=0)
    status: OrderStatus
    description: str | None = None
    details: dict[str, Any] | None = None
    created_at: datetime
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class OrderFilterOptions(BaseModel):
    """Query options for listing orders."""

    client_id: int | None = None
    status: list[OrderStatus] | None = None
    date_from: date | None = None
    date_to: date | None = None
    sort_by: Literal["created_at", "due_date", "total_amount"] = "created_at"
    sort_order: SortOrder = SortOrder.DESC
    limit: int = Field(50, ge=1, le=500)
    offset: int = Field(0, ge=0)

    @model_validator(mode="after")
    def validate_date_range(self) -> "OrderFilterOptions":
        if self.date_from and self.date_to and self.date_from > self.date_to:
            raise ValueError("date_from must be on or before date_to")
        return self


class OrderStatusTotal(BaseModel):
    status: OrderStatus
    count: int = Field(0, ge=0)
    amount: float = 0.0


class OrderStats(BaseModel):
    """Aggregate figures over a user's orders."""

    total: int = Field(0, ge=0)
    total_revenue: float = 0.0
    average_order_value: float = 0.0
    by_status: list[OrderStatusTotal] = []
    recent_orders: list[OrderRead] = []

    @model_validator(mode="after")
    def validate_status_breakdown(self) -> "OrderStats":
        if self.by_status and sum(item.count for item in self.by_status) != self.total:
            raise ValueError("by_status counts must add up to total")
        return self
