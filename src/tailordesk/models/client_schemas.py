# File: src/tailordesk/models/client_schemas.py
"""Pydantic schemas for Client reads, filters and aggregates."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tailordesk.core.validators import validate_search_term
from tailordesk.models.enums import SortOrder


class ClientRead(BaseModel):
    """Schema for reading a client from the database."""

    id: int
    user_id: int
    name: str
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    notes: str | None = None
    has_orders: bool = False
    created_at: datetime
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class ClientFilterOptions(BaseModel):
    """Query options for listing clients."""

    search: str | None = None
    sort_by: Literal["name", "created_at"] = "created_at"
    sort_order: SortOrder = SortOrder.DESC
    limit: int = Field(50, ge=1, le=500)
    offset: int = Field(0, ge=0)

    @field_validator("search")
    @classmethod
    def validate_search(cls, v: str | None) -> str | None:
        return validate_search_term(v)


class ClientStats(BaseModel):
    """Aggregate figures over a user's clients."""

    total: int = Field(0, ge=0)
    with_measurements: int = Field(0, ge=0)
    average_measurements: float = Field(0.0, ge=0)
