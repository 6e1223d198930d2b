"""Tests for domain models and their read/filter schemas."""

from datetime import date, datetime, timezone

import pydantic
import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from tailordesk.models import (
    Client,
    ClientFilterOptions,
    ClientRead,
    OrderFilterOptions,
    OrderRead,
    OrderStats,
    OrderStatus,
    OrderStatusTotal,
    Session,
    SessionStatus,
    SessionStore,
    SessionUser,
    SortOrder,
)
from tailordesk.client import AuthStore, MemoryCredentialStorage
from tests.factories import ClientFactory, OrderFactory, UserFactory

USER = SessionUser(id=1, email="owner@example.com", name="Ada Stitch")


class TestSessionModel:
    """Test the session read model."""

    def test_default_is_unauthenticated(self):
        session = Session()

        assert session.status == SessionStatus.UNAUTHENTICATED
        assert session.is_authenticated is False

    def test_authenticated_requires_user_id(self):
        with pytest.raises(pydantic.ValidationError, match="requires user_id"):
            Session(status=SessionStatus.AUTHENTICATED)

    def test_for_user(self):
        expires = datetime(2030, 1, 1, tzinfo=timezone.utc)

        session = Session.for_user(USER, expires_at=expires)

        assert session.is_authenticated
        assert session.user_id == 1
        assert session.user == USER
        assert session.expires_at == expires

    def test_auth_store_satisfies_session_store(self):
        assert isinstance(AuthStore(MemoryCredentialStorage()), SessionStore)


class TestFilterOptions:
    """Test list filter schemas."""

    def test_client_filter_defaults(self):
        options = ClientFilterOptions()

        assert options.sort_by == "created_at"
        assert options.sort_order == SortOrder.DESC
        assert options.limit == 50

    def test_client_filter_rejects_wildcards(self):
        with pytest.raises(pydantic.ValidationError):
            ClientFilterOptions(search="100%")

    def test_client_filter_rejects_unknown_sort(self):
        with pytest.raises(pydantic.ValidationError):
            ClientFilterOptions(sort_by="phone")

    def test_client_filter_limit_bounds(self):
        with pytest.raises(pydantic.ValidationError):
            ClientFilterOptions(limit=0)
        with pytest.raises(pydantic.ValidationError):
            ClientFilterOptions(limit=501)

    def test_order_filter_date_range(self):
        options = OrderFilterOptions(date_from=date(2025, 1, 1), date_to=date(2025, 1, 1))
        assert options.date_from == options.date_to

        with pytest.raises(pydantic.ValidationError, match="on or before"):
            OrderFilterOptions(date_from=date(2025, 2, 1), date_to=date(2025, 1, 1))

    def test_order_filter_status_list(self):
        options = OrderFilterOptions(status=["pending", "completed"])

        assert options.status == [OrderStatus.PENDING, OrderStatus.COMPLETED]


class TestOrderStats:
    """Test the aggregate schema invariant."""

    def test_breakdown_must_match_total(self):
        with pytest.raises(pydantic.ValidationError, match="add up to total"):
            OrderStats(
                total=3,
                by_status=[OrderStatusTotal(status=OrderStatus.PENDING, count=1)],
            )

    def test_consistent_breakdown(self):
        stats = OrderStats(
            total=3,
            total_revenue=300.0,
            average_order_value=100.0,
            by_status=[
                OrderStatusTotal(status=OrderStatus.PENDING, count=1, amount=100.0),
                OrderStatusTotal(status=OrderStatus.COMPLETED, count=2, amount=200.0),
            ],
        )

        assert stats.total == 3


class TestPersistence:
    """Test ORM models against the database."""

    @pytest.mark.asyncio
    async def test_client_with_orders(self, db_session: AsyncSession):
        client = await ClientFactory.create(db_session, email="grace@example.com")
        await OrderFactory.create(db_session, client_id=client.id, total_amount=80.0)
        await OrderFactory.create(
            db_session,
            client_id=client.id,
            status=OrderStatus.COMPLETED,
            due_date=date(2025, 6, 1),
            details={"fabric": "linen"},
        )

        result = await db_session.execute(
            select(Client).where(Client.id == client.id).options(selectinload(Client.orders))
        )
        loaded = result.scalar_one()

        assert len(loaded.orders) == 2
        reads = sorted(
            (OrderRead.model_validate(order) for order in loaded.orders), key=lambda o: o.id
        )
        assert reads[0].status == OrderStatus.PENDING
        assert reads[1].status == OrderStatus.COMPLETED
        assert reads[1].details == {"fabric": "linen"}

        client_read = ClientRead.model_validate(loaded)
        assert client_read.name == "Grace Hemline"
        assert client_read.user_id == loaded.user_id

    @pytest.mark.asyncio
    async def test_user_display_name_falls_back_to_email(self, db_session: AsyncSession):
        user = await UserFactory.create(db_session, email="blank@example.com", name=" ")

        assert user.display_name == "blank@example.com"

    @pytest.mark.asyncio
    async def test_session_user_from_orm(self, db_session: AsyncSession):
        user = await UserFactory.create(db_session, email="ada@example.com", name="Ada")

        session_user = SessionUser.model_validate(user)

        assert session_user.id == user.id
        assert session_user.email == "ada@example.com"
        assert session_user.avatar is None
