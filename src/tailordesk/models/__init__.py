"""Domain models package."""

from tailordesk.models.auth_schemas import (
    ActionResult,
    ForgotPasswordRequest,
    LoginRequest,
    LoginResponse,
    LogoutResult,
    RefreshResponse,
    RegisterRequest,
    ResetPasswordRequest,
    VerifyResetTokenResult,
)
from tailordesk.models.client import Client
from tailordesk.models.client_schemas import ClientFilterOptions, ClientRead, ClientStats
from tailordesk.models.enums import OrderStatus, SessionStatus, SortOrder
from tailordesk.models.order import Order
from tailordesk.models.order_schemas import (
    OrderFilterOptions,
    OrderRead,
    OrderStats,
    OrderStatusTotal,
)
from tailordesk.models.session import Session, SessionStore, SessionUser
from tailordesk.models.user import User

__all__ = [
    "ActionResult",
    "Client",
    "ClientFilterOptions",
    "ClientRead",
    "ClientStats",
    "ForgotPasswordRequest",
    "LoginRequest",
    "LoginResponse",
    "LogoutResult",
    "Order",
    "OrderFilterOptions",
    "OrderRead",
    "OrderStats",
    "OrderStatus",
    "OrderStatusTotal",
    "RefreshResponse",
    "RegisterRequest",
    "ResetPasswordRequest",
    "Session",
    "SessionStatus",
    "SessionStore",
    "SessionUser",
    "SortOrder",
    "User",
    "VerifyResetTokenResult",
]
