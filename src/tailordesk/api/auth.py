# File: src/tailordesk/api/auth.py
"""Authentication endpoints and dependencies."""

import asyncio
import os

import httpx
import jwt
from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.requests import Request
from starlette.responses import Response

from tailordesk.bootstrap.context import AUTH_HANDLE, EMAIL_HANDLE, AppContext
from tailordesk.core.cookies import AUTH_COOKIE_NAME, delete_auth_cookie, set_auth_cookie
from tailordesk.core.db import get_db
from tailordesk.core.email import EmailService
from tailordesk.core.errors import (
    ConflictError,
    EmailDeliveryError,
    NotFoundError,
    UnauthorizedError,
)
from tailordesk.core.logging import get_logger
from tailordesk.core.security import (
    LOGIN_TOKEN_TTL,
    REFRESH_TOKEN_TTL,
    REGISTER_TOKEN_TTL,
    create_access_token,
    create_password_reset_token,
    decode_access_token,
    decode_password_reset_token,
    hash_password,
    password_fingerprint,
    verify_password,
)
from tailordesk.core.session import SessionBackend
from tailordesk.core.validators import validate_password_strength
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
from tailordesk.models.session import Session, SessionUser
from tailordesk.models.user import User

logger = get_logger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])

LOGOUT_SUCCESS_MESSAGE = "Logged out successfully"
LOGOUT_FAILURE_MESSAGE = "Error during logout"
FORGOT_PASSWORD_MESSAGE = "If an account exists for that email, a reset link has been sent"
INVALID_RESET_TOKEN_MESSAGE = "Token is invalid or has expired"


def get_app_context(request: Request) -> AppContext:
    """Dependency returning the context built by create_app()."""
    return request.app.state.context


def get_session_backend(context: AppContext = Depends(get_app_context)) -> SessionBackend:
    """Dependency returning the session backend published by the auth bootstrap."""
    return context.inject(AUTH_HANDLE)


def session_clear_timeout() -> float:
    """Upper bound (seconds) on clearing the server session during logout."""
    return float(os.getenv("SESSION_CLEAR_TIMEOUT_SECONDS", "5"))


def token_claims(user: SessionUser) -> dict:
    return {"id": user.id, "email": user.email, "name": user.name, "avatar": user.avatar}


def extract_token(request: Request) -> str | None:
    """Credential from the Authorization header, falling back to the cookie."""
    auth_header = request.headers.get("Authorization", "")
    if auth_header.startswith("Bearer "):
        token = auth_header[len("Bearer "):].strip()
        if token:
            return token
    return request.cookies.get(AUTH_COOKIE_NAME)


@router.post("/login", response_model=LoginResponse)
async def login(
    payload: LoginRequest,
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db),
    backend: SessionBackend = Depends(get_session_backend),
) -> LoginResponse:
    """Login endpoint - validates credentials, opens the session and sets the credential cookie."""
    result = await db.execute(select(User).where(User.email == payload.email))
    user = result.scalar_one_or_none()

    if not user or not verify_password(payload.password, user.hashed_password):
        logger.warning("auth.login_failed", email=payload.email)
        raise UnauthorizedError("Invalid credentials")

    if not user.is_active:
        logger.warning("auth.login_disabled_account", user_id=user.id)
        raise UnauthorizedError("Account is disabled")

    session_user = SessionUser.model_validate(user)
    await backend.set_user(request, session_user)

    token = create_access_token(token_claims(session_user), LOGIN_TOKEN_TTL)
    set_auth_cookie(response, token, LOGIN_TOKEN_TTL)

    logger.info("auth.login_success", user_id=user.id, remember=payload.remember)
    return LoginResponse(user=session_user, token=token)


@router.get("/session", response_model=Session)
async def get_session(
    request: Request,
    backend: SessionBackend = Depends(get_session_backend),
) -> Session:
    """Current session read model. Never modifies the session."""
    return await backend.get(request)


@router.post("/refresh", response_model=RefreshResponse)
async def refresh(
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db),
    backend: SessionBackend = Depends(get_session_backend),
) -> RefreshResponse:
    """
    Issue a fresh credential token.

    A missing or invalid token is tolerated while the server session is
    still authenticated; the session user is returned without a new token.
    """
    session = await backend.get(request)
    token = extract_token(request)

    claims = None
    if token:
        try:
            claims = decode_access_token(token)
        except jwt.InvalidTokenError as exc:
            logger.info("auth.refresh_invalid_token", error=str(exc))

    if claims is None:
        if session.is_authenticated:
            return RefreshResponse(user=session.user)
        raise UnauthorizedError("No valid token found")

    try:
        user_id = int(claims.get("id"))
    except (TypeError, ValueError):
        raise UnauthorizedError("Invalid token payload")

    user = await db.get(User, user_id)
    if user is None:
        raise NotFoundError("User", str(user_id))
    if not user.is_active:
        raise UnauthorizedError("Account is disabled")

    session_user = SessionUser.model_validate(user)
    new_token = create_access_token(token_claims(session_user), REFRESH_TOKEN_TTL)

    await backend.set_user(request, session_user)
    set_auth_cookie(response, new_token, REFRESH_TOKEN_TTL)

    logger.info("auth.token_refreshed", user_id=user_id)
    return RefreshResponse(user=session_user, token=new_token)


@router.post("/logout", response_model=LogoutResult)
async def logout(
    request: Request,
    response: Response,
    backend: SessionBackend = Depends(get_session_backend),
) -> LogoutResult:
    """
    Logout endpoint - clears the server session, then the credential cookie.

    Always answers 200. If clearing the session fails or times out the
    cookie is left alone and the failure is reported in the body.
    """
    try:
        session = await backend.get(request)
        await asyncio.wait_for(backend.clear(request), timeout=session_clear_timeout())
        delete_auth_cookie(response)
    except Exception as exc:
        logger.error(
            "auth.logout_failed",
            error=str(exc),
            error_type=type(exc).__name__,
            exc_info=True,
        )
        return LogoutResult(success=False, message=LOGOUT_FAILURE_MESSAGE)

    if session.user_id is not None:
        logger.info("auth.logout", user_id=session.user_id)

    return LogoutResult(success=True, message=LOGOUT_SUCCESS_MESSAGE)


@router.get("/logout", response_model=LogoutResult)
async def logout_get(
    request: Request,
    response: Response,
    backend: SessionBackend = Depends(get_session_backend),
) -> LogoutResult:
    """Logout GET endpoint for browser compatibility."""
    return await logout(request, response, backend)


@router.post("/register", response_model=LoginResponse, status_code=status.HTTP_201_CREATED)
async def register(
    payload: RegisterRequest,
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db),
    backend: SessionBackend = Depends(get_session_backend),
) -> LoginResponse:
    """Create an account and sign it in, like a successful login."""
    existing = await db.execute(select(User.id).where(User.email == payload.email))
    if existing.scalar_one_or_none() is not None:
        logger.info("auth.register_duplicate_email")
        raise ConflictError("Email is already registered")

    user = User(
        name=payload.name,
        email=payload.email,
        hashed_password=hash_password(payload.password),
    )
    db.add(user)
    try:
        await db.flush()
    except IntegrityError:
        # Lost a race with a concurrent registration
        await db.rollback()
        raise ConflictError("Email is already registered")
    await db.refresh(user)

    session_user = SessionUser.model_validate(user)
    await backend.set_user(request, session_user)

    token = create_access_token(token_claims(session_user), REGISTER_TOKEN_TTL)
    set_auth_cookie(response, token, REGISTER_TOKEN_TTL)

    logger.info("auth.registered", user_id=user.id)
    return LoginResponse(user=session_user, token=token)


def app_url() -> str:
    """Public base URL used to build links sent by email."""
    return os.getenv("APP_URL", "http://localhost:3000").rstrip("/")


async def resolve_reset_token(db: AsyncSession, token: str) -> User | None:
    """Active user a reset token was issued for, or None if it no longer applies."""
    try:
        user_id, fingerprint = decode_password_reset_token(token)
    except jwt.InvalidTokenError as exc:
        logger.info("auth.reset_token_rejected", error=str(exc))
        return None

    user = await db.get(User, user_id)
    if user is None or not user.is_active:
        return None
    # A reset token dies with the password it was issued against
    if fingerprint != password_fingerprint(user.hashed_password):
        return None
    return user


@router.post("/forgot-password", response_model=ActionResult)
async def forgot_password(
    payload: ForgotPasswordRequest,
    db: AsyncSession = Depends(get_db),
    context: AppContext = Depends(get_app_context),
) -> ActionResult:
    """
    Email a one-hour reset link.

    The answer is identical whether or not the account exists, and email
    failures are only logged, so the endpoint does not reveal which addresses are
    registered.
    """
    result = await db.execute(select(User).where(User.email == payload.email))
    user = result.scalar_one_or_none()

    if user is not None and user.is_active:
        token = create_password_reset_token(user.id, user.hashed_password)
        reset_url = f"{app_url()}/auth/reset-password?token={token}"

        if context.has(EMAIL_HANDLE):
            email_service: EmailService = context.inject(EMAIL_HANDLE)
            try:
                await email_service.send_password_reset(
                    user.email, reset_url, to_name=user.display_name
                )
            except (EmailDeliveryError, httpx.HTTPError) as exc:
                logger.error(
                    "auth.password_reset_email_failed",
                    user_id=user.id,
                    error=str(exc),
                )
        else:
            logger.warning("auth.password_reset_email_skipped", user_id=user.id)

        logger.info("auth.password_reset_requested", user_id=user.id)

    return ActionResult(success=True, message=FORGOT_PASSWORD_MESSAGE)


@router.get("/verify-reset-token", response_model=VerifyResetTokenResult)
async def verify_reset_token(
    token: str | None = None,
    db: AsyncSession = Depends(get_db),
) -> VerifyResetTokenResult:
    """Tell the reset page whether its link is still usable."""
    if not token:
        return VerifyResetTokenResult(valid=False, message="Token is required")

    if await resolve_reset_token(db, token) is None:
        return VerifyResetTokenResult(valid=False, message=INVALID_RESET_TOKEN_MESSAGE)

    return VerifyResetTokenResult(valid=True)


@router.post("/reset-password", response_model=ActionResult)
async def reset_password(
    payload: ResetPasswordRequest,
    db: AsyncSession = Depends(get_db),
) -> ActionResult:
    """Set a new password from a reset link. Failures are reported in the body."""
    if not payload.token or not payload.password:
        return ActionResult(success=False, message="Token and password are required")

    try:
        validate_password_strength(payload.password)
    except ValueError as exc:
        return ActionResult(success=False, message=str(exc))

    user = await resolve_reset_token(db, payload.token)
    if user is None:
        return ActionResult(success=False, message=INVALID_RESET_TOKEN_MESSAGE)

    user.hashed_password = hash_password(payload.password)
    await db.flush()

    logger.info("auth.password_reset", user_id=user.id)
    return ActionResult(success=True, message="Password has been reset successfully")
