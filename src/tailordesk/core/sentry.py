"""Sentry error tracking configuration and initialization."""

import os

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration
from sentry_sdk.utils import BadDsn

from tailordesk.core.logging import get_logger

logger = get_logger(__name__)

# Event fields that may carry credentials
SENSITIVE_KEYS = ("password", "token", "auth_token", "authorization", "cookie", "api-key")

_sentry_initialized = False


def init_sentry() -> bool:
    """
    Initialize Sentry SDK for error tracking.

    Only initializes if SENTRY_DSN is set and looks like a real DSN, so local
    development and CI run without Sentry. Safe to call more than once.

    Returns:
        True if Sentry is active after the call
    """
    global _sentry_initialized

    if _sentry_initialized:
        return True

    sentry_dsn = os.getenv("SENTRY_DSN", "").strip()
    if not sentry_dsn:
        logger.info("sentry.disabled", message="Sentry DSN not found, error tracking disabled")
        return False

    # Catches placeholder values like "xxx" set in CI
    if not sentry_dsn.startswith(("https://", "http://")):
        logger.info(
            "sentry.disabled",
            message="Sentry DSN appears to be a placeholder, error tracking disabled",
        )
        return False

    environment = os.getenv("ENVIRONMENT", "development")

    try:
        sentry_sdk.init(
            dsn=sentry_dsn,
            environment=environment,
            traces_sample_rate=0.0,
            send_default_pii=False,
            integrations=[
                FastApiIntegration(transaction_style="endpoint"),
                # structlog already ships the logs
                LoggingIntegration(level=None, event_level=None),
            ],
            before_send=scrub_credentials,
        )
    except BadDsn as exc:
        logger.warning(
            "sentry.init_failed",
            message="Invalid Sentry DSN, error tracking disabled",
            error=str(exc),
        )
        return False

    _sentry_initialized = True
    logger.info("sentry.initialized", environment=environment)
    return True


def scrub_credentials(event: dict, hint: dict) -> dict:
    """Mask credential-bearing request headers, cookies and extras before sending."""
    request = event.get("request")
    if isinstance(request, dict):
        for section in ("headers", "cookies"):
            values = request.get(section)
            if isinstance(values, dict):
                request[section] = {
                    key: "[Filtered]" if str(key).lower() in SENSITIVE_KEYS else value
                    for key, value in values.items()
                }

    extra = event.get("extra")
    if isinstance(extra, dict):
        event["extra"] = {
            key: "[Filtered]" if str(key).lower() in SENSITIVE_KEYS else value
            for key, value in extra.items()
        }

    return event
