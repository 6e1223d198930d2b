"""Sentry context middleware to capture request context in error reports."""

import sentry_sdk
from starlette.types import ASGIApp, Receive, Scope, Send

from tailordesk.core.logging import get_request_id
from tailordesk.core.session import SESSION_USER_KEY


class SentryContextMiddleware:
    """
    Tag Sentry events with the request ID and the signed-in user ID.

    Must run inside SessionMiddleware and RequestIDMiddleware so both the
    session and the request ID are available.
    """

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        with sentry_sdk.isolation_scope() as sentry_scope:
            request_id = get_request_id()
            sentry_scope.set_tag("request_id", request_id)

            session_user = scope.get("session", {}).get(SESSION_USER_KEY) or {}
            user_id = session_user.get("id") if isinstance(session_user, dict) else None
            if user_id is not None:
                sentry_scope.set_user({"id": str(user_id)})

            sentry_scope.set_context(
                "request",
                {
                    "method": scope.get("method"),
                    "path": scope.get("path"),
                    "request_id": request_id,
                },
            )

            await self.app(scope, receive, send)
