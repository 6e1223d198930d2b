"""
Auth bootstrap.

Runs once per application instance and publishes the session holder under
the ``auth`` handle. A missing session subsystem is fatal: ``StartupError``
propagates and the application must not start.
"""

from tailordesk.bootstrap.context import AUTH_HANDLE, AppContext
from tailordesk.core.errors import StartupError
from tailordesk.core.logging import get_logger
from tailordesk.core.session import SessionBackend
from tailordesk.models.session import SessionStore

logger = get_logger(__name__)


def bootstrap_client_auth(context: AppContext, store: SessionStore | None) -> SessionStore:
    """Publish the client session store after a read-only status check."""
    if store is None:
        raise StartupError("Session store is unavailable; cannot start the client")

    status = store.status
    logger.info("auth.bootstrap.initialized", context=context.name, status=status.value)

    context.provide(AUTH_HANDLE, store)
    return store


def bootstrap_server_auth(context: AppContext, backend: SessionBackend | None) -> SessionBackend:
    """Publish the server session backend. Status is resolved per request."""
    if backend is None:
        raise StartupError("Session backend is unavailable; cannot start the server")

    context.provide(AUTH_HANDLE, backend)
    return backend
