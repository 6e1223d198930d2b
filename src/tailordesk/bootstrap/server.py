"""Server entry point for bootstrapping an application context."""

from tailordesk.bootstrap.auth import bootstrap_server_auth
from tailordesk.bootstrap.context import EMAIL_HANDLE, AppContext
from tailordesk.bootstrap.state import create_state_container
from tailordesk.core.email import init_email
from tailordesk.core.session import SessionBackend


def bootstrap_server(backend: SessionBackend | None) -> AppContext:
    """
    Build the server's context.

    Order: state container, then auth. Client-side session restoration never
    runs here; the server derives session state from each request.

    Raises:
        StartupError: If ``backend`` is missing
    """
    context = AppContext(name="server")
    create_state_container(context)
    bootstrap_server_auth(context, backend)

    email = init_email()
    if email is not None:
        context.provide(EMAIL_HANDLE, email)

    return context
