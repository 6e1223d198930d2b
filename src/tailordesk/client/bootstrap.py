"""Client entry point: wires the state container and restores the session before first use."""

from tailordesk.bootstrap.auth import bootstrap_client_auth
from tailordesk.bootstrap.context import AppContext
from tailordesk.bootstrap.state import create_state_container
from tailordesk.client.api import AuthApi
from tailordesk.client.auth_store import AuthStore
from tailordesk.client.storage import CredentialStorage
from tailordesk.core.errors import StartupError


async def bootstrap_client(
    storage: CredentialStorage | None,
    api: AuthApi | None = None,
) -> AppContext:
    """
    Build a client context with its session already restored.

    The state container is installed first, the auth store is then built
    through it and initialized exactly once, and finally published under
    the ``auth`` handle.

    Raises:
        StartupError: If no credential storage is available
    """
    if storage is None:
        raise StartupError("Credential storage is unavailable; cannot restore the session")

    context = AppContext(name="client")
    container = create_state_container(context)

    auth_store = container.use_store(AuthStore.store_id, lambda: AuthStore(storage, api))
    await auth_store.init()

    bootstrap_client_auth(context, auth_store)
    return context
