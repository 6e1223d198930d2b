"""Global state container: the registry of stores for one application instance."""

from typing import Any, Callable, TypeVar

from tailordesk.bootstrap.context import STATE_HANDLE, AppContext
from tailordesk.core.errors import StateContainerError
from tailordesk.core.logging import get_logger

logger = get_logger(__name__)

StoreT = TypeVar("StoreT")


class StateContainer:
    """
    Holds one instance of each store, keyed by store id.

    The container is installed into an ``AppContext`` exactly once, and no
    store can be constructed before that.
    """

    def __init__(self) -> None:
        self._stores: dict[str, Any] = {}
        self._context: AppContext | None = None

    @property
    def installed(self) -> bool:
        return self._context is not None

    def install(self, context: AppContext) -> None:
        if self._context is not None:
            raise StateContainerError("State container is already installed")
        context.provide(STATE_HANDLE, self)
        self._context = context
        logger.info("state_container.installed", context=context.name)

    def use_store(self, store_id: str, factory: Callable[[], StoreT]) -> StoreT:
        """Return the store registered as ``store_id``, building it with ``factory`` on first use."""
        if self._context is None:
            raise StateContainerError(
                f"Store '{store_id}' requested before the state container was installed"
            )
        if store_id not in self._stores:
            self._stores[store_id] = factory()
        return self._stores[store_id]

    def has_store(self, store_id: str) -> bool:
        return store_id in self._stores


def create_state_container(context: AppContext) -> StateContainer:
    """Create the container and install it into ``context``."""
    container = StateContainer()
    container.install(context)
    return container
