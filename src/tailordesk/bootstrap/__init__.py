"""Application bootstrap: context, state container and auth wiring."""

from tailordesk.bootstrap.context import AUTH_HANDLE, EMAIL_HANDLE, STATE_HANDLE, AppContext
from tailordesk.bootstrap.state import StateContainer, create_state_container

__all__ = [
    "AUTH_HANDLE",
    "EMAIL_HANDLE",
    "STATE_HANDLE",
    "AppContext",
    "StateContainer",
    "create_state_container",
]
