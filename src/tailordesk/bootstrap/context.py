"""Application context: the explicit service registry handed to bootstrap routines and routes."""

from typing import Any

AUTH_HANDLE = "auth"
STATE_HANDLE = "pinia"
EMAIL_HANDLE = "email"


class AppContext:
    """
    Named services provided once at startup and injected afterwards.

    Each application instance (a server app or a client) owns one context;
    nothing is kept at module level.
    """

    def __init__(self, name: str = "app"):
        self.name = name
        self._services: dict[str, Any] = {}

    def provide(self, handle: str, service: Any) -> None:
        """
        Register ``service`` under ``handle``.

        Raises:
            ValueError: If the handle is already taken
        """
        if handle in self._services:
            raise ValueError(f"Service '{handle}' is already provided")
        self._services[handle] = service

    def inject(self, handle: str) -> Any:
        """
        Return the service registered under ``handle``.

        Raises:
            LookupError: If nothing was provided under that handle
        """
        try:
            return self._services[handle]
        except KeyError:
            raise LookupError(f"No service provided for '{handle}'") from None

    def has(self, handle: str) -> bool:
        return handle in self._services

    @property
    def handles(self) -> list[str]:
        return sorted(self._services)

    def __repr__(self) -> str:
        return f"<AppContext(name={self.name}, handles={self.handles})>"
