"""
Credential persistence for the client.

Storage failures are logged and reported as missing values; they never
raise into the auth store.
"""

import json
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from tailordesk.core.logging import get_logger

logger = get_logger(__name__)

USER_KEY = "user"
AUTH_TOKEN_KEY = "auth_token"
REFRESH_TOKEN_KEY = "refresh_token"
LAST_LOGIN_KEY = "last_login_time"

CREDENTIAL_KEYS = (USER_KEY, AUTH_TOKEN_KEY, REFRESH_TOKEN_KEY, LAST_LOGIN_KEY)


class CredentialStorage(ABC):
    """Key/value store for JSON-serializable credential data."""

    @abstractmethod
    def get(self, key: str) -> Any | None: ...

    @abstractmethod
    def set(self, key: str, value: Any) -> bool: ...

    @abstractmethod
    def remove(self, key: str) -> bool: ...

    def clear_credentials(self) -> None:
        for key in CREDENTIAL_KEYS:
            self.remove(key)


class MemoryCredentialStorage(CredentialStorage):
    """Process-local storage, for tests and short-lived scripts."""

    def __init__(self, initial: dict[str, Any] | None = None):
        self._data: dict[str, Any] = dict(initial or {})

    def get(self, key: str) -> Any | None:
        return self._data.get(key)

    def set(self, key: str, value: Any) -> bool:
        self._data[key] = value
        return True

    def remove(self, key: str) -> bool:
        self._data.pop(key, None)
        return True


class FileCredentialStorage(CredentialStorage):
    """Credentials kept in a JSON file readable only by the current user."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _load(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.error("storage.read_failed", path=str(self.path), error=str(exc))
            return {}
        return data if isinstance(data, dict) else {}

    def _save(self, data: dict[str, Any]) -> bool:
        """Write to a 0600 temp file beside the target, then swap it in."""
        tmp_path = None
        try:
            content = json.dumps(data)
            self.path.parent.mkdir(parents=True, exist_ok=True)
            # mkstemp creates the file 0600 before any byte is written
            fd, tmp_path = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(content)
            os.replace(tmp_path, self.path)
        except (OSError, TypeError) as exc:
            logger.error("storage.write_failed", path=str(self.path), error=str(exc))
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            return False
        return True

    def get(self, key: str) -> Any | None:
        return self._load().get(key)

    def set(self, key: str, value: Any) -> bool:
        data = self._load()
        data[key] = value
        return self._save(data)

    def remove(self, key: str) -> bool:
        data = self._load()
        if key not in data:
            return True
        del data[key]
        return self._save(data)
