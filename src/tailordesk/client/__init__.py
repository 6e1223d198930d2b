"""Python client for TailorDesk: credential storage, auth API and auth store."""

from tailordesk.client.api import AuthApi, AuthApiError
from tailordesk.client.auth_store import AuthStore
from tailordesk.client.bootstrap import bootstrap_client
from tailordesk.client.storage import (
    CredentialStorage,
    FileCredentialStorage,
    MemoryCredentialStorage,
)

__all__ = [
    "AuthApi",
    "AuthApiError",
    "AuthStore",
    "CredentialStorage",
    "FileCredentialStorage",
    "MemoryCredentialStorage",
    "bootstrap_client",
]
