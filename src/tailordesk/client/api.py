"""HTTP client for the /api/auth endpoints."""

import httpx

from tailordesk.models.auth_schemas import LoginResponse, LogoutResult, RefreshResponse
from tailordesk.models.session import Session


class AuthApiError(Exception):
    """Raised when an auth endpoint answers with an error status."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}")


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text
    if isinstance(body, dict):
        return str(body.get("message") or body.get("detail") or body)
    return str(body)


class AuthApi:
    """
    Thin wrapper over an ``httpx.AsyncClient`` pointed at the server.

    The caller owns the http client and its lifetime.
    """

    def __init__(self, http_client: httpx.AsyncClient):
        self.http = http_client

    @staticmethod
    def _auth_headers(token: str | None) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"} if token else {}

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        response = await self.http.request(method, path, **kwargs)
        if response.is_error:
            raise AuthApiError(response.status_code, _error_message(response))
        return response

    async def login(self, email: str, password: str, remember: bool = False) -> LoginResponse:
        response = await self._request(
            "POST",
            "/api/auth/login",
            json={"email": email, "password": password, "remember": remember},
        )
        return LoginResponse.model_validate(response.json())

    async def logout(self, token: str | None = None) -> LogoutResult:
        response = await self._request(
            "POST", "/api/auth/logout", headers=self._auth_headers(token)
        )
        return LogoutResult.model_validate(response.json())

    async def refresh(self, token: str | None = None) -> RefreshResponse:
        response = await self._request(
            "POST", "/api/auth/refresh", headers=self._auth_headers(token)
        )
        return RefreshResponse.model_validate(response.json())

    async def session(self) -> Session:
        response = await self._request("GET", "/api/auth/session")
        return Session.model_validate(response.json())
