"""Async HTTP client for the ``/api/auth`` boundary."""

from __future__ import annotations

from typing import Any, Optional

import httpx
from pydantic import ValidationError

from mentor_client.core.log import get_logger
from mentor_client.core.models import Credentials, User


_LOGGER = get_logger(__name__)

ME_PATH = "/api/auth/me"
LOGIN_PATH = "/api/auth/login"
LOGOUT_PATH = "/api/auth/logout"


class AuthError(RuntimeError):
    """Base exception for auth boundary failures."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class AuthProbeError(AuthError):
    """Raised when the identity check fails for a reason other than 401."""


class AuthenticationError(AuthError):
    """Raised when a login attempt is not accepted."""


class LogoutTransportError(AuthError):
    """Raised when the logout notification does not reach the server."""


def api_url(base_url: str, path: str) -> str:
    """Join ``path`` onto ``base_url``; an empty base yields a relative URL."""

    normalized_path = path if path.startswith("/") else f"/{path}"
    if base_url:
        return f"{base_url.rstrip('/')}{normalized_path}"
    return normalized_path


def _failure_message(response: httpx.Response) -> str:
    text = response.text or response.reason_phrase
    return f"{response.status_code}: {text}"


class AuthClient:
    """Thin wrapper over :class:`httpx.AsyncClient` for the three auth calls.

    The underlying client keeps cookies, so the server-side session set by
    ``login`` is sent with later ``me``/``logout`` calls.
    """

    def __init__(
        self,
        base_url: str = "",
        *,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._base_url = base_url
        client_kwargs: dict[str, Any] = {"timeout": timeout}
        if transport is not None:
            client_kwargs["transport"] = transport
        self._http = httpx.AsyncClient(**client_kwargs)

    def url(self, path: str) -> str:
        return api_url(self._base_url, path)

    async def fetch_current_user(self) -> Optional[User]:
        """Return the signed-in user, or ``None`` when the server answers 401."""

        try:
            response = await self._http.get(self.url(ME_PATH))
        except httpx.HTTPError as exc:
            raise AuthProbeError(f"Identity check failed: {exc}") from exc

        if response.status_code == httpx.codes.UNAUTHORIZED:
            _LOGGER.debug("Identity check returned 401; no active session")
            return None
        if response.is_error:
            raise AuthProbeError(_failure_message(response), response.status_code)

        payload = self._json(response, AuthProbeError)
        if payload is None:
            return None
        try:
            return User.model_validate(payload)
        except ValidationError as exc:
            raise AuthProbeError(f"Malformed user record: {exc}", response.status_code) from exc

    async def login(self, credentials: Credentials) -> User:
        """Submit ``credentials`` and return the user the server signed in."""

        body = {
            "email": credentials.email,
            "password": credentials.password.get_secret_value(),
        }
        try:
            response = await self._http.post(self.url(LOGIN_PATH), json=body)
        except httpx.HTTPError as exc:
            raise AuthenticationError(f"Login request failed: {exc}") from exc

        if response.is_error:
            _LOGGER.info("Login rejected for %s with status %d", credentials.email, response.status_code)
            raise AuthenticationError(_failure_message(response), response.status_code)

        payload = self._json(response, AuthenticationError)
        try:
            return User.model_validate(payload)
        except ValidationError as exc:
            raise AuthenticationError(f"Malformed user record: {exc}", response.status_code) from exc

    async def logout(self) -> None:
        """Tell the server to end the current session."""

        try:
            response = await self._http.post(self.url(LOGOUT_PATH))
        except httpx.HTTPError as exc:
            raise LogoutTransportError(f"Logout request failed: {exc}") from exc
        if response.is_error:
            raise LogoutTransportError(_failure_message(response), response.status_code)

    @staticmethod
    def _json(response: httpx.Response, error_cls: type[AuthError]) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise error_cls(f"Invalid JSON from auth boundary: {exc}", response.status_code) from exc

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "AuthClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


__all__ = [
    "AuthClient",
    "AuthError",
    "AuthProbeError",
    "AuthenticationError",
    "LogoutTransportError",
    "api_url",
]
