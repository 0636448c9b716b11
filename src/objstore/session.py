"""Authentication session: credentials plus the cached storage URL and token."""

from __future__ import annotations

import asyncio
import logging
import threading
from typing import NamedTuple, Protocol, runtime_checkable

import httpx

from ._http import BaseTransport, Credentials, iter_coroutine
from .errors import AuthError, AuthTimeoutError

logger = logging.getLogger(__name__)

STORAGE_URL_HEADER = "X-Storage-Url"
AUTH_TOKEN_HEADER = "X-Auth-Token"


class AuthResult(NamedTuple):
    storage_url: str
    auth_token: str


@runtime_checkable
class SessionCapability(Protocol):
    """What a request may do with a session: read the token, or refresh it."""

    def current_token(self) -> str | None: ...

    async def refresh(self) -> AuthResult: ...


class BaseSession:
    """Base session with the shared async authentication handshake."""

    def __init__(self, credentials: Credentials, transport: BaseTransport, timeout: float):
        self.credentials = credentials
        self.timeout = timeout
        self._transport = transport
        self._auth: AuthResult | None = None

    @property
    def storage_url(self) -> str | None:
        return self._auth.storage_url if self._auth else None

    @property
    def auth_token(self) -> str | None:
        return self._auth.auth_token if self._auth else None

    def current_token(self) -> str | None:
        return self.auth_token

    def reset(self) -> None:
        """Forget the cached storage URL and token."""
        self._auth = None

    async def _authenticate(self) -> AuthResult:
        host = self.credentials.host
        headers = {
            "Accept": "application/json",
            "X-Auth-User": self.credentials.username,
            "X-Auth-Key": self.credentials.password,
        }
        logger.debug("Authenticating %s against %s", self.credentials.username, host)
        try:
            resp = await self._transport.send("GET", host, headers=headers, timeout=self.timeout)
        except httpx.TimeoutException as exc:
            raise AuthTimeoutError(
                f"Authentication request to {host} timed out after {self.timeout}s", cause=exc
            ) from exc
        except httpx.HTTPError as exc:
            raise AuthError(f"Authentication request to {host} failed", cause=exc) from exc

        if not (200 <= resp.status_code < 300):
            raise AuthError(
                f"Authentication failed: {resp.status_code} {resp.reason_phrase}, body: {resp.text}",
                status_code=resp.status_code,
                body=resp.text,
            )

        storage_url = resp.headers.get(STORAGE_URL_HEADER)
        auth_token = resp.headers.get(AUTH_TOKEN_HEADER)
        if not storage_url or not auth_token:
            raise AuthError(
                f"Authentication response is missing {STORAGE_URL_HEADER} or {AUTH_TOKEN_HEADER}",
                status_code=resp.status_code,
                body=resp.text,
            )

        self._auth = AuthResult(storage_url=storage_url, auth_token=auth_token)
        logger.debug("Authenticated, storage url is %s", storage_url)
        return self._auth

    async def _get_url(self) -> str:
        if self._auth is not None:
            return self._auth.storage_url
        result = await self.refresh()
        return result.storage_url

    async def refresh(self) -> AuthResult:
        return await self._authenticate()


class Session(BaseSession):
    """Blocking session. Concurrent threads authenticate one at a time."""

    def __init__(self, credentials: Credentials, transport: BaseTransport, timeout: float):
        super().__init__(credentials, transport, timeout)
        self._lock = threading.Lock()

    async def refresh(self) -> AuthResult:
        with self._lock:
            return await self._authenticate()

    def authenticate(self) -> AuthResult:
        return iter_coroutine(self.refresh())

    def get_url(self) -> str:
        return iter_coroutine(self._get_url())


class AsyncSession(BaseSession):
    """Asyncio session.

    Callers that need a fresh token while an authentication is already in
    flight wait on that one instead of starting another.
    """

    def __init__(self, credentials: Credentials, transport: BaseTransport, timeout: float):
        super().__init__(credentials, transport, timeout)
        self._inflight: asyncio.Future[AuthResult] | None = None

    async def refresh(self) -> AuthResult:
        if self._inflight is None:
            self._inflight = asyncio.ensure_future(self._authenticate_once())
            self._inflight.add_done_callback(_retrieve_exception)
        return await asyncio.shield(self._inflight)

    async def _authenticate_once(self) -> AuthResult:
        try:
            return await self._authenticate()
        finally:
            self._inflight = None

    async def authenticate(self) -> AuthResult:
        return await self.refresh()

    async def get_url(self) -> str:
        return await self._get_url()


def _retrieve_exception(future: asyncio.Future[AuthResult]) -> None:
    # Every waiter may have been cancelled before the shared attempt failed.
    if not future.cancelled():
        future.exception()


__all__ = [
    "AUTH_TOKEN_HEADER",
    "AsyncSession",
    "AuthResult",
    "BaseSession",
    "STORAGE_URL_HEADER",
    "Session",
    "SessionCapability",
]
