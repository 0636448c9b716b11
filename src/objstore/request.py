"""One authenticated call against the storage endpoint."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Mapping
from typing import Any

import httpx

from ._http import BaseTransport, DEFAULT_TIMEOUT, iter_coroutine
from .errors import HttpStatusError, RequestTimeoutError, TransportError
from .session import AUTH_TOKEN_HEADER, SessionCapability

logger = logging.getLogger(__name__)

# The first attempt plus one replay after re-authentication.
MAX_ATTEMPTS = 2

ResponseObserver = Callable[[str, str, int | None, Mapping[str, str]], None]


def is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


class BaseRequest:
    """Request builder with the shared async send/retry logic."""

    def __init__(
        self,
        session: SessionCapability,
        transport: BaseTransport,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        observer: ResponseObserver | None = None,
    ):
        self._session = session
        self._transport = transport
        self._observer = observer
        self.timeout = timeout
        self.method = ""
        self.url = ""
        self.headers = httpx.Headers()
        self.attachment: str | None = None
        self.retry_count = 0

    def configure(self, method: str, url: str):
        self.method = method.upper()
        self.url = url
        return self

    def get(self, url: str):
        return self.configure("GET", url)

    def put(self, url: str):
        return self.configure("PUT", url)

    def delete(self, url: str):
        return self.configure("DELETE", url)

    def head(self, url: str):
        return self.configure("HEAD", url)

    def set_header(self, key: str | Mapping[str, Any], value: Any = None):
        """Set one header, or every header of a mapping.

        A ``None`` value is skipped and leaves any earlier value in place.
        """
        items = key.items() if isinstance(key, Mapping) else [(key, value)]
        for k, v in items:
            if v is not None:
                self.headers[k] = str(v)
        return self

    def attach(self, file_path: str | os.PathLike[str]):
        self.attachment = os.fspath(file_path)
        return self

    def get_headers(self) -> httpx.Headers:
        """User headers plus the current auth token, rebuilt for every attempt."""
        headers = httpx.Headers(self.headers)
        token = self._session.current_token()
        if token is not None:
            headers[AUTH_TOKEN_HEADER] = token
        headers["Accept"] = "application/json"
        return headers

    def _notify(self, status_code: int | None, headers: httpx.Headers) -> None:
        logger.debug("%s %s %s", self.method, self.url, status_code if status_code else "")
        if self._observer is not None:
            self._observer(self.method, self.url, status_code, headers)

    async def _send_once(self) -> httpx.Response:
        headers = self.get_headers()
        try:
            response = await self._transport.send(
                self.method,
                self.url,
                headers=headers,
                attachment=self.attachment,
                timeout=self.timeout,
            )
        except httpx.TimeoutException as exc:
            self._notify(None, headers)
            raise RequestTimeoutError(
                f"{self.method} {self.url} timed out after {self.timeout}s", exc
            ) from exc
        except httpx.RequestError as exc:
            self._notify(None, headers)
            raise TransportError(f"{self.method} {self.url} failed: {exc}", exc) from exc
        self._notify(response.status_code, headers)
        return response

    async def _execute(self) -> httpx.Response:
        if not self.method or not self.url:
            raise ValueError("Request method and url must be configured before execute()")

        for _ in range(MAX_ATTEMPTS):
            response = await self._send_once()
            if is_success(response.status_code):
                return response
            if response.status_code == 401 and self.retry_count == 0:
                self.retry_count = 1
                logger.debug("%s %s got 401, re-authenticating", self.method, self.url)
                await self._session.refresh()
                continue
            break

        raise HttpStatusError(self.method, self.url, response.status_code, response.text)


class AuthenticatedRequest(BaseRequest):
    def execute(self) -> httpx.Response:
        return iter_coroutine(self._execute())


class AsyncAuthenticatedRequest(BaseRequest):
    async def execute(self) -> httpx.Response:
        return await self._execute()


__all__ = [
    "AsyncAuthenticatedRequest",
    "AuthenticatedRequest",
    "BaseRequest",
    "MAX_ATTEMPTS",
    "ResponseObserver",
]
