"""HTTP transport implementations for sync and async clients."""

from __future__ import annotations

import abc
import os
from collections.abc import AsyncIterator, Iterator, Mapping
from typing import IO, Any

import aiofiles
import aiofiles.os
import httpx

from ..errors import StreamError
from .clients import create_base_async_client, create_base_client
from .config import StorageConfig

CHUNK_SIZE = 64 * 1024


def _iter_file(fh: IO[bytes]) -> Iterator[bytes]:
    while True:
        chunk = fh.read(CHUNK_SIZE)
        if not chunk:
            break
        yield chunk


async def _aiter_file(fh: Any) -> AsyncIterator[bytes]:
    while True:
        chunk = await fh.read(CHUNK_SIZE)
        if not chunk:
            break
        yield chunk


def _with_length(headers: Mapping[str, str] | None, size: int) -> httpx.Headers:
    request_headers = httpx.Headers(headers or {})
    if "content-length" not in request_headers:
        request_headers["Content-Length"] = str(size)
    return request_headers


class BaseTransport(abc.ABC):
    """Abstract transport with async interface.

    ``send`` raises httpx exceptions untouched; classifying them is up to the
    caller. Attachment files that cannot be opened or read raise StreamError.
    """

    def __init__(self, config: StorageConfig):
        self.config = config

    @abc.abstractmethod
    async def send(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        content: bytes | None = None,
        attachment: str | os.PathLike[str] | None = None,
        timeout: float | None = None,
    ) -> httpx.Response: ...

    @abc.abstractmethod
    async def close(self) -> None: ...


class BlockingTransport(BaseTransport):
    """Sync I/O transport. Methods are async def but don't suspend."""

    def __init__(self, config: StorageConfig, client: httpx.Client | None = None):
        super().__init__(config)
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.Client:
        if self._client is None:
            self._client = create_base_client(
                timeout=self.config.timeout, headers=self.config.headers
            )
        return self._client

    async def send(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        content: bytes | None = None,
        attachment: str | os.PathLike[str] | None = None,
        timeout: float | None = None,
    ) -> httpx.Response:
        effective_timeout = timeout if timeout is not None else self.config.timeout
        if attachment is None:
            return self._get_client().request(
                method,
                url,
                content=content,
                headers=headers,
                timeout=effective_timeout,
            )

        path = os.fspath(attachment)
        try:
            with open(path, "rb") as fh:
                size = os.fstat(fh.fileno()).st_size
                return self._get_client().request(
                    method,
                    url,
                    content=_iter_file(fh),
                    headers=_with_length(headers, size),
                    timeout=effective_timeout,
                )
        except OSError as exc:
            raise StreamError(path, exc) from exc

    async def close(self) -> None:
        if self._client is not None and self._owns_client:
            self._client.close()
        self._client = None


class AsyncTransport(BaseTransport):
    """Async I/O transport using httpx.AsyncClient and aiofiles."""

    def __init__(self, config: StorageConfig, client: httpx.AsyncClient | None = None):
        super().__init__(config)
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = create_base_async_client(
                timeout=self.config.timeout, headers=self.config.headers
            )
        return self._client

    async def send(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        content: bytes | None = None,
        attachment: str | os.PathLike[str] | None = None,
        timeout: float | None = None,
    ) -> httpx.Response:
        effective_timeout = timeout if timeout is not None else self.config.timeout
        if attachment is None:
            return await self._get_client().request(
                method,
                url,
                content=content,
                headers=headers,
                timeout=effective_timeout,
            )

        path = os.fspath(attachment)
        try:
            stat = await aiofiles.os.stat(path)
            async with aiofiles.open(path, "rb") as fh:
                return await self._get_client().request(
                    method,
                    url,
                    content=_aiter_file(fh),
                    headers=_with_length(headers, stat.st_size),
                    timeout=effective_timeout,
                )
        except OSError as exc:
            raise StreamError(path, exc) from exc

    async def close(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
        self._client = None


__all__ = [
    "BaseTransport",
    "BlockingTransport",
    "AsyncTransport",
    "CHUNK_SIZE",
]
