"""Object storage clients: account, container and object operations."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any

import httpx

from ._helpers import build_query, decode_list_response, slash
from ._http import (
    AsyncTransport,
    BaseTransport,
    BlockingTransport,
    StorageConfig,
    iter_coroutine,
)
from .request import (
    AsyncAuthenticatedRequest,
    AuthenticatedRequest,
    BaseRequest,
    ResponseObserver,
)
from .session import AsyncSession, AuthResult, BaseSession, Session


class BaseObjectStorage:
    """Base client with shared async business logic.

    Every operation resolves the storage URL first (authenticating on first
    use), then runs a single authenticated request against it.
    """

    _transport: BaseTransport
    _session: BaseSession

    def __init__(
        self,
        *,
        host: str | None = None,
        username: str | None = None,
        password: str | None = None,
        timeout: float | None = None,
        headers: Mapping[str, str] | None = None,
        observer: ResponseObserver | None = None,
    ):
        self._config = StorageConfig(host=host, username=username, password=password)
        if timeout is not None:
            self._config.timeout = timeout
        if headers:
            self._config.headers.update(headers)
        self._credentials = self._config.resolve_credentials()
        self._observer = observer

    @property
    def timeout(self) -> float:
        return self._config.timeout

    @property
    def storage_url(self) -> str | None:
        return self._session.storage_url

    @property
    def auth_token(self) -> str | None:
        return self._session.auth_token

    def _new_request(self) -> BaseRequest:
        raise NotImplementedError

    async def _request(self) -> tuple[BaseRequest, str]:
        url = await self._session._get_url()
        return self._new_request(), url

    async def _get_meta(
        self, path: str | None = None, headers: Mapping[str, Any] | None = None
    ) -> httpx.Headers:
        req, url = await self._request()
        res = await req.head(url + slash(path or "")).set_header(headers or {})._execute()
        return res.headers

    async def _set_meta(self, path: str, headers: Mapping[str, Any]) -> httpx.Headers:
        req, url = await self._request()
        # Sent as PUT, not POST.
        res = await req.put(url + slash(path)).set_header(headers)._execute()
        return res.headers

    async def _delete_file(self, path: str) -> None:
        req, url = await self._request()
        await req.delete(url + slash(path))._execute()

    async def _put_file(
        self,
        src: str | os.PathLike[str],
        dst: str,
        headers: Mapping[str, Any] | None = None,
    ) -> str:
        req, url = await self._request()
        target = url + slash(dst)
        req.put(target).attach(src)
        if headers:
            req.set_header(headers)
        await req._execute()
        return target

    async def _create(self, container: str) -> None:
        req, url = await self._request()
        await req.put(url + slash(container))._execute()

    async def _copy(self, src_path: str, dst_path: str) -> None:
        req, url = await self._request()
        await (
            req.put(url + slash(dst_path))
            .set_header("X-Copy-From", slash(src_path))
            .set_header("Content-Length", 0)
            ._execute()
        )

    async def _list(
        self,
        container: str | Mapping[str, Any] | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> Any:
        if isinstance(container, Mapping):
            options = container
            container = None
        req, url = await self._request()
        res = await req.get(url + slash(container or "") + build_query(options))._execute()
        return decode_list_response(res)


class ObjectStorage(BaseObjectStorage):
    """Synchronous object storage client."""

    def __init__(
        self,
        *,
        host: str | None = None,
        username: str | None = None,
        password: str | None = None,
        timeout: float | None = None,
        headers: Mapping[str, str] | None = None,
        observer: ResponseObserver | None = None,
        client: httpx.Client | None = None,
    ):
        super().__init__(
            host=host,
            username=username,
            password=password,
            timeout=timeout,
            headers=headers,
            observer=observer,
        )
        self._transport = BlockingTransport(self._config, client)
        self._session = Session(self._credentials, self._transport, self._config.timeout)

    @property
    def session(self) -> Session:
        return self._session  # type: ignore[return-value]

    def _new_request(self) -> AuthenticatedRequest:
        return AuthenticatedRequest(
            self._session,
            self._transport,
            timeout=self._config.timeout,
            observer=self._observer,
        )

    def authenticate(self) -> AuthResult:
        return self.session.authenticate()

    def get_url(self) -> str:
        return self.session.get_url()

    def get_meta(
        self, path: str | None = None, headers: Mapping[str, Any] | None = None
    ) -> httpx.Headers:
        """Read metadata headers of the account (no path), a container or an object."""
        return iter_coroutine(self._get_meta(path, headers))

    def set_meta(self, path: str, headers: Mapping[str, Any]) -> httpx.Headers:
        """Write metadata headers on a container or object."""
        return iter_coroutine(self._set_meta(path, headers))

    def delete_file(self, path: str) -> None:
        iter_coroutine(self._delete_file(path))

    def put_file(
        self,
        src: str | os.PathLike[str],
        dst: str,
        headers: Mapping[str, Any] | None = None,
    ) -> str:
        """Upload the local file ``src`` to ``dst`` and return the object URL."""
        return iter_coroutine(self._put_file(src, dst, headers))

    def create(self, container: str) -> None:
        iter_coroutine(self._create(container))

    def copy(self, src_path: str, dst_path: str) -> None:
        """Server-side copy of an object."""
        iter_coroutine(self._copy(src_path, dst_path))

    def list(
        self,
        container: str | Mapping[str, Any] | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> Any:
        """List containers of the account, or objects of ``container``.

        ``options`` become the query string (``limit``, ``marker``, ``prefix``,
        ``format`` ...). A mapping passed as the only argument is taken as the
        options for an account listing.
        """
        return iter_coroutine(self._list(container, options))

    def close(self) -> None:
        iter_coroutine(self._transport.close())

    def __enter__(self) -> ObjectStorage:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


class AsyncObjectStorage(BaseObjectStorage):
    """Asynchronous object storage client."""

    def __init__(
        self,
        *,
        host: str | None = None,
        username: str | None = None,
        password: str | None = None,
        timeout: float | None = None,
        headers: Mapping[str, str] | None = None,
        observer: ResponseObserver | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        super().__init__(
            host=host,
            username=username,
            password=password,
            timeout=timeout,
            headers=headers,
            observer=observer,
        )
        self._transport = AsyncTransport(self._config, client)
        self._session = AsyncSession(self._credentials, self._transport, self._config.timeout)

    @property
    def session(self) -> AsyncSession:
        return self._session  # type: ignore[return-value]

    def _new_request(self) -> AsyncAuthenticatedRequest:
        return AsyncAuthenticatedRequest(
            self._session,
            self._transport,
            timeout=self._config.timeout,
            observer=self._observer,
        )

    async def authenticate(self) -> AuthResult:
        return await self.session.authenticate()

    async def get_url(self) -> str:
        return await self.session.get_url()

    async def get_meta(
        self, path: str | None = None, headers: Mapping[str, Any] | None = None
    ) -> httpx.Headers:
        return await self._get_meta(path, headers)

    async def set_meta(self, path: str, headers: Mapping[str, Any]) -> httpx.Headers:
        return await self._set_meta(path, headers)

    async def delete_file(self, path: str) -> None:
        await self._delete_file(path)

    async def put_file(
        self,
        src: str | os.PathLike[str],
        dst: str,
        headers: Mapping[str, Any] | None = None,
    ) -> str:
        return await self._put_file(src, dst, headers)

    async def create(self, container: str) -> None:
        await self._create(container)

    async def copy(self, src_path: str, dst_path: str) -> None:
        await self._copy(src_path, dst_path)

    async def list(
        self,
        container: str | Mapping[str, Any] | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> Any:
        return await self._list(container, options)

    async def close(self) -> None:
        await self._transport.close()

    async def __aenter__(self) -> AsyncObjectStorage:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()


__all__ = [
    "AsyncObjectStorage",
    "BaseObjectStorage",
    "ObjectStorage",
]
