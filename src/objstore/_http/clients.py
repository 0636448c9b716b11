"""Factory functions for the httpx clients used by the transports."""

from __future__ import annotations

from collections.abc import Mapping

import httpx

from .config import DEFAULT_TIMEOUT


def _client_kwargs(
    timeout: float | None,
    headers: Mapping[str, str] | None,
) -> dict:
    effective_timeout = timeout if timeout is not None else DEFAULT_TIMEOUT
    kwargs: dict = {"timeout": httpx.Timeout(effective_timeout)}
    if headers:
        kwargs["headers"] = dict(headers)
    return kwargs


def create_base_client(
    timeout: float | None = None,
    headers: Mapping[str, str] | None = None,
) -> httpx.Client:
    """Create a sync httpx client with basic configuration (no auth).

    Auth headers are attached per request, since the token can change between
    two calls on the same client.

    Args:
        timeout: Default request timeout in seconds. Defaults to DEFAULT_TIMEOUT.
        headers: Static headers sent with every request.
    """
    return httpx.Client(**_client_kwargs(timeout, headers))


def create_base_async_client(
    timeout: float | None = None,
    headers: Mapping[str, str] | None = None,
) -> httpx.AsyncClient:
    """Create an async httpx client with basic configuration (no auth).

    Args:
        timeout: Default request timeout in seconds. Defaults to DEFAULT_TIMEOUT.
        headers: Static headers sent with every request.
    """
    return httpx.AsyncClient(**_client_kwargs(timeout, headers))


__all__ = [
    "create_base_client",
    "create_base_async_client",
]
