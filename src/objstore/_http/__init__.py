"""Shared HTTP infrastructure for the object storage clients."""

from .clients import create_base_async_client, create_base_client
from .config import DEFAULT_TIMEOUT, Credentials, StorageConfig
from .iter_coroutine import iter_coroutine
from .transport import AsyncTransport, BaseTransport, BlockingTransport

__all__ = [
    "DEFAULT_TIMEOUT",
    "Credentials",
    "StorageConfig",
    "iter_coroutine",
    "BaseTransport",
    "BlockingTransport",
    "AsyncTransport",
    "create_base_client",
    "create_base_async_client",
]
