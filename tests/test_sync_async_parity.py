"""Sync/Async API parity tests.

Validates that sync and async client pairs expose the same methods with
matching signatures.
"""

import inspect
from collections.abc import Callable
from typing import Any

import pytest

from objstore import (
    AsyncAuthenticatedRequest,
    AsyncObjectStorage,
    AsyncSession,
    AuthenticatedRequest,
    ObjectStorage,
    Session,
)

STORAGE_METHODS = [
    "authenticate",
    "get_url",
    "get_meta",
    "set_meta",
    "delete_file",
    "put_file",
    "create",
    "copy",
    "list",
    "close",
]


def get_param_names(func: Callable) -> list[str]:
    """Extract parameter names from a function signature."""
    sig = inspect.signature(func)
    return [
        name
        for name, param in sig.parameters.items()
        if param.kind not in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
    ]


def get_param_defaults(func: Callable) -> dict[str, Any]:
    """Extract parameter defaults from a function signature."""
    sig = inspect.signature(func)
    return {
        name: param.default
        for name, param in sig.parameters.items()
        if param.default is not inspect.Parameter.empty
    }


def compare_signatures(sync_func: Callable, async_func: Callable) -> list[str]:
    """Compare signatures of sync and async functions.

    Returns a list of differences (empty if signatures match).
    """
    differences = []

    sync_params = get_param_names(sync_func)
    async_params = get_param_names(async_func)

    if sync_params != async_params:
        differences.append(f"Parameter names differ: sync={sync_params}, async={async_params}")

    sync_defaults = get_param_defaults(sync_func)
    async_defaults = get_param_defaults(async_func)

    for name in set(sync_defaults.keys()) & set(async_defaults.keys()):
        if sync_defaults[name] != async_defaults[name]:
            differences.append(
                f"Default for '{name}' differs: "
                f"sync={sync_defaults[name]}, async={async_defaults[name]}"
            )

    return differences


class TestObjectStorageParity:
    """Test ObjectStorage and AsyncObjectStorage method parity."""

    @pytest.mark.parametrize("name", STORAGE_METHODS)
    def test_signatures_match(self, name):
        differences = compare_signatures(
            getattr(ObjectStorage, name), getattr(AsyncObjectStorage, name)
        )
        assert not differences, f"Signature differences: {differences}"

    @pytest.mark.parametrize("name", STORAGE_METHODS)
    def test_async_methods_are_coroutines(self, name):
        assert inspect.iscoroutinefunction(getattr(AsyncObjectStorage, name))
        assert not inspect.iscoroutinefunction(getattr(ObjectStorage, name))

    def test_constructors_match(self):
        sync_params = get_param_names(ObjectStorage.__init__)
        async_params = get_param_names(AsyncObjectStorage.__init__)
        assert sync_params == async_params


class TestSessionParity:
    """Test Session and AsyncSession method parity."""

    @pytest.mark.parametrize("name", ["authenticate", "get_url", "current_token", "reset"])
    def test_signatures_match(self, name):
        differences = compare_signatures(getattr(Session, name), getattr(AsyncSession, name))
        assert not differences, f"Signature differences: {differences}"


class TestRequestParity:
    """Test AuthenticatedRequest and AsyncAuthenticatedRequest parity."""

    def test_execute_signatures_match(self):
        differences = compare_signatures(
            AuthenticatedRequest.execute, AsyncAuthenticatedRequest.execute
        )
        assert not differences, f"Signature differences: {differences}"
        assert inspect.iscoroutinefunction(AsyncAuthenticatedRequest.execute)
