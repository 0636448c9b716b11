"""Shared fixtures for all tests."""

from collections.abc import Generator

import httpx
import pytest
import respx

AUTH_URL = "https://objectstorage.net/auth/v1.0/"
STORAGE_URL = "https://storage.objectstorage.net/v1/AUTH_test"


def auth_response(token: str = "token", storage_url: str = STORAGE_URL) -> httpx.Response:
    """Successful auth v1.0 response carrying the storage URL and token headers."""
    return httpx.Response(
        200, headers={"X-STORAGE-URL": storage_url, "X-AUTH-TOKEN": token}
    )


@pytest.fixture
def mock_env_clear(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Clear object storage environment variables for testing.

    This ensures tests don't accidentally use real credentials from the environment.
    """
    for var in ("ST_AUTH", "ST_USER", "ST_KEY"):
        monkeypatch.delenv(var, raising=False)
    yield


@pytest.fixture
def credentials() -> dict[str, str]:
    """Keyword arguments accepted by both storage clients."""
    return {"host": AUTH_URL, "username": "user", "password": "pass"}


@pytest.fixture
def storage_api() -> Generator[respx.MockRouter, None, None]:
    """Mock auth endpoint; tests add the storage routes they need."""
    with respx.mock(assert_all_called=False) as mock:
        mock.get(AUTH_URL, name="auth").mock(return_value=auth_response())
        yield mock


@pytest.fixture
def upload_file(tmp_path) -> str:
    """A small local file to upload."""
    path = tmp_path / "small.jpg"
    path.write_bytes(b"\xff\xd8\xff\xe0fake-jpeg-payload")
    return str(path)
