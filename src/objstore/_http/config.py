"""Client configuration for the object storage API."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from ..errors import ObjectStorageError

DEFAULT_TIMEOUT = 30.0

AUTH_URL_ENV = "ST_AUTH"
USER_ENV = "ST_USER"
KEY_ENV = "ST_KEY"


@dataclass(frozen=True, slots=True)
class Credentials:
    """Authentication endpoint and the account credentials used against it."""

    host: str
    username: str
    password: str


@dataclass
class StorageConfig:
    """SDK configuration."""

    host: str | None = None
    username: str | None = None
    password: str | None = None
    timeout: float = DEFAULT_TIMEOUT
    headers: dict[str, str] = field(default_factory=dict)

    def resolve_credentials(self) -> Credentials:
        """Resolve credentials from arguments first, then the environment."""
        host = self.host or os.getenv(AUTH_URL_ENV)
        username = self.username or os.getenv(USER_ENV)
        password = self.password or os.getenv(KEY_ENV)
        missing = [
            name
            for name, value in (
                (f"host (or {AUTH_URL_ENV})", host),
                (f"username (or {USER_ENV})", username),
                (f"password (or {KEY_ENV})", password),
            )
            if not value
        ]
        if missing:
            raise ObjectStorageError(
                f"Missing object storage credentials: {', '.join(missing)}."
            )
        return Credentials(host=host, username=username, password=password)  # type: ignore[arg-type]


__all__ = [
    "AUTH_URL_ENV",
    "Credentials",
    "DEFAULT_TIMEOUT",
    "KEY_ENV",
    "StorageConfig",
    "USER_ENV",
]
