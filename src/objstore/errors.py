"""Exceptions raised by the object storage client."""

from __future__ import annotations


class ObjectStorageError(Exception):
    """Base class for every error raised by objstore."""

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.cause = cause


class AuthError(ObjectStorageError):
    """The authentication endpoint rejected the credentials or was unreachable."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        body: str = "",
        cause: BaseException | None = None,
    ):
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message, cause)
        self.status_code = status_code
        self.body = body


class HttpStatusError(ObjectStorageError):
    """A storage call answered with a non-2xx status."""

    def __init__(self, method: str, url: str, status_code: int, body: str = ""):
        super().__init__(
            f"{method.upper()} {url} responded with statusCode: {status_code}, body: {body}"
        )
        self.method = method.upper()
        self.url = url
        self.status_code = status_code
        self.body = body


class TransportError(ObjectStorageError):
    """Network-level failure: DNS, refused connection, reset, protocol error."""


class RequestTimeoutError(ObjectStorageError, TimeoutError):
    """The configured timeout elapsed before the request completed."""


class AuthTimeoutError(AuthError, RequestTimeoutError):
    """The authentication endpoint did not answer within the timeout."""


class StreamError(ObjectStorageError):
    """An attachment file could not be opened or read."""

    def __init__(self, path: str, cause: BaseException):
        super().__init__(f"Failed to read attachment {path!r}: {cause}", cause)
        self.path = path


__all__ = [
    "AuthError",
    "AuthTimeoutError",
    "HttpStatusError",
    "ObjectStorageError",
    "RequestTimeoutError",
    "StreamError",
    "TransportError",
]
