"""Client for Swift-style account/container/object storage."""

from ._http import Credentials
from .client import AsyncObjectStorage, ObjectStorage
from .errors import (
    AuthError,
    AuthTimeoutError,
    HttpStatusError,
    ObjectStorageError,
    RequestTimeoutError,
    StreamError,
    TransportError,
)
from .request import AsyncAuthenticatedRequest, AuthenticatedRequest, ResponseObserver
from .session import AsyncSession, AuthResult, Session, SessionCapability

__all__ = [
    # clients
    "ObjectStorage",
    "AsyncObjectStorage",
    # pipeline
    "Session",
    "AsyncSession",
    "SessionCapability",
    "AuthResult",
    "Credentials",
    "AuthenticatedRequest",
    "AsyncAuthenticatedRequest",
    "ResponseObserver",
    # errors
    "ObjectStorageError",
    "AuthError",
    "AuthTimeoutError",
    "HttpStatusError",
    "TransportError",
    "RequestTimeoutError",
    "StreamError",
]
