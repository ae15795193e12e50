"""
Error types raised by the HTTP cloud provider.

Every operation failure carries the operation name and the target URL so the
caller can log it meaningfully. Nothing is retried or recovered locally.
"""

from enum import Enum
from typing import Optional


class TransportErrorKind(str, Enum):
    """Why a request never produced a usable response."""

    CONNECTION = "connection"
    TIMEOUT = "timeout"
    HTTP_STATUS = "http_status"


class CloudProviderError(Exception):
    """Base class for operation failures."""

    def __init__(self, message: str, operation: Optional[str] = None, url: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.operation = operation
        self.url = url

    def __str__(self) -> str:
        context = " ".join(part for part in (self.operation, self.url) if part)
        return f"{context}: {self.message}" if context else self.message


class TransportError(CloudProviderError):
    """The remote service could not be reached or did not answer successfully."""

    def __init__(
        self,
        message: str,
        kind: TransportErrorKind,
        operation: Optional[str] = None,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message, operation=operation, url=url)
        self.kind = kind
        self.status_code = status_code


class DecodeError(CloudProviderError):
    """The remote service answered with a body that is not the expected JSON."""


class EncodeError(CloudProviderError):
    """A request payload could not be serialized."""


class CapabilityNotSupportedError(CloudProviderError):
    """An operation of a disabled capability was invoked."""
