"""
Blocking HTTP transport for the cloud provider.

One attempt per call, one deadline for the whole round trip, and a fully
buffered response body. Each call opens its own short-lived httpx client, so
no connection is shared between concurrent callers and every connection is
released on return.
"""

import logging
import time
from typing import Optional

import httpx

from ...errors import TransportError, TransportErrorKind

logger = logging.getLogger("httpcloud.transport")

HTTP_PROVIDER_TIMEOUT = 5.0


class HTTPTransport:
    """
    Sends a single HTTP request and returns the raw response body.

    Holds no per-call state, so one instance can be shared across threads.
    """

    def __init__(
        self,
        timeout: float = HTTP_PROVIDER_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize the transport.

        Args:
            timeout: Seconds allowed for the whole call, from connect to the
                last byte of the response body
            transport: Optional httpx transport (e.g. httpx.MockTransport in tests)
        """
        self.deadline_seconds = timeout
        # Bounds each single wait; the overall deadline is checked while reading
        self.timeout = httpx.Timeout(timeout)
        self._transport = transport

    def send(
        self,
        method: str,
        url: str,
        body: Optional[bytes] = None,
        operation: Optional[str] = None,
    ) -> bytes:
        """
        Perform one HTTP round trip.

        Args:
            method: HTTP method ("GET", "POST")
            url: Absolute target URL
            body: Optional JSON request body
            operation: Operation name used for error context

        Returns:
            The fully read response body

        Raises:
            TransportError: On timeout, connection failure or non-2xx status
        """
        headers = {"Accept": "application/json"}
        if body is not None:
            headers["Content-Type"] = "application/json"

        logger.debug(f"{method} {url} ({len(body) if body else 0} bytes)")

        deadline = time.monotonic() + self.deadline_seconds
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                with client.stream(method, url, content=body, headers=headers) as response:
                    self._check_deadline(deadline, method, url, operation)
                    if not response.is_success:
                        logger.warning(f"{method} {url} returned {response.status_code}")
                        raise TransportError(
                            f"cloudprovider returned HTTP {response.status_code}",
                            kind=TransportErrorKind.HTTP_STATUS,
                            operation=operation,
                            url=url,
                            status_code=response.status_code,
                        )
                    chunks = []
                    for chunk in response.iter_bytes():
                        chunks.append(chunk)
                        self._check_deadline(deadline, method, url, operation)
        except httpx.TimeoutException as e:
            logger.warning(f"{method} {url} timed out after {self.deadline_seconds}s")
            raise TransportError(
                f"request timed out: {e}",
                kind=TransportErrorKind.TIMEOUT,
                operation=operation,
                url=url,
            ) from e
        except httpx.HTTPError as e:
            logger.warning(f"{method} {url} failed: {e}")
            raise TransportError(
                f"HTTP request to cloudprovider failed: {e}",
                kind=TransportErrorKind.CONNECTION,
                operation=operation,
                url=url,
            ) from e

        return b"".join(chunks)

    def _check_deadline(self, deadline: float, method: str, url: str, operation: Optional[str]) -> None:
        if time.monotonic() > deadline:
            logger.warning(f"{method} {url} exceeded the {self.deadline_seconds}s deadline")
            raise TransportError(
                f"request exceeded the {self.deadline_seconds}s deadline",
                kind=TransportErrorKind.TIMEOUT,
                operation=operation,
                url=url,
            )
