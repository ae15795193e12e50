"""
Transport Module - Black Box Interface

Purpose: Send one blocking HTTP request and return the raw response body
Interface: HTTPTransport.send()
Hidden: httpx client lifecycle, timeout handling, error mapping

No retries and no backoff - the caller decides what to do with a failure.
"""

from .transport import HTTP_PROVIDER_TIMEOUT, HTTPTransport

__all__ = ["HTTP_PROVIDER_TIMEOUT", "HTTPTransport"]
