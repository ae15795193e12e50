"""
HTTP Cloud Provider Module - Black Box Interface

Purpose: Delegate inventory and scheduling decisions to a remote HTTP service
Interface: HTTPCloud, new_http_cloud()
Hidden: URL construction, JSON encoding/decoding, transport

Importing this module registers the provider under the name "http".
"""

from ..cloudprovider.registry import register_cloud_provider
from .cloud import PROVIDER_NAME, HTTPCloud, new_http_cloud

register_cloud_provider(PROVIDER_NAME, new_http_cloud)

__all__ = ["PROVIDER_NAME", "HTTPCloud", "new_http_cloud"]
