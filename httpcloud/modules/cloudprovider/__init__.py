"""
Cloud Provider Module - Black Box Interface

Purpose: Provider interfaces and discovery of providers by name
Interface: register_cloud_provider(), get_cloud_provider(), registered_providers()
Hidden: Registry storage

A provider claims a capability by returning an implementation from the
matching query; callers must query before use.
"""

from .interfaces import Capability, CloudProvider, Instances, SchedulerExtension
from .registry import get_cloud_provider, register_cloud_provider, registered_providers

__all__ = [
    "Capability",
    "CloudProvider",
    "Instances",
    "SchedulerExtension",
    "get_cloud_provider",
    "register_cloud_provider",
    "registered_providers",
]
