"""
API Module - Black Box Interface

Purpose: Wire models shared by the provider and its callers
Interface: Pod, Node, NodeList, NodeAddress, NodeResources, HostPriority,
           FilterArgs, PriorityArgs, BindArgs
Hidden: JSON (de)serialization details
"""

from .models import (
    BindArgs,
    FilterArgs,
    HostPriority,
    Node,
    NodeAddress,
    NodeList,
    NodeResources,
    ObjectMeta,
    Pod,
    PriorityArgs,
)

__all__ = [
    "BindArgs",
    "FilterArgs",
    "HostPriority",
    "Node",
    "NodeAddress",
    "NodeList",
    "NodeResources",
    "ObjectMeta",
    "Pod",
    "PriorityArgs",
]
