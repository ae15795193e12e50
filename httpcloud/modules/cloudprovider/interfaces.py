"""Cloud provider interfaces following Black Box Design principles."""
from enum import Enum
from typing import Dict, List, Optional, Protocol, runtime_checkable

from ..api.models import HostPriority, NodeAddress, NodeList, NodeResources, Pod


class Capability(str, Enum):
    """Optional operation groups a provider may support."""

    INSTANCES = "instances"
    TCP_LOAD_BALANCER = "tcp-load-balancer"
    ZONES = "zones"
    CLUSTERS = "clusters"
    SCHEDULER_EXTENSION = "scheduler-extension"


@runtime_checkable
class Instances(Protocol):
    """Protocol for node inventory."""

    def list_instances(self, filter: str = "") -> List[str]:
        """Enumerate the instance names matching filter ("" means all)."""
        ...

    def node_addresses(self, instance: str) -> List[NodeAddress]:
        """Return the addresses of an instance."""
        ...

    def node_resources(self, instance: str) -> NodeResources:
        """Return the resources of an instance."""
        ...

    def external_id(self, instance: str) -> str:
        """Return the cloud provider ID of an instance."""
        ...


@runtime_checkable
class SchedulerExtension(Protocol):
    """Protocol for delegating scheduling decisions."""

    def filter(self, pod: Pod, nodes: NodeList) -> NodeList:
        """Narrow the candidate nodes to those the pod may run on."""
        ...

    def prioritize(self, pod: Pod, nodes: NodeList) -> List[HostPriority]:
        """Score the candidate nodes for the pod."""
        ...

    def bind(self, pod: Pod, host: str) -> Dict[str, str]:
        """Reserve resources for the pod on host; returns annotations."""
        ...

    def unbind(self, pod: Pod) -> None:
        """Release resources reserved by bind."""
        ...


class CloudProvider(Protocol):
    """
    Protocol for cloud providers.

    Each capability query returns an object implementing the richer
    interface, or None when the capability is not supported.
    """

    def instances(self) -> Optional[Instances]:
        ...

    def tcp_load_balancer(self) -> Optional[object]:
        ...

    def zones(self) -> Optional[object]:
        ...

    def clusters(self) -> Optional[object]:
        ...

    def scheduler_extension(self) -> Optional[SchedulerExtension]:
        ...
