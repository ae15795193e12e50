"""
httpcloud wire models.

Pods and nodes are defined by the orchestration platform; these models only
name the fields the provider touches and let everything else pass through
untouched.
"""

from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, TypeAdapter

# Platform Objects


class PlatformObject(BaseModel):
    """Base for platform-defined objects; unknown fields are preserved."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)


class ObjectMeta(PlatformObject):
    """Standard object metadata."""

    name: Optional[str] = None
    namespace: Optional[str] = None
    uid: Optional[str] = None
    labels: Dict[str, str] = Field(default_factory=dict)
    annotations: Dict[str, str] = Field(default_factory=dict)


class Pod(PlatformObject):
    """A workload descriptor."""

    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
    spec: Dict[str, Any] = Field(default_factory=dict)
    status: Dict[str, Any] = Field(default_factory=dict)


class Node(PlatformObject):
    """A cluster node."""

    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
    spec: Dict[str, Any] = Field(default_factory=dict)
    status: Dict[str, Any] = Field(default_factory=dict)

    @property
    def name(self) -> Optional[str]:
        return self.metadata.name


class NodeList(PlatformObject):
    """A list of nodes."""

    items: List[Node] = Field(default_factory=list)

    def names(self) -> List[Optional[str]]:
        return [node.name for node in self.items]


class NodeAddress(PlatformObject):
    """One address of a node (e.g. type "InternalIP")."""

    type: str
    address: str


class NodeResources(PlatformObject):
    """Resources a node provides."""

    capacity: Dict[str, Any] = Field(default_factory=dict)


class HostPriority(PlatformObject):
    """Score a remote prioritize pass assigned to one node."""

    host: str = Field(..., validation_alias=AliasChoices("host", "node"))
    score: int


# Scheduler Extension Arguments


class FilterArgs(BaseModel):
    """Arguments for filtering nodes for a pod."""

    pod: Pod
    nodes: NodeList


class PriorityArgs(FilterArgs):
    """Arguments for prioritizing nodes for a pod; same shape as FilterArgs."""


class BindArgs(BaseModel):
    """Arguments for binding a pod to a host."""

    pod: Pod
    host: str


# Response Adapters

INSTANCE_NAMES = TypeAdapter(List[str])
NODE_ADDRESSES = TypeAdapter(List[NodeAddress])
NODE_RESOURCES = TypeAdapter(NodeResources)
NODE_LIST = TypeAdapter(NodeList)
HOST_PRIORITY_LIST = TypeAdapter(List[HostPriority])
ANNOTATIONS = TypeAdapter(Dict[str, str])
