"""
HTTP cloud provider.

Answers inventory questions and scheduler extension calls (filter,
prioritize, bind, unbind) by forwarding them to a remote service over
HTTP/JSON. The provider implements no policy of its own: it builds the URL,
serializes the arguments, performs one blocking round trip and decodes the
answer. Every failure propagates to the caller with the operation name and
the target URL attached.
"""

import logging
from typing import IO, Any, Dict, FrozenSet, List, Mapping, Optional, Sequence, Union
from urllib.parse import quote

from pydantic import BaseModel, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from ...config.provider import PrioritizeScope, ProviderConfig, load_config
from ...errors import CapabilityNotSupportedError, DecodeError, EncodeError
from ..api.models import (
    ANNOTATIONS,
    HOST_PRIORITY_LIST,
    INSTANCE_NAMES,
    NODE_ADDRESSES,
    NODE_LIST,
    NODE_RESOURCES,
    BindArgs,
    FilterArgs,
    HostPriority,
    Node,
    NodeAddress,
    NodeList,
    NodeResources,
    Pod,
    PriorityArgs,
)
from ..cloudprovider.interfaces import Capability
from ..transport import HTTPTransport

logger = logging.getLogger(__name__)

PROVIDER_NAME = "http"

INSTANCES_PATH = "/v1/instances"
INSTANCE_RESOURCES_PATH = "resources"
INSTANCE_ADDRESSES_PATH = "addresses"
SCHEDULER_EXTENSION_PATH = "/v1/scheduler"
SCHEDULER_EXTENSION_FILTER = "filter"
SCHEDULER_EXTENSION_PRIORITIZE = "prioritize"
SCHEDULER_EXTENSION_BIND = "bind"
SCHEDULER_EXTENSION_UNBIND = "unbind"

PodLike = Union[Pod, Mapping[str, Any]]
NodesLike = Union[NodeList, Sequence[Union[Node, Mapping[str, Any]]]]


class HTTPCloud:
    """
    Cloud provider backed by a remote HTTP service.

    One object serves every enabled capability: the capability queries hand
    back this same instance, which implements both the Instances and the
    SchedulerExtension interfaces. Operations of a disabled capability raise
    CapabilityNotSupportedError instead of reaching the network.

    The provider keeps no mutable state between calls and is safe to use
    from several threads at once.
    """

    def __init__(self, config: ProviderConfig, transport: Optional[HTTPTransport] = None):
        """
        Initialize the provider.

        Args:
            config: Validated provider configuration
            transport: HTTP transport (defaults to a 5 second timeout transport)
        """
        self.config = config
        self.transport = transport or HTTPTransport()
        self._capabilities = self._enabled_capabilities(config)

    @staticmethod
    def _enabled_capabilities(config: ProviderConfig) -> FrozenSet[Capability]:
        # Load balancers, zones and clusters are never served by this provider
        enabled = set()
        if config.instances:
            enabled.add(Capability.INSTANCES)
        if config.scheduler_extension:
            enabled.add(Capability.SCHEDULER_EXTENSION)
        return frozenset(enabled)

    # Capability queries

    def capabilities(self) -> FrozenSet[Capability]:
        """Capabilities this provider serves."""
        return self._capabilities

    def supports(self, capability: Capability) -> bool:
        return capability in self._capabilities

    def instances(self) -> Optional["HTTPCloud"]:
        """Return an implementation of Instances, or None if not enabled."""
        return self if self.supports(Capability.INSTANCES) else None

    def tcp_load_balancer(self) -> None:
        return None

    def zones(self) -> None:
        return None

    def clusters(self) -> None:
        return None

    def scheduler_extension(self) -> Optional["HTTPCloud"]:
        """Return an implementation of SchedulerExtension, or None if not enabled."""
        return self if self.supports(Capability.SCHEDULER_EXTENSION) else None

    # Instances

    def list_instances(self, filter: str = "") -> List[str]:
        """
        Enumerate the instances known by the remote service.

        Args:
            filter: Selection pattern passed through as a path segment;
                empty or whitespace means all instances

        Returns:
            Instance names
        """
        operation = "list"
        self._require(Capability.INSTANCES, operation)
        filter = (filter or "").strip()
        url = self._instances_url(*([filter] if filter else []))
        return self._get(operation, url, INSTANCE_NAMES)

    def node_addresses(self, instance: str) -> List[NodeAddress]:
        """Return the addresses of a particular instance."""
        operation = "addresses"
        self._require(Capability.INSTANCES, operation)
        url = self._instances_url(self._instance_segment(instance), INSTANCE_ADDRESSES_PATH)
        return self._get(operation, url, NODE_ADDRESSES)

    def node_resources(self, instance: str) -> NodeResources:
        """Return the resources of a particular instance."""
        operation = "resources"
        self._require(Capability.INSTANCES, operation)
        url = self._instances_url(self._instance_segment(instance), INSTANCE_RESOURCES_PATH)
        return self._get(operation, url, NODE_RESOURCES)

    def external_id(self, instance: str) -> str:
        """The instance name doubles as the cloud provider ID."""
        self._require(Capability.INSTANCES, "external-id")
        return instance

    # Scheduler extension

    def filter(self, pod: PodLike, nodes: NodesLike) -> NodeList:
        """
        Filter nodes with the provider's predicates.

        The remote service may drop any candidate for reasons the local
        scheduler cannot see (capacity, placement constraints).

        Returns:
            The admissible nodes, in the order the remote service returned them
        """
        operation = SCHEDULER_EXTENSION_FILTER
        self._require(Capability.SCHEDULER_EXTENSION, operation)
        args = self._build_args(operation, FilterArgs, pod=pod, nodes=self._node_list(operation, nodes))
        url = self._scheduler_url(operation)
        logger.debug(f"Filtering nodes {args.nodes.names()} for pod {args.pod.metadata.name}")
        return self._post(operation, url, args, NODE_LIST)

    def prioritize(self, pod: PodLike, nodes: NodesLike) -> List[HostPriority]:
        """
        Score nodes with the provider's priority functions.

        The returned scores are meant to be added to the scheduler's own
        scores before host selection; they are passed through unchanged.
        With prioritize-scope "filtered" the candidates are filtered
        remotely first and only the survivors are scored.
        """
        operation = SCHEDULER_EXTENSION_PRIORITIZE
        self._require(Capability.SCHEDULER_EXTENSION, operation)
        if self.config.prioritize_scope == PrioritizeScope.FILTERED:
            nodes = self.filter(pod, nodes)
        args = self._build_args(operation, PriorityArgs, pod=pod, nodes=self._node_list(operation, nodes))
        url = self._scheduler_url(operation)
        return self._post(operation, url, args, HOST_PRIORITY_LIST)

    def bind(self, pod: PodLike, host: str) -> Dict[str, str]:
        """
        Inform the provider about the scheduling decision.

        Bind reserves resources for the pod on host. Any failure leaves the
        binding in an unknown state; nothing is rolled back here.

        Returns:
            Annotations for later stages of the pod's lifecycle (network/storage)
        """
        operation = SCHEDULER_EXTENSION_BIND
        self._require(Capability.SCHEDULER_EXTENSION, operation)
        args = self._build_args(operation, BindArgs, pod=pod, host=host)
        url = self._scheduler_url(operation)
        annotations = self._post(operation, url, args, ANNOTATIONS)
        logger.info(f"Bound pod {args.pod.metadata.name} to {host} ({len(annotations)} annotations)")
        return annotations

    def unbind(self, pod: PodLike) -> None:
        """
        Inform the provider about the unbind; frees resources held by the pod.

        Called when binding fails further down or when the pod is deleted.
        The response body is ignored.
        """
        operation = SCHEDULER_EXTENSION_UNBIND
        self._require(Capability.SCHEDULER_EXTENSION, operation)
        payload = self._pod(operation, pod)
        url = self._scheduler_url(operation)
        self._post(operation, url, payload, None)
        logger.info(f"Unbound pod {payload.metadata.name}")

    # Helpers

    def _require(self, capability: Capability, operation: str) -> None:
        if not self.supports(capability):
            raise CapabilityNotSupportedError(
                f"capability {capability.value!r} is not enabled", operation=operation
            )

    def _instances_url(self, *segments: str) -> str:
        return _join(self.config.instances_url, INSTANCES_PATH, *segments)

    def _scheduler_url(self, verb: str) -> str:
        return _join(self.config.scheduler_extension_url, SCHEDULER_EXTENSION_PATH, verb)

    @staticmethod
    def _instance_segment(instance: str) -> str:
        if not instance or not instance.strip():
            raise ValueError("instance name must not be empty")
        return instance

    @staticmethod
    def _pod(operation: str, pod: PodLike) -> Pod:
        if isinstance(pod, Pod):
            return pod
        try:
            return Pod.model_validate(pod)
        except ValidationError as e:
            raise EncodeError(f"invalid pod: {e}", operation=operation) from e

    @staticmethod
    def _node_list(operation: str, nodes: NodesLike) -> NodeList:
        if isinstance(nodes, NodeList):
            return nodes
        try:
            return NodeList(items=list(nodes))
        except ValidationError as e:
            raise EncodeError(f"invalid node list: {e}", operation=operation) from e

    def _build_args(self, operation: str, model: type, pod: PodLike, **fields: Any) -> BaseModel:
        try:
            return model(pod=self._pod(operation, pod), **fields)
        except ValidationError as e:
            raise EncodeError(f"invalid {operation} arguments: {e}", operation=operation) from e

    def _get(self, operation: str, url: str, adapter: TypeAdapter) -> Any:
        """Send a GET request and decode the JSON response."""
        body = self.transport.send("GET", url, operation=operation)
        return _decode(operation, url, body, adapter)

    def _post(self, operation: str, url: str, payload: BaseModel, adapter: Optional[TypeAdapter]) -> Any:
        """Send a POST request and decode the JSON response, if one is expected."""
        try:
            body = payload.model_dump_json(by_alias=True, exclude_unset=True).encode("utf-8")
        except PydanticSerializationError as e:
            raise EncodeError(f"request Marshal failed: {e}", operation=operation, url=url) from e

        response = self.transport.send("POST", url, body=body, operation=operation)
        if adapter is None:
            return None
        return _decode(operation, url, response, adapter)


def _join(base: Optional[str], prefix: str, *segments: str) -> str:
    """
    Append a fixed path and individually escaped segments to a base URL.

    Raises:
        ValueError: If a segment is "." or "..", which URL normalization
            would collapse into the surrounding path
    """
    for segment in segments:
        if segment in (".", ".."):
            raise ValueError(f"path segment {segment!r} is not allowed")
    return (base or "") + prefix + "".join("/" + quote(segment, safe="") for segment in segments)


def _decode(operation: str, url: str, body: bytes, adapter: TypeAdapter) -> Any:
    try:
        return adapter.validate_json(body)
    except ValidationError as e:
        logger.warning(f"{operation} response from {url} could not be decoded: {e.error_count()} errors")
        raise DecodeError(f"response Unmarshal failed: {e}", operation=operation, url=url) from e


def new_http_cloud(config: Optional[IO[Any]], transport: Optional[HTTPTransport] = None) -> HTTPCloud:
    """
    Create an HTTP cloud provider from a configuration stream.

    Raises:
        ConfigError: If the configuration is absent or invalid
    """
    provider_config = load_config(config)
    logger.info(
        f"Created HTTP cloud provider (capabilities: "
        f"{sorted(c.value for c in HTTPCloud._enabled_capabilities(provider_config)) or 'none'})"
    )
    return HTTPCloud(provider_config, transport=transport)
