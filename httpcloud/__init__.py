"""
httpcloud - HTTP Cloud Provider for Kubernetes-style Orchestrators

Delegates infrastructure facts and scheduling decisions to an external
service reachable over HTTP/JSON.

Architecture:
- Each module is self-contained with clear interfaces
- Modules are completely replaceable
- All communication through defined interfaces

Modules:
- cloudprovider: Provider interfaces and the provider registry
- api: Wire models (pods, nodes, scheduler arguments)
- transport: Blocking HTTP request/response sender
- http: The HTTP cloud provider (inventory + scheduler extension)
"""

__version__ = "1.0.0"
