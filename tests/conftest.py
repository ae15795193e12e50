"""
Shared pytest fixtures for httpcloud tests.

This module provides common fixtures including:
- StubServer: a real threaded HTTP server replaying canned responses
- RecordingTransport: an httpx.MockTransport that records requests
- Provider configuration and sample pods/nodes
"""

import json
import os
import sys
import threading
import time
from dataclasses import dataclass, field
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any, Dict, List, Optional

import httpx
import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from httpcloud.config import ProviderConfig
from httpcloud.modules.api import Node, NodeList, ObjectMeta, Pod
from httpcloud.modules.http import HTTPCloud
from httpcloud.modules.transport import HTTPTransport


# =============================================================================
# Stub Server Infrastructure
# =============================================================================


@dataclass
class StubResponse:
    """A canned response served by the stub server."""
    body: bytes = b""
    status: int = 200
    delay: float = 0.0
    drip: float = 0.0  # pause between body bytes

    @classmethod
    def json(cls, payload: Any, status: int = 200) -> "StubResponse":
        return cls(body=json.dumps(payload).encode("utf-8"), status=status)


@dataclass
class ObservedRequest:
    """Record of a request the stub server received."""
    method: str
    path: str
    body: bytes = b""
    headers: Dict[str, str] = field(default_factory=dict)

    def json(self) -> Any:
        return json.loads(self.body)


class StubServer:
    """
    Threaded HTTP server answering with registered responses.

    Usage:
        def test_list(stub_server):
            stub_server.register("GET", "/v1/instances", StubResponse.json(["a"]))
            ...
            assert stub_server.requests[0].path == "/v1/instances"
    """

    def __init__(self):
        self._responses: Dict[tuple, StubResponse] = {}
        self.requests: List[ObservedRequest] = []
        self._lock = threading.Lock()
        self._server = ThreadingHTTPServer(("127.0.0.1", 0), self._make_handler())
        self._server.daemon_threads = True
        self._server.handle_error = lambda request, client_address: None
        self._thread = threading.Thread(target=self._server.serve_forever, daemon=True)

    @property
    def url(self) -> str:
        host, port = self._server.server_address[:2]
        return f"http://{host}:{port}"

    def register(self, method: str, path: str, response: StubResponse) -> "StubServer":
        with self._lock:
            self._responses[(method, path)] = response
        return self

    def start(self) -> None:
        self._thread.start()

    def stop(self) -> None:
        self._server.shutdown()
        self._server.server_close()

    def _make_handler(self):
        stub = self

        class Handler(BaseHTTPRequestHandler):
            def log_message(self, format, *args):
                pass

            def _serve(self):
                length = int(self.headers.get("Content-Length") or 0)
                body = self.rfile.read(length) if length else b""
                with stub._lock:
                    stub.requests.append(
                        ObservedRequest(
                            method=self.command,
                            path=self.path,
                            body=body,
                            headers=dict(self.headers.items()),
                        )
                    )
                    response = stub._responses.get(
                        (self.command, self.path), StubResponse(b"not found", status=404)
                    )

                if response.delay:
                    time.sleep(response.delay)

                self.send_response(response.status)
                self.send_header("Content-Type", "application/json")
                self.send_header("Content-Length", str(len(response.body)))
                self.end_headers()
                if not response.drip:
                    self.wfile.write(response.body)
                    return
                self.wfile.flush()
                for i in range(len(response.body)):
                    self.wfile.write(response.body[i:i + 1])
                    self.wfile.flush()
                    time.sleep(response.drip)

            do_GET = _serve
            do_POST = _serve

        return Handler


@pytest.fixture
def stub_server():
    """Start a stub HTTP server for the duration of a test."""
    server = StubServer()
    server.start()
    yield server
    server.stop()


# =============================================================================
# Mock Transport Infrastructure
# =============================================================================


class RecordingTransport:
    """
    httpx.MockTransport wrapper that records requests and replays responses.

    Responses are keyed by (method, path); unknown requests get a 404.
    """

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self._responses: Dict[tuple, httpx.Response] = {}
        self._error: Optional[Exception] = None
        self.mock = httpx.MockTransport(self._handle)

    def respond(self, method: str, path: str, status: int = 200, json_body: Any = None, content: bytes = b"") -> "RecordingTransport":
        if json_body is not None:
            self._responses[(method, path)] = httpx.Response(status, json=json_body)
        else:
            self._responses[(method, path)] = httpx.Response(status, content=content)
        return self

    def fail_with(self, error: Exception) -> "RecordingTransport":
        self._error = error
        return self

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self._error is not None:
            raise self._error
        return self._responses.get(
            (request.method, request.url.path), httpx.Response(404, content=b"not found")
        )

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def recording_transport():
    """Create a RecordingTransport."""
    return RecordingTransport()


# =============================================================================
# Provider Fixtures
# =============================================================================


INSTANCES_URL = "http://inventory.example.com/api"
SCHEDULER_URL = "http://scheduler.example.com"


@pytest.fixture
def provider_config():
    """Configuration with both capabilities enabled."""
    return ProviderConfig.from_mapping({
        "instances": True,
        "instances-url": INSTANCES_URL + "/",
        "scheduler-extension": True,
        "scheduler-extension-url": SCHEDULER_URL,
    })


@pytest.fixture
def cloud(provider_config, recording_transport):
    """HTTPCloud talking to a RecordingTransport."""
    return HTTPCloud(provider_config, transport=HTTPTransport(transport=recording_transport.mock))


@pytest.fixture
def stub_cloud(stub_server):
    """HTTPCloud talking to the stub server with a short timeout."""
    config = ProviderConfig.from_mapping({
        "instances": True,
        "instances-url": stub_server.url,
        "scheduler-extension": True,
        "scheduler-extension-url": stub_server.url + "/",
    })
    return HTTPCloud(config, transport=HTTPTransport(timeout=0.5))


def make_node(name: str) -> Node:
    return Node(metadata=ObjectMeta(name=name), status={"phase": "Running"})


@pytest.fixture
def sample_pod():
    """A pod with labels and a container."""
    return Pod(
        metadata=ObjectMeta(name="web-1", namespace="default", labels={"app": "web"}),
        spec={"containers": [{"name": "web", "image": "nginx"}]},
    )


@pytest.fixture
def sample_nodes():
    """Three candidate nodes."""
    return NodeList(items=[make_node("n1"), make_node("n2"), make_node("n3")])
