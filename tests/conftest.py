"""
Shared pytest fixtures for questdb-mcp tests.

This file provides:
1. Pytest markers configuration
2. Mock collaborators (line-protocol sender, /exec endpoint)
3. Testcontainers fixture for an ephemeral QuestDB (requires Docker)
"""
import time
from typing import Any, Callable, Dict, List, Optional
from unittest.mock import MagicMock

import httpx
import pytest

from questdb_mcp.config import ConnectionDescriptor
from questdb_mcp.core.client import QuestDBClient


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: mark test as integration test")


# =============================================================================
# Mock /exec endpoint
# =============================================================================

class MockExecEndpoint:
    """
    Stands in for QuestDB's /exec endpoint via httpx.MockTransport.

    Responses are matched by substring of the SQL text. Every request is
    recorded so tests can assert on what reached the network.
    """

    def __init__(self, responses: Optional[Dict[str, Any]] = None):
        self.responses = responses or {}
        self.requests: List[httpx.Request] = []

    @property
    def queries(self) -> List[str]:
        return [r.url.params.get("query") for r in self.requests]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        sql = request.url.params.get("query", "")

        for pattern, response in self.responses.items():
            if pattern.lower() in sql.lower():
                if isinstance(response, httpx.Response):
                    return response
                return httpx.Response(200, json=response)

        return httpx.Response(
            200,
            json={
                "query": sql,
                "columns": [{"name": "result", "type": "INT"}],
                "timestamp": -1,
                "dataset": [[1]],
                "count": 1,
            },
        )

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def config():
    return ConnectionDescriptor(host="questdb.test", port=9000)


@pytest.fixture
def exec_endpoint():
    return MockExecEndpoint()


@pytest.fixture
def mock_sender():
    return MagicMock(name="Sender")


@pytest.fixture
def sender_factory(mock_sender) -> Callable[[str], Any]:
    return MagicMock(name="Sender.from_conf", return_value=mock_sender)


@pytest.fixture
def client(config, exec_endpoint, sender_factory):
    return QuestDBClient(config, sender_factory=sender_factory, http_transport=exec_endpoint.transport)


# =============================================================================
# Docker/Testcontainers Availability Check
# =============================================================================

DOCKER_AVAILABLE = False
DOCKER_ERROR = None

try:
    import docker
    docker_client = docker.from_env()
    docker_client.ping()
    DOCKER_AVAILABLE = True
except Exception as e:
    DOCKER_ERROR = str(e)


# =============================================================================
# Testcontainers Fixtures (require Docker)
# =============================================================================

def _wait_for_questdb(base_url: str, timeout: float = 60.0) -> None:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        try:
            r = httpx.get(f"{base_url}/exec", params={"query": "SELECT 1"}, timeout=2)
            if r.status_code == 200:
                return
        except httpx.HTTPError:
            pass
        time.sleep(0.5)
    raise TimeoutError(f"QuestDB at {base_url} did not become ready")


@pytest.fixture(scope="session")
def questdb_container():
    """
    Spin up a QuestDB container for the entire test session.

    Skips automatically if Docker is not available.
    """
    if not DOCKER_AVAILABLE:
        pytest.skip(f"Docker not available: {DOCKER_ERROR}")

    from testcontainers.core.container import DockerContainer

    with DockerContainer("questdb/questdb:8.2.1").with_exposed_ports(9000) as questdb:
        host = questdb.get_container_host_ip()
        port = int(questdb.get_exposed_port(9000))
        _wait_for_questdb(f"http://{host}:{port}")
        yield ConnectionDescriptor(host=host, port=port)
