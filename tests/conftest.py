import pytest
from fastapi.testclient import TestClient

from mcp_registry.config import Settings
from mcp_registry.registry_server import InMemoryMcpRegistry, load_catalog, load_registry
from mcp_registry.registry_server.model import McpServer


def make_server(server_id: str, tags: list[str], capabilities: list[str], version: str = "1.0.0") -> McpServer:
    return McpServer.model_validate({
        "id": server_id,
        "name": server_id.title(),
        "description": f"{server_id} test server",
        "version": version,
        "author": "Tests",
        "license": "MIT",
        "repository": {"type": "git", "url": f"https://example.com/{server_id}.git"},
        "configuration": {"command": "npx", "args": [server_id], "env": {}},
        "capabilities": capabilities,
        "tools": [{"name": "ping", "description": "Ping", "parameters": ["target"]}],
        "tags": tags,
        "deployment": {
            "requirements": {"node": ">=18.0.0", "environment": []},
            "docker": {"image": "node:18-alpine", "ports": ["3000"]},
        },
        "documentation": {"quickstart": "https://example.com/start", "apiReference": "https://example.com/api"},
    })


@pytest.fixture
def server_factory():
    return make_server


@pytest.fixture
def catalog() -> InMemoryMcpRegistry:
    return InMemoryMcpRegistry(load_catalog())


@pytest.fixture
def client(catalog: InMemoryMcpRegistry) -> TestClient:
    app = load_registry(catalog, settings=Settings())
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def large_client() -> TestClient:
    servers = [make_server(f"server-{i:02d}", tags=["even" if i % 2 == 0 else "odd"], capabilities=["echo"])
               for i in range(25)]
    app = load_registry(InMemoryMcpRegistry(servers), settings=Settings())
    return TestClient(app, raise_server_exceptions=False)
