import base64

import pytest
from fastapi.testclient import TestClient

from mcp_registry.config import Settings
from mcp_registry.registry_server import InMemoryMcpRegistry, load_catalog, load_registry
from mcp_registry.registry_server.listing import decode_cursor


def test_list_servers_default_page(client: TestClient):
    # When
    response = client.get("/servers")

    # Then
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"]["total"] == 2
    assert body["data"]["limit"] == 50
    assert body["data"]["cursor"] is None
    assert [s["id"] for s in body["data"]["servers"]] == ["github-mcp-server", "playwright-mcp-server"]


def test_list_servers_follows_cursor(client: TestClient):
    # Given
    first = client.get("/servers", params={"limit": 1}).json()["data"]
    assert [s["id"] for s in first["servers"]] == ["github-mcp-server"]
    assert first["cursor"] is not None

    # When
    second = client.get("/servers", params={"limit": 1, "cursor": first["cursor"]}).json()["data"]

    # Then
    assert [s["id"] for s in second["servers"]] == ["playwright-mcp-server"]
    assert second["cursor"] is None
    assert second["total"] == 2


@pytest.mark.parametrize("limit", ["abc", "0", "-1", ""])
def test_list_servers_bad_limit_defaults(client: TestClient, limit: str):
    response = client.get("/servers", params={"limit": limit})
    assert response.status_code == 200
    assert response.json()["data"]["limit"] == 50


def test_list_servers_limit_is_capped(client: TestClient):
    assert client.get("/servers", params={"limit": 500}).json()["data"]["limit"] == 100


def test_list_servers_malformed_cursor_starts_over(client: TestClient):
    response = client.get("/servers", params={"limit": 1, "cursor": "!!not-a-cursor!!"})
    assert response.status_code == 200
    assert [s["id"] for s in response.json()["data"]["servers"]] == ["github-mcp-server"]


def test_list_servers_by_tags(client: TestClient):
    data = client.get("/servers", params={"tags": "GitHub, automation"}).json()["data"]
    assert [s["id"] for s in data["servers"]] == ["github-mcp-server"]
    assert data["total"] == 1


def test_list_servers_by_capability(client: TestClient):
    data = client.get("/servers", params={"capability": "browser"}).json()["data"]
    assert [s["id"] for s in data["servers"]] == ["playwright-mcp-server"]


def test_list_servers_tags_and_capability(client: TestClient):
    data = client.get("/servers", params={"tags": "github", "capability": "browser"}).json()["data"]
    assert data["servers"] == []
    assert data["total"] == 0
    assert data["cursor"] is None


def test_list_servers_total_counts_filtered_records(large_client: TestClient):
    data = large_client.get("/servers", params={"tags": "even", "limit": 5}).json()["data"]
    assert data["total"] == 13
    assert len(data["servers"]) == 5
    assert decode_cursor(data["cursor"]) == 5


def test_list_servers_pages_cover_filtered_set(large_client: TestClient):
    # Given
    seen = []
    params = {"tags": "odd", "limit": 5}

    # When
    while True:
        data = large_client.get("/servers", params=params).json()["data"]
        seen.extend(s["id"] for s in data["servers"])
        if data["cursor"] is None:
            break
        params["cursor"] = data["cursor"]

    # Then
    assert seen == [f"server-{i:02d}" for i in range(25) if i % 2 == 1]


def test_legacy_path_matches_servers_path(client: TestClient):
    assert client.get("/mcp-servers", params={"limit": 1}).json() == client.get("/servers", params={"limit": 1}).json()
    assert client.get("/mcp-servers/github-mcp-server/tools").json() == \
        client.get("/servers/github-mcp-server/tools").json()


def test_get_server(client: TestClient):
    response = client.get("/servers/github-mcp-server")
    assert response.status_code == 200
    server = response.json()["data"]["server"]
    assert server["id"] == "github-mcp-server"
    assert server["name"] == "GitHub MCP Server"
    assert server["documentation"]["apiReference"] == "https://github.com/github/github-mcp-server#tools"
    assert server["deployment"]["requirements"]["environment"] == ["GITHUB_TOKEN"]
    assert "versionNote" not in server


def test_get_server_matching_version_has_no_note(client: TestClient):
    server = client.get("/servers/github-mcp-server", params={"version": "1.0.0"}).json()["data"]["server"]
    assert "versionNote" not in server


def test_get_server_version_mismatch_adds_note(client: TestClient):
    response = client.get("/servers/github-mcp-server", params={"version": "2.0.0"})
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    server = body["data"]["server"]
    assert server["version"] == "1.0.0"
    assert "2.0.0" in server["versionNote"]
    assert server["versionNote"] == "Requested version 2.0.0 not available. Returning current version 1.0.0."


@pytest.mark.parametrize("path, params", [
    ("/servers/does-not-exist", {}),
    ("/servers/does-not-exist", {"version": "1.0.0"}),
    ("/servers/does-not-exist/config", {}),
    ("/servers/does-not-exist/config", {"format": "yaml"}),
    ("/servers/does-not-exist/tools", {}),
    ("/mcp-servers/does-not-exist", {}),
])
def test_unknown_server_is_not_found(client: TestClient, path: str, params: dict):
    response = client.get(path, params=params)
    assert response.status_code == 404
    assert response.json() == {"success": False,
                               "error": {"message": "MCP server not found", "code": "SERVER_NOT_FOUND"}}


def test_get_config(client: TestClient):
    response = client.get("/servers/github-mcp-server/config")
    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "data": {"configuration": {"command": "npx", "args": ["@github/github-mcp-server"],
                                   "env": {"GITHUB_TOKEN": "{GITHUB_TOKEN}"}}},
    }
    assert client.get("/servers/github-mcp-server/config", params={"format": "json"}).status_code == 200


def test_get_config_unsupported_format(client: TestClient):
    response = client.get("/servers/github-mcp-server/config", params={"format": "yaml"})
    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "UNSUPPORTED_FORMAT"
    assert response.json()["success"] is False


def test_get_tools(client: TestClient):
    response = client.get("/servers/playwright-mcp-server/tools")
    assert response.status_code == 200
    tools = response.json()["data"]["tools"]
    assert len(tools) == 12
    assert tools[0] == {"name": "browser_navigate", "description": "Navigate to a URL", "parameters": ["url"]}
    assert tools[3]["parameters"] == []


def test_health(client: TestClient):
    response = client.get("/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["version"] == "1.0.0"
    assert body["environment"] == "development"
    assert body["timestamp"].endswith("Z")


def test_health_reports_environment(monkeypatch, catalog):
    monkeypatch.setenv("REGISTRY_ENV", "production")
    monkeypatch.setenv("APP_VERSION", "2.3.4")
    client = TestClient(load_registry(catalog, settings=Settings()))
    body = client.get("/health").json()
    assert body["environment"] == "production"
    assert body["version"] == "2.3.4"


def test_docs_document(client: TestClient):
    response = client.get("/docs")
    assert response.status_code == 200
    doc = response.json()
    assert doc["openapi"] == "3.0.3"
    assert set(doc["paths"]) == {"/servers", "/servers/{id}", "/servers/{id}/config", "/servers/{id}/tools",
                                 "/health"}
    assert doc["servers"][0]["url"] == "http://testserver"
    assert "MCPServer" in doc["components"]["schemas"]


def test_docs_honours_forwarded_proto(client: TestClient):
    doc = client.get("/docs", headers={"X-Forwarded-Proto": "https"}).json()
    assert doc["servers"][0]["url"] == "https://testserver"


def test_index(client: TestClient):
    body = client.get("/").json()
    assert body["documentation"] == {"openapi": "/docs", "health": "/health"}
    assert "GET /servers" in body["endpoints"]


@pytest.mark.parametrize("method, path", [
    ("GET", "/nope"),
    ("GET", "/servers/github-mcp-server/unknown"),
    ("POST", "/servers"),
    ("DELETE", "/servers/github-mcp-server"),
])
def test_unmatched_route(client: TestClient, method: str, path: str):
    response = client.request(method, path)
    assert response.status_code == 404
    assert response.json() == {"success": False, "error": {"message": "Endpoint not found", "code": "NOT_FOUND"}}


def test_security_headers(client: TestClient):
    response = client.get("/health")
    assert response.headers["x-content-type-options"] == "nosniff"
    assert response.headers["x-frame-options"] == "SAMEORIGIN"
    csp = response.headers["content-security-policy"]
    assert "default-src 'self'" in csp
    assert "http://localhost:*" in csp


def test_production_csp_excludes_localhost(monkeypatch, catalog):
    monkeypatch.setenv("REGISTRY_ENV", "production")
    monkeypatch.setenv("CSP_CONNECT_SRC", "https://api.example.com")
    client = TestClient(load_registry(catalog, settings=Settings()))
    csp = client.get("/health").headers["content-security-policy"]
    assert "localhost" not in csp
    assert "https://api.example.com" in csp


def test_cors_default_allows_any_origin(client: TestClient):
    response = client.get("/servers", headers={"Origin": "https://somewhere.example"})
    assert response.headers["access-control-allow-origin"] == "*"


def test_cors_restricted_origins(monkeypatch, catalog):
    # Given
    monkeypatch.setenv("ALLOWED_ORIGINS", "https://allowed.example, https://other.example")
    client = TestClient(load_registry(catalog, settings=Settings()))

    # When
    preflight = client.options("/servers", headers={"Origin": "https://allowed.example",
                                                    "Access-Control-Request-Method": "GET"})
    denied = client.get("/servers", headers={"Origin": "https://evil.example"})

    # Then
    assert preflight.status_code == 200
    assert preflight.headers["access-control-allow-origin"] == "https://allowed.example"
    assert preflight.headers["access-control-max-age"] == "86400"
    assert "access-control-allow-origin" not in denied.headers


class ExplodingRegistry(InMemoryMcpRegistry):
    def get_mcp_server(self, server_id):
        raise RuntimeError("catalog exploded")


def test_unexpected_error_hides_details_by_default(monkeypatch):
    monkeypatch.delenv("REGISTRY_ENV", raising=False)
    client = TestClient(load_registry(ExplodingRegistry(load_catalog()), settings=Settings()),
                        raise_server_exceptions=False)
    response = client.get("/servers/github-mcp-server")
    assert response.status_code == 500
    assert response.json() == {"success": False, "error": {"message": "Internal server error"}}


def test_unexpected_error_details_in_development(monkeypatch):
    monkeypatch.setenv("REGISTRY_ENV", "development")
    client = TestClient(load_registry(ExplodingRegistry(load_catalog()), settings=Settings()),
                        raise_server_exceptions=False)
    response = client.get("/servers/github-mcp-server")
    assert response.status_code == 500
    assert response.json()["error"]["details"] == "catalog exploded"


def test_list_servers_oversized_limit(client: TestClient):
    response = client.get("/servers", params={"limit": "9" * 5000})
    assert response.status_code == 200
    assert response.json()["data"]["limit"] == 100


def test_list_servers_oversized_cursor_starts_over(client: TestClient):
    cursor = base64.b64encode(b"9" * 5000).decode()
    response = client.get("/servers", params={"limit": 1, "cursor": cursor})
    assert response.status_code == 200
    assert [s["id"] for s in response.json()["data"]["servers"]] == ["github-mcp-server"]


class DevelopmentSettings(Settings):
    @property
    def expose_error_details(self) -> bool:
        return True


class QuietSettings(Settings):
    @property
    def expose_error_details(self) -> bool:
        return False


def test_error_details_follow_injected_settings(monkeypatch):
    # Given
    monkeypatch.delenv("REGISTRY_ENV", raising=False)
    client = TestClient(load_registry(ExplodingRegistry(load_catalog()), settings=DevelopmentSettings()),
                        raise_server_exceptions=False)

    # When
    response = client.get("/servers/github-mcp-server")

    # Then
    assert response.status_code == 500
    assert response.json()["error"]["details"] == "catalog exploded"


def test_error_details_hidden_by_injected_settings(monkeypatch):
    monkeypatch.setenv("REGISTRY_ENV", "development")
    client = TestClient(load_registry(ExplodingRegistry(load_catalog()), settings=QuietSettings()),
                        raise_server_exceptions=False)
    response = client.get("/servers/github-mcp-server")
    assert response.status_code == 500
    assert response.json() == {"success": False, "error": {"message": "Internal server error"}}


def test_large_responses_are_gzipped(client: TestClient):
    response = client.get("/servers", headers={"Accept-Encoding": "gzip"})
    assert response.status_code == 200
    assert len(response.content) >= 1024
    assert response.headers["content-encoding"] == "gzip"
    assert response.json()["data"]["total"] == 2


def test_small_responses_are_not_gzipped(client: TestClient):
    response = client.get("/servers/does-not-exist", headers={"Accept-Encoding": "gzip"})
    assert "content-encoding" not in response.headers
