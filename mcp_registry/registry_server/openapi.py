"""OpenAPI 3.0.3 description of the registry's HTTP surface."""
from typing import Any

from fastapi import Request

from .listing import DEFAULT_LIMIT, MAX_LIMIT

TITLE = "Dynamic MCP Registry API"
DESCRIPTION = "A dynamic API based registry for MCP (Model Context Protocol) servers"


def request_base_url(request: Request) -> str:
    """Scheme and host the client used to reach the API, honouring X-Forwarded-Proto."""
    scheme = request.url.scheme
    if request.headers.get("x-forwarded-proto", "").lower() == "https":
        scheme = "https"
    host = request.headers.get("host", request.url.netloc)
    return f"{scheme}://{host}"


def _success(data_properties: dict[str, Any]) -> dict[str, Any]:
    return {
        "description": "Successful response",
        "content": {
            "application/json": {
                "schema": {
                    "type": "object",
                    "properties": {
                        "success": {"type": "boolean", "example": True},
                        "data": {"type": "object", "properties": data_properties},
                    },
                }
            }
        },
    }


def _error(description: str) -> dict[str, Any]:
    return {
        "description": description,
        "content": {"application/json": {"schema": {"$ref": "#/components/schemas/Error"}}},
    }


_ID_PARAMETER = {
    "name": "id",
    "in": "path",
    "required": True,
    "description": "Unique identifier of the MCP server",
    "schema": {"type": "string", "example": "github-mcp-server"},
}

_STRING_ARRAY = {"type": "array", "items": {"type": "string"}}


def _paths() -> dict[str, Any]:
    return {
        "/servers": {
            "get": {
                "summary": "Get all MCP servers",
                "description": "Retrieve all available MCP servers in the registry with optional filtering",
                "parameters": [
                    {"name": "tags", "in": "query", "required": False,
                     "description": "Filter by comma-separated tags (matches any)",
                     "schema": {"type": "string", "example": "github,automation"}},
                    {"name": "capability", "in": "query", "required": False,
                     "description": "Filter by capability substring",
                     "schema": {"type": "string", "example": "browser-automation"}},
                    {"name": "limit", "in": "query", "required": False,
                     "description": f"Limit number of results (max {MAX_LIMIT})",
                     "schema": {"type": "integer", "minimum": 1, "maximum": MAX_LIMIT,
                                "default": DEFAULT_LIMIT}},
                    {"name": "cursor", "in": "query", "required": False,
                     "description": "Cursor for pagination, taken from the previous page",
                     "schema": {"type": "string"}},
                ],
                "responses": {
                    "200": _success({
                        "servers": {"type": "array", "items": {"$ref": "#/components/schemas/MCPServer"}},
                        "total": {"type": "integer", "example": 2},
                        "limit": {"type": "integer", "example": DEFAULT_LIMIT},
                        "cursor": {"type": "string", "nullable": True, "example": None},
                    }),
                    "500": _error("Internal server error"),
                },
            }
        },
        "/servers/{id}": {
            "get": {
                "summary": "Get specific MCP server",
                "description": "Retrieve a specific MCP server by ID",
                "parameters": [
                    _ID_PARAMETER,
                    {"name": "version", "in": "query", "required": False,
                     "description": "Requested version; a mismatch adds a versionNote instead of failing",
                     "schema": {"type": "string", "example": "1.0.0"}},
                ],
                "responses": {
                    "200": _success({"server": {"$ref": "#/components/schemas/MCPServer"}}),
                    "404": _error("MCP server not found"),
                },
            }
        },
        "/servers/{id}/config": {
            "get": {
                "summary": "Get MCP server configuration",
                "description": "Get the deployment configuration for a specific MCP server",
                "parameters": [
                    _ID_PARAMETER,
                    {"name": "format", "in": "query", "required": False,
                     "description": "Configuration format, only json is supported",
                     "schema": {"type": "string", "enum": ["json"], "default": "json"}},
                ],
                "responses": {
                    "200": _success({"configuration": {"$ref": "#/components/schemas/Configuration"}}),
                    "400": _error("Unsupported format"),
                    "404": _error("MCP server not found"),
                },
            }
        },
        "/servers/{id}/tools": {
            "get": {
                "summary": "Get MCP server tools",
                "description": "Get the available tools for a specific MCP server",
                "parameters": [_ID_PARAMETER],
                "responses": {
                    "200": _success({"tools": {"type": "array", "items": {"$ref": "#/components/schemas/Tool"}}}),
                    "404": _error("MCP server not found"),
                },
            }
        },
        "/health": {
            "get": {
                "summary": "Health check",
                "responses": {
                    "200": {
                        "description": "Service is healthy",
                        "content": {"application/json": {"schema": {"$ref": "#/components/schemas/Health"}}},
                    }
                },
            }
        },
    }


def _schemas() -> dict[str, Any]:
    return {
        "Configuration": {
            "type": "object",
            "description": "Configuration object for deployment",
            "properties": {
                "command": {"type": "string", "example": "npx"},
                "args": {**_STRING_ARRAY, "example": ["@github/github-mcp-server"]},
                "env": {"type": "object", "additionalProperties": {"type": "string"},
                        "example": {"GITHUB_TOKEN": "{GITHUB_TOKEN}"}},
            },
        },
        "Tool": {
            "type": "object",
            "properties": {
                "name": {"type": "string", "example": "get_repository"},
                "description": {"type": "string",
                                "example": "Get detailed information about a specific repository"},
                "parameters": {**_STRING_ARRAY, "example": ["owner", "repo"]},
            },
        },
        "MCPServer": {
            "type": "object",
            "properties": {
                "id": {"type": "string", "description": "Unique identifier for the server",
                       "example": "github-mcp-server"},
                "name": {"type": "string", "description": "Display name of the server",
                         "example": "GitHub MCP Server"},
                "description": {"type": "string", "description": "Description of the server functionality"},
                "version": {"type": "string", "description": "Current version of the server", "example": "1.0.0"},
                "author": {"type": "string", "description": "Author/organization of the server"},
                "license": {"type": "string", "description": "License type", "example": "MIT"},
                "homepage": {"type": "string"},
                "repository": {"type": "object",
                               "properties": {"type": {"type": "string"}, "url": {"type": "string"}}},
                "configuration": {"$ref": "#/components/schemas/Configuration"},
                "capabilities": {**_STRING_ARRAY, "description": "Array of server capabilities",
                                 "example": ["repository-management", "issue-management"]},
                "tools": {"type": "array", "items": {"$ref": "#/components/schemas/Tool"},
                          "description": "Array of available tools/functions"},
                "tags": {**_STRING_ARRAY, "description": "Array of tags for categorization",
                         "example": ["github", "version-control", "collaboration"]},
                "deployment": {
                    "type": "object",
                    "properties": {
                        "requirements": {"type": "object", "properties": {
                            "node": {"type": "string", "example": ">=18.0.0"},
                            "environment": _STRING_ARRAY,
                        }},
                        "docker": {"type": "object", "properties": {
                            "image": {"type": "string"},
                            "ports": _STRING_ARRAY,
                        }},
                    },
                },
                "documentation": {"type": "object", "properties": {
                    "quickstart": {"type": "string"},
                    "apiReference": {"type": "string"},
                }},
                "versionNote": {"type": "string",
                                "description": "Present when the requested version is not available"},
            },
        },
        "Health": {
            "type": "object",
            "properties": {
                "status": {"type": "string", "example": "healthy"},
                "timestamp": {"type": "string", "format": "date-time"},
                "version": {"type": "string", "example": "1.0.0"},
                "environment": {"type": "string", "example": "development"},
            },
        },
        "Error": {
            "type": "object",
            "properties": {
                "success": {"type": "boolean", "example": False},
                "error": {"type": "object", "properties": {
                    "message": {"type": "string", "example": "MCP server not found"},
                    "code": {"type": "string", "example": "SERVER_NOT_FOUND"},
                }},
            },
        },
    }


def build_openapi_document(base_url: str, version: str) -> dict[str, Any]:
    """Builds the OpenAPI document served at /docs.

    Args:
        base_url: URL the document advertises as the current server.
        version: API version reported in the info block.
    """
    return {
        "openapi": "3.0.3",
        "info": {
            "title": TITLE,
            "description": DESCRIPTION,
            "version": version,
            "license": {"name": "MIT", "url": "https://opensource.org/licenses/MIT"},
        },
        "servers": [{"url": base_url, "description": "Current API server"}],
        "paths": _paths(),
        "components": {"schemas": _schemas()},
    }
