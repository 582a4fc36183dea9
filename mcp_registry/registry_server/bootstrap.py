"""Bootstrap logic for the registry server FastAPI application."""
import logging
from datetime import datetime, timezone
from typing import Any, Optional

from fastapi import FastAPI, APIRouter, Query, Request

from ..config import Settings, settings as default_settings
from .errors import ServerNotFoundError, UnsupportedFormatError, register_exception_handlers
from .listing import filter_servers, paginate, parse_tags
from .middleware import install_middleware
from .model import (McpServer, McpServerDetail, ServerListData, ServerData, ConfigurationData, ToolsData,
                    SuccessResponse, HealthStatus)
from .openapi import TITLE, build_openapi_document, request_base_url
from .storage import McpRegistryLookup

logger = logging.getLogger(__name__)

SERVERS_PREFIX = "/servers"
LEGACY_SERVERS_PREFIX = "/mcp-servers"
JSON_FORMAT = "json"


def with_version_note(server: McpServer, requested_version: Optional[str]) -> McpServerDetail:
    """Copies a server into a detail record, noting a version that cannot be served."""
    detail = McpServerDetail.model_validate(server.model_dump())
    if requested_version and requested_version != server.version:
        note = (f"Requested version {requested_version} not available. "
                f"Returning current version {server.version}.")
        detail = detail.model_copy(update={"version_note": note})
    return detail


def load_registry(mcp_registry: McpRegistryLookup, settings: Settings = default_settings) -> FastAPI:
    """Bootstraps the registry server FastAPI application.

    Args:
        mcp_registry: The MCP server catalog storage implementation.
        settings: Process configuration, defaults to the environment.

    Returns:
        A configured FastAPI application instance.
    """
    app = FastAPI(title=TITLE, version=settings.app_version, root_path=settings.api_root_path or "",
                  docs_url=None, redoc_url=None, openapi_url=None)

    register_exception_handlers(app, settings)
    install_middleware(app, settings)

    def lookup(server_id: str) -> McpServer:
        server = mcp_registry.get_mcp_server(server_id)
        if server is None:
            raise ServerNotFoundError(server_id)
        return server

    # MCP server catalog endpoints
    mcp_router = APIRouter()

    @mcp_router.get("")
    def get_mcp_servers(tags: Optional[str] = None, capability: Optional[str] = None,
                        limit: Optional[str] = None, cursor: Optional[str] = None) -> SuccessResponse[ServerListData]:
        """Endpoint to list MCP servers, filtered by tags/capability and paginated by cursor."""
        servers = filter_servers(mcp_registry.get_mcp_servers(), tags=parse_tags(tags), capability=capability)
        page = paginate(servers, limit=limit, cursor=cursor)
        return SuccessResponse[ServerListData](
            data=ServerListData(servers=page.items, total=page.total, limit=page.limit, cursor=page.cursor))

    @mcp_router.get("/{server_id}")
    def get_mcp_server(server_id: str, version: Optional[str] = None) -> SuccessResponse[ServerData]:
        """Endpoint to retrieve a specific MCP server."""
        server = with_version_note(lookup(server_id), version)
        return SuccessResponse[ServerData](data=ServerData(server=server))

    @mcp_router.get("/{server_id}/config")
    def get_mcp_server_config(server_id: str, config_format: str = Query(JSON_FORMAT, alias="format")) -> SuccessResponse[ConfigurationData]:
        """Endpoint to retrieve the launch configuration of an MCP server."""
        server = lookup(server_id)
        if config_format != JSON_FORMAT:
            raise UnsupportedFormatError(config_format)
        return SuccessResponse[ConfigurationData](data=ConfigurationData(configuration=server.configuration))

    @mcp_router.get("/{server_id}/tools")
    def get_mcp_server_tools(server_id: str) -> SuccessResponse[ToolsData]:
        """Endpoint to retrieve the tools an MCP server provides."""
        server = lookup(server_id)
        return SuccessResponse[ToolsData](data=ToolsData(tools=list(server.tools)))

    app.include_router(mcp_router, prefix=SERVERS_PREFIX)
    app.include_router(mcp_router, prefix=LEGACY_SERVERS_PREFIX, include_in_schema=False)

    @app.get("/health")
    def health_check() -> HealthStatus:
        """Health check endpoint."""
        return HealthStatus(timestamp=datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
                            version=settings.app_version, environment=settings.environment)

    @app.get("/docs")
    def get_docs(request: Request) -> dict[str, Any]:
        """OpenAPI description of this API."""
        return build_openapi_document(request_base_url(request), settings.app_version)

    @app.get("/")
    def index() -> dict[str, Any]:
        """Entry point listing the available endpoints."""
        return {
            "name": TITLE,
            "description": "A dynamic API based registry for MCP servers",
            "version": settings.app_version,
            "documentation": {"openapi": "/docs", "health": "/health"},
            "endpoints": {
                f"GET {SERVERS_PREFIX}": "Get all MCP servers",
                f"GET {SERVERS_PREFIX}/:id": "Get specific MCP server",
                f"GET {SERVERS_PREFIX}/:id/config": "Get MCP server configuration",
                f"GET {SERVERS_PREFIX}/:id/tools": "Get MCP server tools",
            },
            "examples": {
                "Get all servers": SERVERS_PREFIX,
                "Get servers by tag": f"{SERVERS_PREFIX}?tags=github,automation",
                "Get servers by capability": f"{SERVERS_PREFIX}?capability=browser",
                "Get GitHub server": f"{SERVERS_PREFIX}/github-mcp-server",
                "Get Playwright server": f"{SERVERS_PREFIX}/playwright-mcp-server",
            },
        }

    logger.info(f"Registry app loaded with {len(mcp_registry.get_mcp_servers())} MCP servers")
    return app
