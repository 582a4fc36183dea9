"""Client for the MCP registry HTTP API."""
import logging
from typing import Any, Iterator, Optional, cast

import httpx

from .config import settings

logger = logging.getLogger(__name__)

if settings.httpx_logging:
    logging.getLogger("httpx").setLevel(logging.DEBUG)


class McpRegistryClient:
    """Client for looking up MCP server information in the registry."""

    def __init__(self, registry_url: str, req_opts: Optional[dict[str, str]] = None,
                 client: Optional[httpx.Client] = None):
        """Initializes the McpRegistryClient.

        Args:
            registry_url: The base URL of the registry service.
            req_opts: Optional dictionary of HTTP headers for requests.
            client: Optional preconfigured httpx client, e.g. a FastAPI TestClient.
        """
        if req_opts is None:
            req_opts = {}
        self.registry_url = registry_url.rstrip("/")
        self.client = client if client is not None else httpx.Client(timeout=30, headers=req_opts)
        if client is not None and req_opts:
            self.client.headers.update(req_opts)

    def _get_data(self, path: str, params: Optional[dict[str, str]] = None) -> Optional[dict[str, Any]]:
        response = self.client.get(url=f"{self.registry_url}{path}", params=params)
        if response.status_code == 404:
            return None
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"HTTP error during GET {path}: {e} with response: {response.text if response.text else '<empty>'}")
            raise
        return cast(dict[str, Any], response.json()["data"])

    def get_mcp_servers(self, tags: Optional[list[str]] = None, capability: Optional[str] = None,
                        limit: Optional[int] = None, cursor: Optional[str] = None) -> dict[str, Any]:
        """Retrieves one page of MCP servers.

        Args:
            tags: Only servers carrying any of these tags.
            capability: Only servers with a capability containing this text.
            limit: Page size.
            cursor: Cursor returned with the previous page.

        Returns:
            The page with the keys servers, total, limit and cursor.
        """
        params: dict[str, str] = {}
        if tags:
            params["tags"] = ",".join(tags)
        if capability:
            params["capability"] = capability
        if limit is not None:
            params["limit"] = str(limit)
        if cursor:
            params["cursor"] = cursor
        page = self._get_data("/servers", params=params)
        if page is None:
            raise LookupError(f"No server listing at {self.registry_url}/servers")
        return page

    def iter_mcp_servers(self, tags: Optional[list[str]] = None, capability: Optional[str] = None,
                         limit: Optional[int] = None) -> Iterator[dict[str, Any]]:
        """Yields every matching MCP server, following the cursor from page to page."""
        cursor: Optional[str] = None
        while True:
            page = self.get_mcp_servers(tags=tags, capability=capability, limit=limit, cursor=cursor)
            yield from page["servers"]
            cursor = page.get("cursor")
            if not cursor:
                return

    def get_mcp_server(self, server_id: str, version: Optional[str] = None) -> dict[str, Any] | None:
        """Retrieves a specific MCP server by id.

        Args:
            server_id: The id of the MCP server.
            version: Optional requested version.

        Returns:
            The server as a dictionary, or None if not found.
        """
        params = {"version": version} if version else None
        data = self._get_data(f"/servers/{server_id}", params=params)
        return cast(dict[str, Any], data["server"]) if data else None

    def get_mcp_server_config(self, server_id: str) -> dict[str, Any] | None:
        data = self._get_data(f"/servers/{server_id}/config")
        return cast(dict[str, Any], data["configuration"]) if data else None

    def get_mcp_server_tools(self, server_id: str) -> list[dict[str, Any]] | None:
        data = self._get_data(f"/servers/{server_id}/tools")
        return cast(list[dict[str, Any]], data["tools"]) if data else None
