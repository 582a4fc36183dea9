"""In-memory storage implementation for the MCP server catalog."""
from typing import Iterable, Sequence

from .model import McpServer
from .storage import McpRegistryLookup


class InMemoryMcpRegistry(McpRegistryLookup):
    """Immutable in-memory catalog, built once and shared by all requests."""

    def __init__(self, servers: Iterable[McpServer]) -> None:
        self._servers: tuple[McpServer, ...] = tuple(servers)
        self._by_id: dict[str, McpServer] = {}
        for server in self._servers:
            if server.id in self._by_id:
                raise ValueError(f"Duplicate MCP server id '{server.id}'")
            self._by_id[server.id] = server

    def __len__(self) -> int:
        return len(self._servers)

    def get_mcp_servers(self) -> Sequence[McpServer]:
        """Retrieves all MCP servers in catalog order."""
        return self._servers

    def get_mcp_server(self, server_id: str) -> McpServer | None:
        """Retrieves a specific MCP server by id."""
        return self._by_id.get(server_id)
