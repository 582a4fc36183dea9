"""Storage abstraction for the MCP server catalog."""
from abc import ABC, abstractmethod
from typing import Sequence

from .model import McpServer


class McpRegistryLookup(ABC):
    @abstractmethod
    def get_mcp_servers(self) -> Sequence[McpServer]:
        """Retrieves all MCP servers in catalog order.

         Returns:
             An ordered, read-only sequence of McpServer instances.
         """
        pass

    @abstractmethod
    def get_mcp_server(self, server_id: str) -> McpServer | None:
        """Retrieves a specific MCP server by id.

        Args:
            server_id: The unique id of the MCP server.

        Returns:
            The McpServer instance, or None if not found.
        """
        pass
