"""Registry server module serving the read-only MCP server catalog."""
from .bootstrap import load_registry
from .catalog import load_catalog
from .in_memory_registry_storage import InMemoryMcpRegistry
from .model import McpServer, McpServerDetail
from .storage import McpRegistryLookup

__all__ = [
    "load_registry",
    "load_catalog",
    "McpRegistryLookup",
    "InMemoryMcpRegistry",
    "McpServer",
    "McpServerDetail",
]
