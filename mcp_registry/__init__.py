from .registry import McpRegistryClient
from .registry_server import load_registry, load_catalog, InMemoryMcpRegistry, McpRegistryLookup, McpServer, \
    McpServerDetail
from .server import create_app

__version__ = "1.0.0"

__all__ = [
    "create_app",
    "load_registry",
    "load_catalog",
    "McpRegistryLookup",
    "InMemoryMcpRegistry",
    "McpRegistryClient",
    "McpServer",
    "McpServerDetail",
]
