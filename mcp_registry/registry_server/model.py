"""Data models for the registry server."""
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_serializer

DataT = TypeVar("DataT")


class FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Repository(FrozenModel):
    type: str = Field(description="Version control system, e.g. git")
    url: str = Field(description="Clone URL of the repository")


class ServerConfiguration(FrozenModel):
    """Command line used to launch an MCP server."""
    command: str = Field(description="Command to run the server")
    args: tuple[str, ...] = Field(default=(), description="Command arguments")
    env: dict[str, str] = Field(default_factory=dict,
                                description="Environment variables mapped to placeholder values")


class Tool(FrozenModel):
    name: str = Field(description="Tool name")
    description: str = Field(description="Tool description")
    parameters: tuple[str, ...] = Field(default=(), description="Ordered parameter names")


class Requirements(FrozenModel):
    node: str = Field(description="Runtime version constraint")
    environment: tuple[str, ...] = Field(default=(), description="Required environment variables")


class Docker(FrozenModel):
    image: str
    ports: tuple[str, ...] = ()


class Deployment(FrozenModel):
    requirements: Requirements
    docker: Docker


class Documentation(FrozenModel):
    quickstart: str
    api_reference: str = Field(alias="apiReference")


class McpServer(FrozenModel):
    """Data model for an MCP server descriptor."""
    id: str = Field(description="Unique identifier for the server")
    name: str = Field(description="Display name of the server")
    description: str = Field(description="Description of the server functionality")
    version: str = Field(description="Current version of the server")
    author: str = Field(description="Author/organization of the server")
    license: str = Field(description="License type")
    homepage: Optional[str] = Field(default=None, description="Project homepage")
    repository: Repository
    configuration: ServerConfiguration
    capabilities: tuple[str, ...] = Field(default=(), description="Server capabilities")
    tools: tuple[Tool, ...] = Field(default=(), description="Available tools/functions")
    tags: tuple[str, ...] = Field(default=(), description="Tags for categorization")
    deployment: Deployment
    documentation: Documentation


class McpServerDetail(McpServer):
    """An MCP server as returned by the lookup endpoint, with an optional version advisory."""
    version_note: Optional[str] = Field(default=None, alias="versionNote")

    @model_serializer(mode="wrap")
    def _drop_missing_note(self, handler: Any) -> dict[str, Any]:
        data = handler(self)
        if self.version_note is None:
            data.pop("versionNote", None)
            data.pop("version_note", None)
        return data


class ServerListData(BaseModel):
    servers: list[McpServer]
    total: int
    limit: int
    cursor: Optional[str] = None


class ServerData(BaseModel):
    server: McpServerDetail


class ConfigurationData(BaseModel):
    configuration: ServerConfiguration


class ToolsData(BaseModel):
    tools: list[Tool]


class SuccessResponse(BaseModel, Generic[DataT]):
    success: bool = True
    data: DataT


class ErrorBody(BaseModel):
    message: str
    code: Optional[str] = None
    details: Optional[str] = None


class ErrorResponse(BaseModel):
    success: bool = False
    error: ErrorBody


class HealthStatus(BaseModel):
    status: str = "healthy"
    timestamp: str
    version: str
    environment: str
