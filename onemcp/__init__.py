"""
onemcp: exposes remotely hosted MCP tools to a local FastMCP server.

    ServerRegistry -> RemoteToolProxy.list_tools() -> ProxiedTool wrappers
    ProxiedTool.invoke() -> precondition gate -> ApiClient -> remote origin
"""

from .api_client import ApiClient, ApiResponse
from .config import AccessPolicy, Config, FeatureConfig, default_features, load_features
from .errors import (
    OneMcpError,
    PreconditionError,
    RemoteFetchError,
    SchemaValidationError,
    TransportError,
)
from .preconditions import PreconditionGate, ServiceEnablementGate
from .proxy import InvocationContext, ProxiedTool, RemoteToolProxy, ToolMetadata
from .registry import ServerRegistry, build_server_registry

__version__ = "0.1.0"

__all__ = [
    "ApiClient",
    "ApiResponse",
    "AccessPolicy",
    "Config",
    "FeatureConfig",
    "default_features",
    "load_features",
    "OneMcpError",
    "PreconditionError",
    "RemoteFetchError",
    "SchemaValidationError",
    "TransportError",
    "PreconditionGate",
    "ServiceEnablementGate",
    "InvocationContext",
    "ProxiedTool",
    "RemoteToolProxy",
    "ToolMetadata",
    "ServerRegistry",
    "build_server_registry",
]
