"""
Remote tool proxy.

Discovers the tools hosted at a remote MCP origin and exposes each as a
namespaced local wrapper that forwards calls over JSON-RPC.
"""

from .messages import JsonRpcRequest, RequestIdGenerator
from .models import (
    CallToolResponse,
    CallToolResult,
    EmbeddedToolError,
    ListToolsResponse,
    RemoteToolDescriptor,
)
from .server import RemoteToolProxy, USER_PROJECT_HEADER
from .tools import InvocationContext, ProxiedTool, ToolMetadata

__all__ = [
    "JsonRpcRequest",
    "RequestIdGenerator",
    "CallToolResponse",
    "CallToolResult",
    "EmbeddedToolError",
    "ListToolsResponse",
    "RemoteToolDescriptor",
    "RemoteToolProxy",
    "USER_PROJECT_HEADER",
    "InvocationContext",
    "ProxiedTool",
    "ToolMetadata",
]
