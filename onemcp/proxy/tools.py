"""
Local tool wrappers produced by remote tool discovery.
"""

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional


@dataclass(frozen=True)
class ToolMetadata:
    """Access metadata attached to every wrapper from one proxy."""

    requires_auth: bool
    requires_project: bool
    feature: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "requiresAuth": self.requires_auth,
            "requiresProject": self.requires_project,
            "feature": self.feature,
        }


@dataclass(frozen=True)
class InvocationContext:
    """Per-call input supplied by the caller."""

    project_id: Optional[str] = None
    extras: Mapping[str, Any] = field(default_factory=dict)


ToolInvoker = Callable[[Dict[str, Any], InvocationContext], Awaitable[Dict[str, Any]]]


@dataclass
class ProxiedTool:
    """A remote tool, namespaced by feature and callable locally."""

    name: str
    description: str
    input_schema: Dict[str, Any]
    metadata: ToolMetadata
    remote_name: str
    invoker: ToolInvoker = field(repr=False)

    async def invoke(
        self, arguments: Dict[str, Any], context: InvocationContext
    ) -> Dict[str, Any]:
        """Call the remote tool with the given arguments."""
        return await self.invoker(arguments, context)

    def to_mcp(self) -> Dict[str, Any]:
        """Convert to the MCP tool listing format."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
            "_meta": self.metadata.to_dict(),
        }

    def __str__(self) -> str:
        return f"ProxiedTool({self.name} -> {self.metadata.feature}.{self.remote_name})"
