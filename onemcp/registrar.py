import inspect
import keyword
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional

from fastmcp import FastMCP
from fastmcp.tools import FunctionTool

from .config import Config
from .errors import PreconditionError
from .proxy import InvocationContext, ProxiedTool
from .registry import ServerRegistry

logger = logging.getLogger(__name__)

# JSON Schema type -> Python annotation, used only for the generated signature
TYPE_MAPPING = {
    "string": str,
    "integer": int,
    "number": float,
    "boolean": bool,
    "array": list,
    "object": dict,
}


def default_context() -> InvocationContext:
    """Build an invocation context for the configured project."""
    return InvocationContext(project_id=Config.get_project_id())


class ToolRegistrar:
    """
    Registers the tools of every proxied feature onto a FastMCP server.
    """

    def __init__(
        self,
        registry: ServerRegistry,
        context_factory: Callable[[], InvocationContext] = default_context,
        has_credentials: bool = False,
    ):
        self.registry = registry
        self.context_factory = context_factory
        self.has_credentials = has_credentials

    def build_tool_function(
        self, tool: ProxiedTool
    ) -> Callable[..., Awaitable[Dict[str, Any]]]:
        """
        A factory that creates a function with a signature matching the
        remote tool's input schema, so FastMCP can generate its parameters.
        """
        properties = tool.input_schema.get("properties", {}) or {}
        required = set(tool.input_schema.get("required", []) or [])

        sig_params = []
        annotations: Dict[str, Any] = {"return": Dict[str, Any]}

        # Required parameters first so defaults never precede them
        ordered = sorted(properties.items(), key=lambda item: item[0] not in required)
        for param_name, param_schema in ordered:
            if not param_name.isidentifier() or keyword.iskeyword(param_name):
                logger.warning(
                    f"Skipping parameter '{param_name}' of {tool.name}: not a valid identifier"
                )
                continue

            json_type = param_schema.get("type") if isinstance(param_schema, dict) else None
            annotation = TYPE_MAPPING.get(json_type, Any) if isinstance(json_type, str) else Any
            if param_name in required:
                param = inspect.Parameter(
                    param_name, inspect.Parameter.KEYWORD_ONLY, annotation=annotation
                )
            else:
                annotation = Optional[annotation]
                param = inspect.Parameter(
                    param_name,
                    inspect.Parameter.KEYWORD_ONLY,
                    default=None,
                    annotation=annotation,
                )
            sig_params.append(param)
            annotations[param_name] = annotation

        async def tool_function(**kwargs) -> Dict[str, Any]:
            """Replaced dynamically with the remote tool's description."""
            if tool.metadata.requires_auth and not self.has_credentials:
                raise PreconditionError(
                    f"Tool '{tool.name}' requires authentication. Set ONEMCP_ACCESS_TOKEN and try again.",
                    feature=tool.metadata.feature,
                )

            # Optional parameters the caller left out arrive as None
            arguments = {
                name: value
                for name, value in kwargs.items()
                if value is not None or name in required
            }
            logger.info(f"Forwarding call to '{tool.name}' with params {list(arguments)}")
            return await tool.invoke(arguments, self.context_factory())

        tool_function.__signature__ = inspect.Signature(parameters=sig_params)
        tool_function.__doc__ = tool.description
        tool_function.__name__ = tool.name
        tool_function.__annotations__ = annotations

        return tool_function

    async def register_tools(self, server: FastMCP) -> int:
        """
        Discover every feature's tools and register them with the server.

        A feature whose discovery fails is skipped; the others still register.

        Returns:
            Number of tools registered
        """
        registered = 0
        discovered = await self.registry.list_all_tools(return_exceptions=True)
        for feature, tools in discovered.items():
            if isinstance(tools, Exception):
                logger.error(f"Failed to discover tools for {feature}: {tools}")
                continue

            registered += self._register_feature_tools(server, tools)

        logger.info(f"Registered {registered} remote tools")
        return registered

    def _register_feature_tools(self, server: FastMCP, tools: List[ProxiedTool]) -> int:
        count = 0
        for tool in tools:
            function = self.build_tool_function(tool)
            server.add_tool(
                FunctionTool.from_function(
                    function, name=tool.name, description=tool.description
                )
            )
            logger.info(f"  - Registered remote tool: '{tool.name}'")
            count += 1
        return count
