"""
Remote tool proxy.

A RemoteToolProxy exposes the tools hosted at one remote origin as local
ProxiedTool wrappers. Discovery and invocation are JSON-RPC calls
(tools/list and tools/call) POSTed to the origin's MCP endpoint.
"""

import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from ..api_client import ApiClient
from ..config import AccessPolicy, Config
from ..errors import RemoteFetchError, TransportError
from ..preconditions import PreconditionGate
from .messages import JsonRpcRequest, RequestIdGenerator
from .models import (
    CallToolResponse,
    EmbeddedToolError,
    ListToolsResponse,
    validate_model,
)
from .tools import InvocationContext, ProxiedTool, ToolInvoker, ToolMetadata

logger = logging.getLogger(__name__)

USER_PROJECT_HEADER = "x-goog-user-project"


class RemoteToolProxy:
    """
    Proxies the tools of a single remote origin for one feature.

    Instances are built once by the server registry and are not mutated
    afterwards; the request id counter is the only state that changes.
    """

    def __init__(
        self,
        feature: str,
        origin_url: str,
        policy: AccessPolicy,
        api_client: ApiClient,
        gate: PreconditionGate,
        mcp_path: Optional[str] = None,
    ):
        """
        Initialize the proxy.

        Args:
            feature: Feature identifier, used as the tool name prefix
            origin_url: Remote origin hosting the tools
            policy: Access policy applied to every tool
            api_client: Transport used for all network I/O
            gate: Precondition check awaited before each tool call
            mcp_path: Path of the JSON-RPC endpoint on the origin
        """
        self._feature = feature
        self._origin_url = origin_url
        self._policy = policy
        self._api_client = api_client
        self._gate = gate
        self._mcp_path = Config.MCP_PATH if mcp_path is None else mcp_path
        self._ids = RequestIdGenerator()

    @property
    def feature(self) -> str:
        return self._feature

    @property
    def origin_url(self) -> str:
        return self._origin_url

    @property
    def policy(self) -> AccessPolicy:
        return self._policy

    @property
    def endpoint(self) -> str:
        """The URL requests are POSTed to."""
        return f"{self._origin_url}{self._mcp_path}"

    def _metadata(self) -> ToolMetadata:
        return ToolMetadata(
            requires_auth=self._policy.requires_auth,
            requires_project=self._policy.requires_project,
            feature=self._feature,
        )

    async def list_tools(self) -> List[ProxiedTool]:
        """
        Discover the remote tools and wrap them for local use.

        Every call fetches the tool list again; nothing is cached.

        Returns:
            One wrapper per remote tool, in remote order

        Raises:
            RemoteFetchError: If the discovery request fails
            SchemaValidationError: If the response is not a tools/list result
        """
        request = JsonRpcRequest(method="tools/list", id=self._ids.next_id())
        logger.debug(f"Discovering tools for {self._feature} from {self.endpoint}")

        try:
            response = await self._api_client.request(
                "POST", self.endpoint, body=request.to_dict()
            )
        except Exception as e:
            logger.error(f"Failed to fetch remote tools for {self._feature}: {e}")
            raise RemoteFetchError(
                f"Failed to fetch remote tools for {self._feature} from {self._origin_url}: {e}",
                feature=self._feature,
                origin_url=self._origin_url,
            ) from e

        listing = validate_model(ListToolsResponse, response.body, "tools/list")

        metadata = self._metadata()
        tools = [
            ProxiedTool(
                name=f"{self._feature}_{descriptor.name}",
                description=descriptor.description or "",
                input_schema=descriptor.inputSchema,
                metadata=metadata,
                remote_name=descriptor.name,
                invoker=self._make_invoker(descriptor.name),
            )
            for descriptor in listing.result.tools
        ]

        logger.info(f"Discovered {len(tools)} remote tools for {self._feature}")
        return tools

    def _make_invoker(self, remote_name: str) -> ToolInvoker:
        async def invoke(
            arguments: Dict[str, Any], context: InvocationContext
        ) -> Dict[str, Any]:
            return await self.call_tool(remote_name, arguments, context)

        return invoke

    async def call_tool(
        self,
        remote_name: str,
        arguments: Dict[str, Any],
        context: InvocationContext,
    ) -> Dict[str, Any]:
        """
        Call a remote tool.

        Args:
            remote_name: The tool's name on the remote origin (not namespaced)
            arguments: Tool arguments, forwarded as-is
            context: The caller's invocation context

        Returns:
            The tools/call result. A tool-level error result the origin sent
            with an error status is returned, not raised.

        Raises:
            PreconditionError: If the precondition gate rejects the call
            SchemaValidationError: If a successful response is not a tools/call result
            Exception: Any other transport failure, unchanged
        """
        await self._gate(
            context.project_id,
            self._origin_url,
            self._feature,
            self._policy.requires_project,
        )

        request = JsonRpcRequest(
            method="tools/call",
            id=self._ids.next_id(),
            params={"name": remote_name, "arguments": arguments},
        )

        headers: Dict[str, str] = {}
        if context.project_id:
            headers[USER_PROJECT_HEADER] = context.project_id

        logger.debug(f"Calling {self._feature}.{remote_name} (request {request.id})")

        try:
            response = await self._api_client.request(
                "POST", self.endpoint, body=request.to_dict(), headers=headers
            )
        except TransportError as e:
            embedded = _embedded_tool_error(e)
            if embedded is None:
                raise
            logger.debug(
                f"Remote tool {self._feature}.{remote_name} returned an error result"
            )
            return embedded

        validate_model(CallToolResponse, response.body, "tools/call")
        return response.body["result"]

    def __str__(self) -> str:
        return f"RemoteToolProxy({self._feature} -> {self._origin_url})"

    def __repr__(self) -> str:
        return (
            f"RemoteToolProxy(feature={self._feature}, origin={self._origin_url}, "
            f"policy={self._policy})"
        )


def _embedded_tool_error(error: TransportError) -> Optional[Dict[str, Any]]:
    """Return the tool error result carried in a transport error body, if any."""
    try:
        EmbeddedToolError.model_validate(error.body)
    except ValidationError:
        return None
    return error.body["result"]
