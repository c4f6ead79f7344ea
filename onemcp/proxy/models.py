"""
Response shapes accepted from remote tool origins.

Tool input schemas and content items are kept as plain dictionaries; only the
top-level envelope structure is checked.
"""

from typing import Any, Dict, List, Literal, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError

from ..errors import SchemaValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


class _RemoteModel(BaseModel):
    model_config = ConfigDict(extra="allow")


class RemoteToolDescriptor(_RemoteModel):
    """A tool as reported by tools/list."""

    name: str
    description: Optional[str] = None
    inputSchema: Dict[str, Any]


class ListToolsResult(_RemoteModel):
    tools: List[RemoteToolDescriptor]


class ListToolsResponse(_RemoteModel):
    result: ListToolsResult


class CallToolResult(_RemoteModel):
    """The result of tools/call."""

    content: List[Dict[str, Any]]
    isError: Optional[bool] = None


class CallToolResponse(_RemoteModel):
    result: CallToolResult


class ToolErrorResult(_RemoteModel):
    content: List[Dict[str, Any]]
    isError: Literal[True]


class EmbeddedToolError(_RemoteModel):
    """An error response body that carries a tool-level error result."""

    result: ToolErrorResult


def validate_model(model: Type[ModelT], data: Any, what: str) -> ModelT:
    """
    Validate data against a response model.

    Args:
        model: The pydantic model to validate with
        data: Decoded response body
        what: Short description of the response, used in the error message

    Returns:
        The validated model instance

    Raises:
        SchemaValidationError: If the data does not match the model
    """
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise SchemaValidationError(
            f"Invalid {what} response", errors=e.errors(include_url=False)
        ) from e
