"""
Error types raised by the onemcp proxy.

TransportError is the only error kind the proxy inspects: when its decoded
body embeds a tool-level error result, the call resolves with that result
instead of raising.
"""

from typing import Any, Dict, List, Optional


class OneMcpError(Exception):
    """Base class for onemcp errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class TransportError(OneMcpError):
    """Exception raised when a remote request fails or returns a non-success status."""

    def __init__(self, message: str, status: Optional[int] = None, body: Any = None):
        """
        Initialize TransportError.

        Args:
            message: Error message
            status: HTTP status code, None for network failures
            body: Decoded response body, if one was received
        """
        super().__init__(message)
        self.status = status
        self.body = body

    @property
    def context(self) -> Dict[str, Any]:
        return {"body": self.body}

    def __str__(self) -> str:
        if self.status is not None:
            return f"{self.message} (HTTP {self.status})"
        return self.message


class RemoteFetchError(OneMcpError):
    """Exception raised when remote tool discovery fails."""

    def __init__(self, message: str, feature: str = "", origin_url: str = ""):
        super().__init__(message)
        self.feature = feature
        self.origin_url = origin_url


class SchemaValidationError(OneMcpError):
    """Exception raised when a remote response does not have the expected shape."""

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.errors = errors or []

    def __str__(self) -> str:
        if self.errors:
            details = "; ".join(
                f"{'.'.join(str(p) for p in e.get('loc', ()))}: {e.get('msg', '')}"
                for e in self.errors
            )
            return f"{self.message} ({details})"
        return self.message


class PreconditionError(OneMcpError):
    """Exception raised when a call is not allowed to reach the remote service."""

    def __init__(
        self,
        message: str,
        feature: Optional[str] = None,
        project_id: Optional[str] = None,
    ):
        super().__init__(message)
        self.feature = feature
        self.project_id = project_id
