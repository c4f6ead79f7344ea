"""
JSON-RPC request envelopes for the remote tool protocol.
"""

import threading
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class JsonRpcRequest:
    """JSON-RPC 2.0 request."""

    method: str
    id: int
    params: Dict[str, Any] = field(default_factory=dict)
    jsonrpc: str = "2.0"

    def to_dict(self) -> Dict[str, Any]:
        """Convert request to dictionary."""
        return {
            "jsonrpc": self.jsonrpc,
            "id": self.id,
            "method": self.method,
            "params": self.params,
        }


class RequestIdGenerator:
    """Monotonic request ids, starting at 0 and never reused."""

    def __init__(self):
        self._next = 0
        self._lock = threading.Lock()

    def next_id(self) -> int:
        """Get the next request ID."""
        with self._lock:
            value = self._next
            self._next += 1
            return value

    @property
    def last_id(self) -> Optional[int]:
        """The most recently issued id, or None before the first request."""
        return self._next - 1 if self._next else None
