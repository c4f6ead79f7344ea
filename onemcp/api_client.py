import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import httpx

from .config import Config
from .errors import TransportError

logger = logging.getLogger(__name__)


@dataclass
class ApiResponse:
    """A decoded, successful response."""

    status: int
    body: Any
    headers: Dict[str, str] = field(default_factory=dict)


class ApiClient:
    """
    An asynchronous HTTP client for talking to remote tool origins.

    Every request carries the configured bearer token. Failures are raised as
    TransportError with the HTTP status and decoded body attached.
    """

    def __init__(
        self,
        access_token: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initializes the asynchronous HTTP client.

        Args:
            access_token: Bearer token injected into every request
            timeout: Request timeout in seconds. Defaults to ONEMCP_HTTP_TIMEOUT.
            client: An existing httpx client to use instead of creating one
        """
        self.access_token = access_token
        self.timeout = timeout if timeout is not None else Config.get_http_timeout()
        self.client = client or httpx.AsyncClient(timeout=httpx.Timeout(self.timeout))

    @property
    def has_credentials(self) -> bool:
        return bool(self.access_token)

    def _build_headers(self, headers: Optional[Dict[str, str]]) -> Dict[str, str]:
        merged = {"Accept": "application/json"}
        if self.access_token:
            merged["Authorization"] = f"Bearer {self.access_token}"
        if headers:
            merged.update(headers)
        return merged

    async def request(
        self,
        method: str,
        url: str,
        body: Any = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> ApiResponse:
        """
        Sends a request and decodes the JSON response.

        Args:
            method: HTTP method
            url: Absolute URL
            body: JSON-serializable request body, or None for no body
            headers: Extra request headers

        Returns:
            The decoded response

        Raises:
            TransportError: On network failure, non-2xx status, or a non-JSON body
        """
        request_headers = self._build_headers(headers)
        logger.debug(f"ApiClient: {method} {url}")

        try:
            if body is None:
                response = await self.client.request(
                    method, url, headers=request_headers
                )
            else:
                response = await self.client.request(
                    method, url, json=body, headers=request_headers
                )
        except httpx.RequestError as e:
            logger.error(f"Request to {url} failed: {type(e).__name__}: {e}")
            raise TransportError(f"Failed to make request to {url}: {e}") from e

        if response.is_error:
            error_body = _decode_body(response)
            logger.error(
                f"Request to {url} returned HTTP {response.status_code}"
            )
            raise TransportError(
                f"Request to {url} failed", status=response.status_code, body=error_body
            )

        try:
            decoded = response.json() if response.content else None
        except ValueError as e:
            raise TransportError(
                f"Unable to parse JSON response from {url}",
                status=response.status_code,
                body=response.text,
            ) from e

        return ApiResponse(
            status=response.status_code,
            body=decoded,
            headers=dict(response.headers),
        )

    async def close(self):
        """
        Closes the HTTP client session.
        """
        await self.client.aclose()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()


def _decode_body(response: httpx.Response) -> Any:
    """Decode an error body as JSON, falling back to text."""
    try:
        return response.json()
    except ValueError:
        return response.text
