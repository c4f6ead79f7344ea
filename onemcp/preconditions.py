"""
Precondition checks run before every remote tool call.

The proxy only depends on the PreconditionGate call shape; ServiceEnablementGate
is the implementation used by the server.
"""

import logging
from typing import Awaitable, Optional, Protocol, Set, Tuple
from urllib.parse import quote, urlparse

from .api_client import ApiClient
from .config import Config
from .errors import PreconditionError, TransportError

logger = logging.getLogger(__name__)

GOOGLE_API_DOMAIN = "googleapis.com"


class PreconditionGate(Protocol):
    """Callable that raises when a call must not proceed."""

    def __call__(
        self,
        project_id: Optional[str],
        origin_url: str,
        feature: str,
        requires_project: bool,
    ) -> Awaitable[None]: ...


class ServiceEnablementGate:
    """
    Checks that a project is present when required and that the backing API
    is enabled on it.
    """

    def __init__(self, api_client: ApiClient, serviceusage_url: Optional[str] = None):
        self.api_client = api_client
        self.serviceusage_url = (serviceusage_url or Config.SERVICEUSAGE_URL).rstrip("/")
        self._enabled: Set[Tuple[str, str]] = set()

    async def __call__(
        self,
        project_id: Optional[str],
        origin_url: str,
        feature: str,
        requires_project: bool,
    ) -> None:
        if requires_project and not project_id:
            raise PreconditionError(
                f"The '{feature}' tools require an active project. "
                "Set ONEMCP_PROJECT or GOOGLE_CLOUD_PROJECT and try again.",
                feature=feature,
            )

        if not project_id:
            return

        service = urlparse(origin_url).hostname or ""
        if not service.endswith(GOOGLE_API_DOMAIN):
            logger.debug(f"Skipping enablement check for non-Google origin {origin_url}")
            return

        if (project_id, service) in self._enabled:
            return

        await self._check_enabled(project_id, service, feature)
        self._enabled.add((project_id, service))

    async def _check_enabled(self, project_id: str, service: str, feature: str) -> None:
        url = (
            f"{self.serviceusage_url}/v1/projects/{quote(project_id, safe='')}"
            f"/services/{service}"
        )
        try:
            response = await self.api_client.request("GET", url)
        except TransportError as e:
            raise PreconditionError(
                f"Unable to check whether {service} is enabled on project {project_id}: {e}",
                feature=feature,
                project_id=project_id,
            ) from e

        state = response.body.get("state") if isinstance(response.body, dict) else None
        if state != "ENABLED":
            raise PreconditionError(
                f"API {service} is not enabled on project {project_id}. Enable it at "
                f"https://console.cloud.google.com/apis/library/{service}?project={project_id}",
                feature=feature,
                project_id=project_id,
            )

        logger.info(f"Verified {service} is enabled on project {project_id}")
