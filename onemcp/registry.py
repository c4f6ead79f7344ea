"""
Server registry: one RemoteToolProxy per feature, built once at startup.
"""

import asyncio
import logging
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Union

from .api_client import ApiClient
from .config import FeatureConfig
from .preconditions import PreconditionGate
from .proxy import ProxiedTool, RemoteToolProxy

logger = logging.getLogger(__name__)


class ServerRegistry(Mapping[str, RemoteToolProxy]):
    """Read-only mapping from feature to its proxy."""

    def __init__(self, proxies: Mapping[str, RemoteToolProxy]):
        self._proxies = MappingProxyType(dict(proxies))

    def __getitem__(self, feature: str) -> RemoteToolProxy:
        return self._proxies[feature]

    def __iter__(self) -> Iterator[str]:
        return iter(self._proxies)

    def __len__(self) -> int:
        return len(self._proxies)

    @property
    def features(self) -> List[str]:
        return list(self._proxies)

    async def list_all_tools(
        self, return_exceptions: bool = False
    ) -> Dict[str, Union[List[ProxiedTool], Exception]]:
        """
        Discover the tools of every feature concurrently.

        Args:
            return_exceptions: Report a failed feature's error in its slot
                instead of raising it

        Returns:
            Wrappers (or the discovery error) keyed by feature

        Raises:
            RemoteFetchError: If any feature's discovery fails
            SchemaValidationError: If any feature returns a malformed listing
        """
        features = self.features
        results = await asyncio.gather(
            *(self._proxies[feature].list_tools() for feature in features),
            return_exceptions=return_exceptions,
        )
        return dict(zip(features, results))

    def __repr__(self) -> str:
        return f"ServerRegistry(features={self.features})"


def build_server_registry(
    features: Iterable[FeatureConfig],
    api_client: ApiClient,
    gate: PreconditionGate,
    mcp_path: Optional[str] = None,
) -> ServerRegistry:
    """
    Build the registry from feature configurations.

    Raises:
        ValueError: If a feature is configured twice
    """
    proxies: Dict[str, RemoteToolProxy] = {}
    for feature_config in features:
        if feature_config.feature in proxies:
            raise ValueError(f"Feature '{feature_config.feature}' already registered")

        proxies[feature_config.feature] = RemoteToolProxy(
            feature=feature_config.feature,
            origin_url=feature_config.origin_url,
            policy=feature_config.policy,
            api_client=api_client,
            gate=gate,
            mcp_path=mcp_path,
        )
        logger.debug(f"Registered proxy: {feature_config.feature} -> {feature_config.origin_url}")

    return ServerRegistry(proxies)
