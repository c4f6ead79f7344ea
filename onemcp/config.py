"""
Configuration management for the onemcp proxy.

Settings are read from the environment once at import time. Feature
definitions are validated dataclasses that the server registry is built from.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import List, Optional, Tuple
from urllib.parse import urlparse

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccessPolicy:
    """Access preconditions attached to a feature."""

    requires_auth: bool = False
    requires_project: bool = False


@dataclass(frozen=True)
class FeatureConfig:
    """Configuration for a single proxied feature."""

    feature: str
    origin_url: str
    policy: AccessPolicy = field(default_factory=AccessPolicy)

    def __post_init__(self):
        """Validate feature configuration after initialization."""
        if not self.feature:
            raise ValueError("Feature name cannot be empty")

        parsed = urlparse(self.origin_url or "")
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(
                f"Origin for feature '{self.feature}' must be an absolute http(s) URL: {self.origin_url!r}"
            )

        # frozen dataclass, so go through object.__setattr__
        object.__setattr__(self, "origin_url", self.origin_url.rstrip("/"))


class Config:
    """Environment configuration for onemcp."""

    # Remote origins
    FIRESTORE_URL: str = os.getenv("FIRESTORE_URL", "https://firestore.googleapis.com")
    DEVELOPERKNOWLEDGE_URL: str = os.getenv(
        "DEVELOPERKNOWLEDGE_URL", "https://developerknowledge.googleapis.com"
    )
    SERVICEUSAGE_URL: str = os.getenv(
        "SERVICEUSAGE_URL", "https://serviceusage.googleapis.com"
    )

    # JSON-RPC endpoint path on every origin
    MCP_PATH: str = os.getenv("ONEMCP_MCP_PATH", "/mcp")

    # HTTP client configuration
    HTTP_TIMEOUT: float = float(os.getenv("ONEMCP_HTTP_TIMEOUT", "30.0"))

    # Credentials and project
    ACCESS_TOKEN: Optional[str] = os.getenv("ONEMCP_ACCESS_TOKEN")
    PROJECT_ID: Optional[str] = os.getenv("ONEMCP_PROJECT") or os.getenv(
        "GOOGLE_CLOUD_PROJECT"
    )

    # Comma-separated allow-list; empty means every built-in feature
    FEATURES: str = os.getenv("ONEMCP_FEATURES", "")

    # Local server
    HOST: str = os.getenv("ONEMCP_HOST", "127.0.0.1")
    PORT: int = int(os.getenv("ONEMCP_PORT", "8001"))

    @classmethod
    def get_http_timeout(cls) -> float:
        """Get the HTTP timeout in seconds."""
        return cls.HTTP_TIMEOUT

    @classmethod
    def get_project_id(cls) -> Optional[str]:
        """Get the active project, if one is configured."""
        return cls.PROJECT_ID

    @classmethod
    def get_access_token(cls) -> Optional[str]:
        return cls.ACCESS_TOKEN

    @classmethod
    def get_enabled_feature_names(cls) -> List[str]:
        """Get the feature allow-list, or an empty list when unrestricted."""
        return [name.strip() for name in cls.FEATURES.split(",") if name.strip()]


def default_features() -> Tuple[FeatureConfig, ...]:
    """Get the built-in feature set."""
    return (
        FeatureConfig(
            feature="developerknowledge",
            origin_url=Config.DEVELOPERKNOWLEDGE_URL,
            policy=AccessPolicy(requires_auth=True),
        ),
        FeatureConfig(
            feature="firestore",
            origin_url=Config.FIRESTORE_URL,
            policy=AccessPolicy(requires_auth=True, requires_project=True),
        ),
    )


def load_features(enabled: Optional[List[str]] = None) -> Tuple[FeatureConfig, ...]:
    """
    Resolve the features to serve.

    Args:
        enabled: Feature names to keep. If None, uses the ONEMCP_FEATURES setting.

    Returns:
        The selected feature configurations, in built-in order

    Raises:
        ValueError: If an unknown feature is requested
    """
    features = default_features()
    if enabled is None:
        enabled = Config.get_enabled_feature_names()
    if not enabled:
        return features

    known = {f.feature for f in features}
    unknown = [name for name in enabled if name not in known]
    if unknown:
        raise ValueError(
            f"Unknown feature(s): {', '.join(unknown)}. Available: {', '.join(sorted(known))}"
        )

    selected = tuple(f for f in features if f.feature in enabled)
    logger.info(f"Serving features: {[f.feature for f in selected]}")
    return selected
