import pytest
from unittest.mock import AsyncMock, Mock

from tests.conftest_logging import configure_test_logging
from tests.helpers import ORIGIN_URL

from onemcp.api_client import ApiClient
from onemcp.config import AccessPolicy
from onemcp.proxy import RemoteToolProxy


@pytest.fixture
def mock_api_client():
    """Provides an ApiClient whose request method is an AsyncMock."""
    client = Mock(spec=ApiClient)
    client.request = AsyncMock()
    client.has_credentials = True
    return client


@pytest.fixture
def mock_gate():
    """Provides a precondition gate that always passes."""
    return AsyncMock(return_value=None)


@pytest.fixture
def proxy(mock_api_client, mock_gate):
    """A proxy for the 'auth' feature with a mocked transport."""
    return RemoteToolProxy(
        feature="auth",
        origin_url=ORIGIN_URL,
        policy=AccessPolicy(requires_auth=False, requires_project=True),
        api_client=mock_api_client,
        gate=mock_gate,
        mcp_path="/mcp",
    )


@pytest.fixture
def sample_tool():
    """A remote tool descriptor as returned by tools/list."""
    return {
        "name": "test_tool",
        "description": "A test tool",
        "inputSchema": {"type": "object", "properties": {}},
    }
