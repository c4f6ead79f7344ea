"""
Tests for ApiClient, the httpx transport used by every proxy.
"""

import json

import httpx
import pytest
import respx

from onemcp.api_client import ApiClient
from onemcp.errors import TransportError

URL = "https://example.com/mcp"


class TestApiClient:
    """Test request/response handling."""

    @respx.mock
    @pytest.mark.asyncio
    async def test_post_json_and_decode_response(self):
        route = respx.post(URL).mock(
            return_value=httpx.Response(200, json={"result": {"tools": []}})
        )

        async with ApiClient(access_token="test-token") as client:
            response = await client.request("POST", URL, body={"jsonrpc": "2.0", "id": 1})

        assert response.status == 200
        assert response.body == {"result": {"tools": []}}
        request = route.calls.last.request
        assert request.headers["Authorization"] == "Bearer test-token"
        assert request.headers["Content-Type"] == "application/json"
        assert json.loads(request.content) == {"jsonrpc": "2.0", "id": 1}

    @respx.mock
    @pytest.mark.asyncio
    async def test_extra_headers_are_sent(self):
        route = respx.post(URL).mock(return_value=httpx.Response(200, json={}))

        async with ApiClient() as client:
            await client.request(
                "POST", URL, body={}, headers={"x-goog-user-project": "my-project"}
            )

        request = route.calls.last.request
        assert request.headers["x-goog-user-project"] == "my-project"
        assert "Authorization" not in request.headers

    @respx.mock
    @pytest.mark.asyncio
    async def test_error_status_raises_transport_error_with_body(self):
        error_body = {"result": {"isError": True, "content": [{"type": "text", "text": "bad"}]}}
        respx.post(URL).mock(return_value=httpx.Response(400, json=error_body))

        async with ApiClient() as client:
            with pytest.raises(TransportError) as exc_info:
                await client.request("POST", URL, body={})

        assert exc_info.value.status == 400
        assert exc_info.value.body == error_body
        assert exc_info.value.context == {"body": error_body}
        assert "HTTP 400" in str(exc_info.value)

    @respx.mock
    @pytest.mark.asyncio
    async def test_error_status_with_text_body(self):
        respx.get(URL).mock(return_value=httpx.Response(502, text="Bad Gateway"))

        async with ApiClient() as client:
            with pytest.raises(TransportError) as exc_info:
                await client.request("GET", URL)

        assert exc_info.value.status == 502
        assert exc_info.value.body == "Bad Gateway"

    @respx.mock
    @pytest.mark.asyncio
    async def test_network_error_raises_transport_error(self):
        respx.post(URL).mock(side_effect=httpx.ConnectError("connection refused"))

        async with ApiClient() as client:
            with pytest.raises(TransportError, match="Failed to make request") as exc_info:
                await client.request("POST", URL, body={})

        assert exc_info.value.status is None
        assert exc_info.value.body is None
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @respx.mock
    @pytest.mark.asyncio
    async def test_non_json_success_body_raises(self):
        respx.post(URL).mock(return_value=httpx.Response(200, text="<html></html>"))

        async with ApiClient() as client:
            with pytest.raises(TransportError, match="Unable to parse JSON"):
                await client.request("POST", URL, body={})

    @respx.mock
    @pytest.mark.asyncio
    async def test_empty_success_body_decodes_to_none(self):
        respx.get(URL).mock(return_value=httpx.Response(204))

        async with ApiClient() as client:
            response = await client.request("GET", URL)

        assert response.status == 204
        assert response.body is None

    def test_has_credentials(self):
        assert ApiClient(access_token="abc").has_credentials is True
        assert ApiClient().has_credentials is False
