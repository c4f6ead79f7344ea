from onemcp.api_client import ApiResponse

ORIGIN_URL = "https://example.com"
ENDPOINT_URL = f"{ORIGIN_URL}/mcp"


def listing_response(*tools):
    """Build a successful tools/list response."""
    return ApiResponse(status=200, body={"result": {"tools": list(tools)}})


def call_response(result):
    """Build a successful tools/call response."""
    return ApiResponse(status=200, body={"jsonrpc": "2.0", "id": 2, "result": result})
