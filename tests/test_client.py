import httpx
import pytest

from orderbridge.rest.client import ShopifyOrdersClient
from orderbridge.rest.exceptions import (
    ShopifyClientError,
    ShopifyHTTPError,
    ShopifyRateLimitError,
    ShopifyValidationError,
)

SHOP = "demo.myshopify.com"
BASE = "/admin/api/2024-01"


def _client(handler):
    return ShopifyOrdersClient(SHOP, "shpat_test", transport=httpx.MockTransport(handler))


def test_fetch_orders_sends_token_and_params():
    seen = {}

    def handler(request):
        seen["token"] = request.headers["X-Shopify-Access-Token"]
        seen["params"] = dict(request.url.params)
        seen["path"] = request.url.path
        return httpx.Response(200, json={"orders": [{"id": 1, "name": "#1001"}, "junk"]})

    with _client(handler) as client:
        orders = client.fetch_orders(limit=50)

    assert orders == [{"id": 1, "name": "#1001"}]
    assert seen["token"] == "shpat_test"
    assert seen["params"] == {"status": "any", "limit": "50"}
    assert seen["path"] == f"{BASE}/orders.json"


def test_fetch_order_and_missing_order():
    def handler(request):
        if request.url.path == f"{BASE}/orders/7.json":
            return httpx.Response(200, json={"order": {"id": 7, "name": "#1007"}})
        return httpx.Response(404, json={"errors": "Not Found"})

    client = _client(handler)
    assert client.fetch_order(7) == {"id": 7, "name": "#1007"}
    assert client.fetch_order(8) is None
    client.close()


def test_rate_limit():
    client = _client(lambda request: httpx.Response(429))
    with pytest.raises(ShopifyRateLimitError):
        client.fetch_orders()


def test_unexpected_status():
    client = _client(lambda request: httpx.Response(500))
    with pytest.raises(ShopifyHTTPError) as exc_info:
        client.fetch_order(7)
    assert exc_info.value.status_code == 500


def test_malformed_payloads():
    client = _client(lambda request: httpx.Response(200, content=b"not json"))
    with pytest.raises(ShopifyValidationError):
        client.fetch_orders()

    client = _client(lambda request: httpx.Response(200, json={"orders": {}}))
    with pytest.raises(ShopifyValidationError):
        client.fetch_orders()


def test_transport_failure_is_wrapped():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = _client(handler)
    with pytest.raises(ShopifyClientError):
        client.fetch_orders()


def test_credentials_are_required():
    with pytest.raises(ValueError):
        ShopifyOrdersClient("", "token")
