from typing import Any, Dict, List, Optional
import logging

import httpx

from .exceptions import ShopifyClientError, ShopifyHTTPError, ShopifyRateLimitError, ShopifyValidationError

logger = logging.getLogger(__name__)

DEFAULT_API_VERSION = "2024-01"


class ShopifyOrdersClient:
    """
    Client for the storefront Admin REST API, limited to reading orders.
    Orders are returned as raw dicts so any dotted source path an operator
    maps stays resolvable.

    Example:
        >>> from orderbridge.rest.client import ShopifyOrdersClient
        >>> with ShopifyOrdersClient("demo.myshopify.com", "shpat_...") as client:
        ...     orders = client.fetch_orders(limit=50)
    """

    def __init__(
        self,
        shop_domain: str,
        access_token: str,
        api_version: str = DEFAULT_API_VERSION,
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        if not shop_domain or not access_token:
            raise ValueError("shop_domain and access_token are required.")

        self.shop_domain = shop_domain.strip().rstrip("/")
        self.api_version = api_version or DEFAULT_API_VERSION
        self.base_url = f"https://{self.shop_domain}/admin/api/{self.api_version}"
        self.timeout = timeout
        self._client = httpx.Client(
            timeout=timeout,
            transport=transport,
            headers={
                "X-Shopify-Access-Token": access_token,
                "Content-Type": "application/json",
                "Accept": "application/json",
            },
        )

    def fetch_orders(self, *, status: str = "any", limit: int = 200) -> List[Dict[str, Any]]:
        data = self._get("/orders.json", params={"status": status, "limit": limit})
        orders = data.get("orders")
        if not isinstance(orders, list):
            raise ShopifyValidationError("Invalid response format: 'orders' must be a list.")

        logger.info("Received %d orders from %s", len(orders), self.shop_domain)
        return [o for o in orders if isinstance(o, dict)]

    def fetch_order(self, order_id: Any) -> Optional[Dict[str, Any]]:
        """Full order payload, or None when the order no longer exists."""
        try:
            data = self._get(f"/orders/{order_id}.json")
        except ShopifyHTTPError as e:
            if e.status_code == 404:
                logger.warning("Order %s not found on %s", order_id, self.shop_domain)
                return None
            raise

        order = data.get("order")
        if not isinstance(order, dict):
            raise ShopifyValidationError("Invalid response format: 'order' must be an object.")
        return order

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            response = self._client.get(url, params=params)
        except httpx.RequestError as e:
            raise ShopifyClientError(f"Request failed: {e}") from e

        if response.status_code == 429:
            raise ShopifyRateLimitError("Rate limit exceeded. Please retry later.")

        if not response.is_success:
            if response.status_code in (401, 403):
                logger.error("Access denied for %s: check access token permissions", self.shop_domain)
            raise ShopifyHTTPError(f"Unexpected status code: {response.status_code}", response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise ShopifyValidationError(f"Invalid response format: {e}") from e

        if not isinstance(data, dict):
            raise ShopifyValidationError("Invalid response format: expected a JSON object.")
        return data

    def close(self):
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
