"""
Inbound order webhooks: signature verification and order-reference
extraction. Fetching the full order and persisting results stay with the
caller (see ``orderbridge.sync``).
"""
from __future__ import annotations

import base64
import hashlib
import hmac
import json
import logging
from typing import Any, Dict, Mapping, Optional, Union

from orderbridge.rest.models import WebhookOrderRef

logger = logging.getLogger(__name__)

HEADER_SHOP_DOMAIN = "x-shopify-shop-domain"
HEADER_TOPIC = "x-shopify-topic"
HEADER_HMAC = "x-shopify-hmac-sha256"

ORDER_TOPICS = (
    "orders/create",
    "orders/updated",
    "orders/fulfilled",
    "orders/cancelled",
    "fulfillments/create",
    "fulfillments/update",
)


class WebhookError(ValueError):
    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message)
        self.status_code = status_code


def compute_signature(body: bytes, secret: str) -> str:
    digest = hmac.new(secret.encode("utf-8"), body, hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


def verify_signature(body: bytes, signature: Optional[str], secret: Optional[str]) -> bool:
    if not signature or not secret:
        return False
    return hmac.compare_digest(compute_signature(body, secret), signature.strip())


def _lower_headers(headers: Mapping[str, str]) -> Dict[str, str]:
    return {k.lower(): v for k, v in headers.items()}


def extract_order_ref(data: Dict[str, Any]) -> WebhookOrderRef:
    """
    Order webhooks arrive in three shapes: ``{"order": {...}}``,
    ``{"fulfillment": {...}}`` and the bare order object.
    """
    if isinstance(data.get("order"), dict):
        order = data["order"]
        order_id, order_name = order.get("id"), order.get("name")
    elif isinstance(data.get("fulfillment"), dict):
        ful = data["fulfillment"]
        order_id = ful.get("order_id")
        order_name = ful.get("order_name") or (f"Order {order_id}" if order_id is not None else None)
    elif data.get("id") is not None:
        order_id, order_name = data.get("id"), data.get("name")
    else:
        raise WebhookError("No order information in webhook")

    if order_id is None or str(order_id).strip() == "":
        raise WebhookError("No order ID in webhook")

    return WebhookOrderRef(order_id=str(order_id), order_name=order_name, payload=data)


def receive_webhook(
    body: Union[bytes, str],
    headers: Mapping[str, str],
    secret: Optional[str] = None,
) -> WebhookOrderRef:
    """
    Validate headers, verify the HMAC signature when a secret is configured,
    and return the referenced order. Raises WebhookError carrying the HTTP
    status the receiver should answer with.
    """
    raw = body.encode("utf-8") if isinstance(body, str) else body
    h = _lower_headers(headers)

    shop_domain, topic, signature = h.get(HEADER_SHOP_DOMAIN), h.get(HEADER_TOPIC), h.get(HEADER_HMAC)
    if not shop_domain or not topic or not signature:
        raise WebhookError("Missing required headers", 400)

    if secret and not verify_signature(raw, signature, secret):
        logger.error("Invalid webhook signature from %s (topic %s)", shop_domain, topic)
        raise WebhookError("Invalid webhook signature", 401)

    if topic not in ORDER_TOPICS:
        logger.info("Unexpected webhook topic %s from %s; processing it as an order event", topic, shop_domain)

    try:
        data = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise WebhookError(f"Invalid JSON: {e}", 400) from e

    if not isinstance(data, dict):
        raise WebhookError("Invalid JSON: expected an object", 400)

    ref = extract_order_ref(data)
    ref.topic = topic
    ref.shop_domain = shop_domain
    return ref
