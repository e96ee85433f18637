import json

import pytest

from orderbridge.webhook import (
    WebhookError,
    compute_signature,
    extract_order_ref,
    receive_webhook,
    verify_signature,
)

SECRET = "whsec_test"
BODY = json.dumps({"id": 820982911946154500, "name": "#9999", "tags": "14:00-18:00"}).encode("utf-8")


def _headers(body=BODY, secret=SECRET, topic="orders/create"):
    return {
        "X-Shopify-Shop-Domain": "demo.myshopify.com",
        "X-Shopify-Topic": topic,
        "X-Shopify-Hmac-Sha256": compute_signature(body, secret),
    }


def test_signature_round_trip():
    signature = compute_signature(BODY, SECRET)
    assert verify_signature(BODY, signature, SECRET)
    assert not verify_signature(BODY, signature, "other")
    assert not verify_signature(BODY, None, SECRET)


def test_receive_bare_order_webhook():
    ref = receive_webhook(BODY, _headers(), SECRET)

    assert ref.order_id == "820982911946154500"
    assert ref.order_name == "#9999"
    assert ref.topic == "orders/create"
    assert ref.shop_domain == "demo.myshopify.com"


def test_missing_headers():
    headers = _headers()
    del headers["X-Shopify-Topic"]
    with pytest.raises(WebhookError) as exc_info:
        receive_webhook(BODY, headers, SECRET)
    assert exc_info.value.status_code == 400


def test_bad_signature():
    with pytest.raises(WebhookError) as exc_info:
        receive_webhook(BODY, _headers(secret="wrong"), SECRET)
    assert exc_info.value.status_code == 401


def test_signature_not_checked_without_secret():
    headers = _headers()
    headers["X-Shopify-Hmac-Sha256"] = "anything"
    assert receive_webhook(BODY, headers).order_id == "820982911946154500"


def test_invalid_json():
    body = b"{not json"
    with pytest.raises(WebhookError) as exc_info:
        receive_webhook(body, _headers(body), SECRET)
    assert exc_info.value.status_code == 400


def test_order_ref_shapes():
    assert extract_order_ref({"order": {"id": 5, "name": "#1005"}}).order_id == "5"

    ful = extract_order_ref({"fulfillment": {"order_id": 5}})
    assert ful.order_id == "5"
    assert ful.order_name == "Order 5"

    assert extract_order_ref({"fulfillment": {"order_id": 5, "order_name": "#1005"}}).order_name == "#1005"

    with pytest.raises(WebhookError):
        extract_order_ref({"note": "nothing here"})
    with pytest.raises(WebhookError):
        extract_order_ref({"fulfillment": {}})
