"""
Flat record -> delivery job payload. Only the payload shape lives here;
sending it is the dispatch client's job.
"""
from __future__ import annotations

from datetime import date
from typing import Any, Dict, Mapping, Optional

from orderbridge.core.utils import HOME_COUNTRY_CODE, format_date, normalize_phone

JOB_TYPE = "Delivery"
DEFAULT_TRACKING_NO = "T0"


def _field(record: Mapping[str, Any], name: str, default: str = "") -> str:
    value = record.get(name)
    if value is None:
        return default
    text = str(value).strip()
    return text if text else default


def _to_int(text: str, default: int) -> int:
    try:
        return int(float(text))
    except (TypeError, ValueError):
        return default


def dispatch_phone(raw: Any) -> str:
    """Like normalize_phone, but a bare leading country code is dropped too."""
    phone = normalize_phone(raw)
    bare_code = HOME_COUNTRY_CODE.lstrip("+")
    return phone[len(bare_code):] if phone.startswith(bare_code) else phone


def delivery_date(record: Mapping[str, Any], today: Optional[date] = None) -> str:
    raw = _field(record, "deliveryDate")
    if not raw:
        return (today or date.today()).strftime("%d/%m/%Y")

    if len(raw.split("/")) == 3:
        return raw

    return format_date(raw, "%d/%m/%Y", "%Y-%m-%d") or raw


def to_delivery_job(record: Mapping[str, Any], order_name: str = "", today: Optional[date] = None) -> Dict[str, Any]:
    return {
        "type": JOB_TYPE,
        "do_number": _field(record, "deliveryOrderNo", order_name).replace("#", ""),
        "date": delivery_date(record, today),
        "tracking_number": _field(record, "trackingNo", DEFAULT_TRACKING_NO),
        "order_number": _field(record, "senderNumberOnApp"),
        "invoice_number": _field(record, "senderNameOnApp"),
        "address": _field(record, "address"),
        "deliver_to_collect_from": _field(record, "firstName"),
        "last_name": _field(record, "lastName"),
        "phone_number": dispatch_phone(_field(record, "recipientPhoneNo")),
        "notify_email": _field(record, "emailsForNotifications"),
        "instructions": _field(record, "instructions"),
        "postal_code": _field(record, "postalCode"),
        "group_name": _field(record, "group"),
        "job_release_time": _field(record, "jobReleaseTime"),
        "time_window": _field(record, "deliveryCompletionTimeWindow"),
        "number_of_shipping_labels": _to_int(_field(record, "noOfShippingLabels", "1"), 1),
        "items": [
            {
                "sku": _field(record, "sku"),
                "description": _field(record, "description"),
                "quantity": _to_int(_field(record, "qty", "1"), 1),
            }
        ],
    }


def to_delivery_payload(record: Mapping[str, Any], order_name: str = "", today: Optional[date] = None) -> Dict[str, Any]:
    return {"data": [to_delivery_job(record, order_name, today)]}
