from __future__ import annotations
from typing import Any, Dict, List

from .models import ExtractProcessingMapping, coerce_extract_mappings

DASHBOARD_FIELD_LABELS: Dict[str, str] = {
    "deliveryOrderNo": "Delivery Order (D.O.) No.",
    "deliveryDate": "Delivery Date",
    "processingDate": "Processing Date",
    "jobReleaseTime": "Job Release Time",
    "deliveryCompletionTimeWindow": "Delivery Completion Time Window",
    "trackingNo": "Tracking No.",
    "senderNumberOnApp": "Sender's number to appear on app",
    "deliverySequence": "Delivery Sequence",
    "address": "Address",
    "companyName": "Company Name",
    "postalCode": "Postal Code",
    "firstName": "First Name",
    "lastName": "Last Name",
    "recipientPhoneNo": "Recipient's Phone No.",
    "senderPhoneNo": "Sender's Phone No.",
    "instructions": "Instructions",
    "assignTo": "Assign to",
    "emailsForNotifications": "Emails For Notifications",
    "zone": "Zone",
    "accountNo": "Account No.",
    "deliveryJobOwner": "Delivery Job Owner",
    "senderNameOnApp": "Sender's name to appear on app",
    "group": "Group",
    "noOfShippingLabels": "No. of Shipping Labels",
    "attachmentUrl": "Attachment (URL)",
    "status": "Status",
    "podAt": "POD at",
    "remarks": "Remarks",
    "itemCount": "Item count",
    "serviceTime": "Service Time",
    "sku": "SKU",
    "description": "Description",
    "qty": "Qty",
}

DASHBOARD_FIELDS: List[str] = list(DASHBOARD_FIELD_LABELS.keys())

# Seeded when an installation has no extract mappings configured yet.
DEFAULT_EXTRACT_MAPPINGS: List[Dict[str, Any]] = [
    {"dashboardField": "deliveryDate", "processingType": "date", "sourceField": "order.tags", "format": "delivery"},
    {"dashboardField": "processingDate", "processingType": "date", "sourceField": "order.tags", "format": "processing"},
    {"dashboardField": "jobReleaseTime", "processingType": "time", "sourceField": "order.tags", "format": "job_release_time"},
    {"dashboardField": "deliveryCompletionTimeWindow", "processingType": "time", "sourceField": "order.tags", "format": "completion_window"},
    {"dashboardField": "group", "processingType": "group", "sourceField": "order.name", "format": "first_two_letters"},
    {"dashboardField": "noOfShippingLabels", "processingType": "itemCount", "sourceField": "line_items", "format": "sum_quantities"},
    {"dashboardField": "itemCount", "processingType": "itemCount", "sourceField": "line_items", "format": "sum_quantities"},
    {"dashboardField": "senderNumberOnApp", "processingType": "phone", "sourceField": "billing_address.phone", "format": "normalize"},
    {"dashboardField": "senderPhoneNo", "processingType": "phone", "sourceField": "billing_address.phone", "format": "normalize"},
    {"dashboardField": "recipientPhoneNo", "processingType": "phone", "sourceField": "shipping_address.phone", "format": "normalize"},
]


def default_extract_mappings() -> List[ExtractProcessingMapping]:
    return coerce_extract_mappings(DEFAULT_EXTRACT_MAPPINGS)
