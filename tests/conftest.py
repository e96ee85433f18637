import copy

import pytest

from orderbridge.core.defaults import DEFAULT_EXTRACT_MAPPINGS

SAMPLE_ORDER = {
    "id": 123456789,
    "name": "#WF1001",
    "email": "customer@example.com",
    "created_at": "2024-01-15T10:30:00Z",
    "financial_status": "paid",
    "currency": "SGD",
    "tags": "delivery:2024-01-20, processing:18/01/2024, 14:00-18:00, priority:high",
    "note": "Please deliver to reception",
    "customer": {
        "id": 1,
        "first_name": "John",
        "last_name": "Doe",
        "email": "customer@example.com",
        "phone": "+6598765432",
    },
    "shipping_address": {
        "first_name": "John",
        "last_name": "Doe",
        "company": "ABC Company",
        "address1": "123 Main Street",
        "address2": "Unit 456",
        "city": "Singapore",
        "province": "",
        "country": "Singapore",
        "zip": "123456",
        "phone": "+65 9876 5432",
    },
    "billing_address": {
        "first_name": "John",
        "last_name": "Doe",
        "company": "ABC Company",
        "address1": "123 Main Street",
        "address2": "Unit 456",
        "city": "Singapore",
        "province": "",
        "country": "Singapore",
        "zip": "123456",
        "phone": "+6591234567",
    },
    "line_items": [
        {
            "id": 1,
            "sku": "PROD-001",
            "title": "Premium T-Shirt",
            "variant_title": "Large / Blue",
            "quantity": 2,
            "price": "50.00",
            "variant_id": 1,
            "product_id": 1,
        },
        {
            "id": 2,
            "sku": "PROD-002",
            "title": "Designer Jeans",
            "variant_title": None,
            "quantity": 1,
            "price": "50.00",
            "variant_id": 2,
            "product_id": 2,
        },
    ],
}

SAMPLE_GLOBAL_MAPPINGS = [
    {"dashboardField": "firstName", "shopifyFields": ["shipping_address.first_name"], "separator": "", "noMapping": False},
    {"dashboardField": "lastName", "shopifyFields": ["shipping_address.last_name"], "separator": "", "noMapping": False},
    {"dashboardField": "companyName", "shopifyFields": ["shipping_address.company"], "separator": "", "noMapping": False},
    {"dashboardField": "postalCode", "shopifyFields": ["shipping_address.zip"], "separator": "", "noMapping": False},
    {"dashboardField": "trackingNo", "shopifyFields": [], "separator": "", "noMapping": True},
]


@pytest.fixture
def order():
    return copy.deepcopy(SAMPLE_ORDER)


@pytest.fixture
def global_mappings():
    return copy.deepcopy(SAMPLE_GLOBAL_MAPPINGS)


@pytest.fixture
def extract_mappings():
    return copy.deepcopy(DEFAULT_EXTRACT_MAPPINGS)
