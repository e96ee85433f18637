import pytest

from orderbridge.core import ArrayMode, PathResolver
from orderbridge.core.path import to_str
from orderbridge.core.utils import clock_to_minutes, format_date, normalize_phone, pad_clock, to_float

DOC = {
    "name": "#1001",
    "shipping_address": {"city": "Singapore", "zip": None},
    "line_items": [{"sku": "A"}, {"sku": "B"}],
}


def test_dotted_lookup():
    assert PathResolver.get(DOC, "shipping_address.city") == "Singapore"
    assert PathResolver.get(DOC, "shipping_address.missing.deeper") is None
    assert PathResolver.get(DOC, "") is None


def test_root_alias():
    assert PathResolver.get(DOC, "order.name") == "#1001"
    assert PathResolver.get({"order": {"name": "inner"}}, "order.name") == "inner"


def test_list_indexing():
    assert PathResolver.get(DOC, "line_items.1.sku") == "B"
    assert PathResolver.get(DOC, "line_items[0].sku") == "A"
    assert PathResolver.get(DOC, "line_items[5].sku") is None


def test_array_modes():
    assert PathResolver.get(DOC, "line_items.sku") is None
    assert PathResolver.get(DOC, "line_items.sku", arrays=ArrayMode.FIRST) == "A"
    assert PathResolver.get(DOC, "line_items.sku", arrays=ArrayMode.COLLECT) == ["A", "B"]


def test_get_str_blanks_missing_values():
    assert PathResolver.get_str(DOC, "shipping_address.zip") == ""
    assert PathResolver.get_str(DOC, "nope") == ""


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, ""),
        (True, "true"),
        (2.0, "2"),
        (2.5, "2.5"),
        (7, "7"),
        ({"a": 1}, '{"a": 1}'),
    ],
)
def test_to_str(value, expected):
    assert to_str(value) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("+65 9876 5432", "98765432"),
        ("+65-9123-4567", "91234567"),
        ("+1 555-123-4567", "15551234567"),
        ("(65) 9876.5432", "6598765432"),
        ("", ""),
        (None, ""),
    ],
)
def test_normalize_phone(raw, expected):
    assert normalize_phone(raw) == expected


def test_format_date():
    assert format_date("2024-01-20", "%d/%m/%Y", "%Y-%m-%d") == "20/01/2024"
    assert format_date("2024-02-30", "%d/%m/%Y", "%Y-%m-%d") is None
    assert format_date(None, "%d/%m/%Y", "%Y-%m-%d") is None


def test_clock_helpers():
    assert clock_to_minutes("9:30") == 570
    assert clock_to_minutes("24:00") is None
    assert pad_clock("9:30") == "09:30"
    assert pad_clock("later") == "later"


def test_to_float():
    assert to_float("2") == 2.0
    assert to_float(True) is None
    assert to_float("x") is None
