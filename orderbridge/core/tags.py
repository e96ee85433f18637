"""
Parsing helpers for the free-text order tag string.

Storefront orders carry scheduling hints in their comma-separated tags,
e.g. ``"14:00-18:00, 18/06/2025, Delivery, Singapore"`` or
``"delivery:2024-01-20, processing:18/01/2024"``. Every helper here is
best-effort: a miss returns an empty string, never raises.
"""
from __future__ import annotations

import re
from typing import Dict, List, Optional, Sequence, Tuple

from .utils import clock_to_minutes, format_date, pad_clock

TIME_RANGE = re.compile(r"(\d{1,2}:\d{2})\s*-\s*(\d{1,2}:\d{2})")
SINGLE_TIME = re.compile(r"(\d{1,2}:\d{2})")
LITERAL_DATE = re.compile(r"(\d{2}/\d{2}/\d{4})")
LOOSE_DATE = re.compile(r"(\d{1,2})[/-](\d{1,2})[/-](\d{4})")

# Tried in order against a keyword tag; all are rewritten to dd/mm/yyyy.
DATE_SHAPES: Tuple[Tuple[re.Pattern, str], ...] = (
    (re.compile(r"(\d{4}-\d{2}-\d{2})"), "%Y-%m-%d"),
    (re.compile(r"(\d{2}/\d{2}/\d{4})"), "%d/%m/%Y"),
    (re.compile(r"(\d{2}-\d{2}-\d{4})"), "%d-%m-%Y"),
)
OUT_DATE_FMT = "%d/%m/%Y"

DAYPART_KEYWORDS = ("morning", "afternoon", "night")
DAYPART_RE = re.compile(r"\b(morning|afternoon|night)\b", re.IGNORECASE)

JOB_RELEASE_BY_DAYPART: Dict[str, str] = {"morning": "09:00", "afternoon": "14:00", "night": "18:00"}
COMPLETION_WINDOW_BY_DAYPART: Dict[str, str] = {
    "morning": "09:00-12:00",
    "afternoon": "14:00-18:00",
    "night": "18:00-21:00",
}

# Half-open [start, end) ranges on the window's start, in minutes past midnight.
WINDOW_BUCKETS: Tuple[Tuple[int, int, str, str], ...] = (
    (600, 840, "08:45", "Morning"),
    (840, 1080, "13:45", "Afternoon"),
    (1080, 1320, "17:15", "Night"),
)


def split_tags(tags: Optional[str]) -> List[str]:
    if not tags:
        return []
    return [t.strip() for t in str(tags).split(",") if t.strip()]


def _first_match(parts: Sequence[str], pattern: re.Pattern) -> Optional[re.Match]:
    for tag in parts:
        m = pattern.search(tag)
        if m:
            return m
    return None


def find_literal_date(tags: Optional[str]) -> str:
    m = _first_match(split_tags(tags), LITERAL_DATE)
    return m.group(1) if m else ""


def _loose_date(tag: str) -> Optional[str]:
    m = LOOSE_DATE.search(tag)
    if not m:
        return None
    day, month, year = m.groups()
    return format_date(f"{int(day):02d}/{int(month):02d}/{year}", OUT_DATE_FMT, OUT_DATE_FMT)


def extract_keyword_date(tags: Optional[str], date_type: str) -> str:
    """
    Find the date carried by the tag mentioning ``date_type`` ("delivery" or
    "processing"). Shapes yyyy-mm-dd, dd/mm/yyyy and dd-mm-yyyy are tried in
    that order on each keyword tag; a loose d/m/yyyy scan over all tags is
    the last resort.
    """
    parts = split_tags(tags)
    keyword = date_type.lower()

    for tag in parts:
        if keyword not in tag.lower():
            continue
        for pattern, in_fmt in DATE_SHAPES:
            m = pattern.search(tag)
            if not m:
                continue
            out = format_date(m.group(1), OUT_DATE_FMT, in_fmt)
            if out:
                return out

    for tag in parts:
        out = _loose_date(tag)
        if out:
            return out

    return ""


def find_time_window(tags: Optional[str]) -> str:
    parts = split_tags(tags)
    m = _first_match(parts, TIME_RANGE)
    if m:
        return m.group(0)
    m = _first_match(parts, SINGLE_TIME)
    return m.group(1) if m else ""


def _find_daypart(parts: Sequence[str]) -> Optional[str]:
    m = _first_match(parts, DAYPART_RE)
    return m.group(1).lower() if m else None


def window_start_minutes(window: str) -> Optional[int]:
    m = TIME_RANGE.fullmatch(window.strip())
    if not m:
        return None
    return clock_to_minutes(m.group(1))


def _bucket(window: str) -> Optional[Tuple[int, int, str, str]]:
    start = window_start_minutes(window)
    if start is None:
        return None
    for bucket in WINDOW_BUCKETS:
        if bucket[0] <= start < bucket[1]:
            return bucket
    return None


def time_window_to_job_release_time(window: str) -> str:
    bucket = _bucket(window)
    return bucket[2] if bucket else window


def time_window_to_named_window(window: str) -> str:
    bucket = _bucket(window)
    return bucket[3] if bucket else window


def extract_job_release_time(tags: Optional[str]) -> str:
    parts = split_tags(tags)

    daypart = _find_daypart(parts)
    if daypart:
        return JOB_RELEASE_BY_DAYPART[daypart]

    m = _first_match(parts, TIME_RANGE)
    if m:
        return time_window_to_job_release_time(m.group(0))

    m = _first_match(parts, SINGLE_TIME)
    if m:
        return pad_clock(m.group(1))

    return ""


def extract_delivery_completion_window(tags: Optional[str]) -> str:
    parts = split_tags(tags)

    daypart = _find_daypart(parts)
    if daypart:
        return COMPLETION_WINDOW_BY_DAYPART[daypart]

    m = _first_match(parts, TIME_RANGE)
    if m:
        return time_window_to_named_window(m.group(0))

    return ""
