from __future__ import annotations

import re
from datetime import datetime
from typing import Any, Optional

_PHONE_NOISE = re.compile(r"[\s\-().]")
_CLOCK = re.compile(r"^(\d{1,2}):(\d{2})$")

HOME_COUNTRY_CODE = "+65"


def to_float(x: Any) -> Optional[float]:
    if x is None or isinstance(x, bool):
        return None

    try:
        return float(x)

    except (TypeError, ValueError):
        return None


def format_date(src: Any, out_fmt: str, in_fmt: str) -> Optional[str]:
    if src is None:
        return None

    try:
        dt = datetime.strptime(str(src), in_fmt)
    except ValueError:
        return None

    return dt.strftime(out_fmt)


def normalize_phone(raw: Any) -> str:
    """
    Strip spaces, dashes, parentheses and dots, then drop the home country
    prefix. Any other international prefix only loses its leading '+'.
    """
    if raw is None:
        return ""

    cleaned = _PHONE_NOISE.sub("", str(raw))
    if cleaned.startswith(HOME_COUNTRY_CODE):
        return cleaned[len(HOME_COUNTRY_CODE):]

    if cleaned.startswith("+"):
        return cleaned[1:]

    return cleaned


def clock_to_minutes(clock: str) -> Optional[int]:
    m = _CLOCK.match(clock.strip())
    if not m:
        return None

    hours, minutes = int(m.group(1)), int(m.group(2))
    if hours > 23 or minutes > 59:
        return None

    return hours * 60 + minutes


def pad_clock(clock: str) -> str:
    m = _CLOCK.match(clock.strip())
    if not m:
        return clock

    return f"{int(m.group(1)):02d}:{m.group(2)}"
