from __future__ import annotations
import json
import re
from enum import Enum
from typing import Any, Optional

ROOT_ALIAS = "order"


class ArrayMode(str, Enum):
    INDEX = "index"      # lists only answer numeric segments
    FIRST = "first"      # named segments descend into the first element
    COLLECT = "collect"  # named segments map over every element


class PathResolver:
    """
    Resolve dotted paths into nested order payloads.

    Supported selectors per segment:
      - key                  e.g. shipping_address
      - N                    list index, e.g. line_items.0.sku
      - key[N]               key then index, e.g. line_items[0].sku

    A leading ``order.`` addresses the root, so ``order.tags`` and ``tags``
    are the same lookup. Missing keys anywhere along the path yield None.

    Examples:
      shipping_address.phone
      order.name
      fulfillments[0].tracking_number
    """

    _token_head = re.compile(r"^([^\[\]]*)((?:\[\d+\])*)$")
    _index = re.compile(r"\[(\d+)\]")

    @classmethod
    def get(cls, obj: Any, path: Optional[str], *, arrays: ArrayMode = ArrayMode.INDEX) -> Any:
        if not path:
            return None
        segments = [s for s in path.strip().split(".") if s != ""]
        if not segments:
            return None
        if len(segments) > 1 and segments[0] == ROOT_ALIAS and (not isinstance(obj, dict) or ROOT_ALIAS not in obj):
            segments = segments[1:]

        cur = obj
        for seg in segments:
            if cur is None:
                return None
            cur = cls._apply_segment(cur, seg, arrays)
        return cur

    @classmethod
    def get_str(cls, obj: Any, path: Optional[str], *, arrays: ArrayMode = ArrayMode.INDEX) -> str:
        return to_str(cls.get(obj, path, arrays=arrays))

    @classmethod
    def _apply_segment(cls, base: Any, segment: str, arrays: ArrayMode) -> Any:
        m = cls._token_head.match(segment)
        if not m:
            return None
        key, rest = m.group(1), m.group(2)

        cur = cls._lookup(base, key, arrays) if key else base
        for idx in cls._index.findall(rest):
            cur = cls._at(cur, int(idx))
        return cur

    @classmethod
    def _lookup(cls, base: Any, key: str, arrays: ArrayMode) -> Any:
        if isinstance(base, dict):
            return base.get(key)

        if isinstance(base, list):
            if key.isdigit():
                return cls._at(base, int(key))
            if arrays == ArrayMode.FIRST:
                return cls._lookup(base[0], key, arrays) if base else None
            if arrays == ArrayMode.COLLECT:
                return [el.get(key) for el in base if isinstance(el, dict)]

        return None

    @staticmethod
    def _at(cur: Any, idx: int) -> Any:
        if isinstance(cur, list) and 0 <= idx < len(cur):
            return cur[idx]
        return None


def to_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dict, list)):
        try:
            return json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError):
            return str(value)
    return str(value)
