from __future__ import annotations
from typing import Any, Dict, List, Optional

from .path import ArrayMode, PathResolver


class EvaluationContext:
    """
    Read access to the order being transformed, shared by recipes, global
    mappings and order defaults.
    """
    __slots__ = ("root",)

    def __init__(self, root: Dict[str, Any]) -> None:
        self.root = root

    def get_from_root(self, path: str, *, arrays: ArrayMode = ArrayMode.INDEX) -> Any:
        return PathResolver.get(self.root, path, arrays=arrays)

    def get_str_from_root(self, path: str, *, arrays: ArrayMode = ArrayMode.INDEX) -> str:
        return PathResolver.get_str(self.root, path, arrays=arrays)

    @property
    def line_items(self) -> List[Dict[str, Any]]:
        items = self.root.get("line_items")
        if not isinstance(items, list):
            return []
        return [it for it in items if isinstance(it, dict)]

    @property
    def first_line_item(self) -> Optional[Dict[str, Any]]:
        items = self.line_items
        return items[0] if items else None
