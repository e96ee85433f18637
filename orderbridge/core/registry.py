from __future__ import annotations
from enum import Enum
from typing import Callable, Dict, Optional, Set, Union

# Recipe handler signature:
# handler(mapping: ExtractProcessingMapping, ctx: EvaluationContext) -> str

RecipeHandler = Callable[..., str]
RecipeKey = Union[str, Enum]


def _key(name: RecipeKey) -> str:
    return name.value if isinstance(name, Enum) else name


class RecipeRegistry:
    """
    Registry mapping recipe names (e.g. 'date', 'phone', custom recipes) to
    extraction handlers. Handlers always return a string; "" means unresolved.
    """
    def __init__(self) -> None:
        self._handlers: Dict[str, RecipeHandler] = {}

    def register(self, name: RecipeKey, handler: RecipeHandler) -> None:
        key = _key(name)
        if not key or not isinstance(key, str):
            raise ValueError("recipe name must be a non-empty string.")

        if not callable(handler):
            raise ValueError(f"handler for recipe '{key}' must be callable.")

        self._handlers[key] = handler

    def get_handler(self, name: RecipeKey) -> Optional[RecipeHandler]:
        return self._handlers.get(_key(name))

    def __contains__(self, name: object) -> bool:
        return isinstance(name, (str, Enum)) and _key(name) in self._handlers

    @property
    def recipes(self) -> Set[str]:
        return set(self._handlers.keys())


_global_registry: Optional[RecipeRegistry] = None


def get_registry() -> RecipeRegistry:
    global _global_registry
    if _global_registry is None:
        _global_registry = RecipeRegistry()
        # Built-ins are registered on import
        from .recipes import builtin  # noqa: F401

    return _global_registry


def register_recipe(name: RecipeKey, handler: RecipeHandler) -> None:
    get_registry().register(name, handler)
