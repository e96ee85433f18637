from .exceptions import MappingError
from .engine import OrderTransformer, EngineConfig, transform
from .backends.pandas import DataFrameBackend, PandasBackend
from .registry import RecipeRegistry, register_recipe, get_registry
from .models import (
    Address,
    ExtractProcessingMapping,
    GlobalFieldMapping,
    ItemCountMode,
    LineItem,
    Recipe,
    ShopifyOrder,
)
from .path import ArrayMode, PathResolver
from .builder.mapping import MappingSetBuilder

__all__ = [
    "MappingError",
    "OrderTransformer",
    "EngineConfig",
    "transform",
    "DataFrameBackend",
    "PandasBackend",
    "RecipeRegistry",
    "register_recipe",
    "get_registry",
    "Address",
    "ExtractProcessingMapping",
    "GlobalFieldMapping",
    "ItemCountMode",
    "LineItem",
    "Recipe",
    "ShopifyOrder",
    "ArrayMode",
    "PathResolver",
    "MappingSetBuilder",
]
