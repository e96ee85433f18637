from .core import (
    EngineConfig,
    ExtractProcessingMapping,
    GlobalFieldMapping,
    MappingError,
    MappingSetBuilder,
    OrderTransformer,
    Recipe,
    ShopifyOrder,
    transform,
)

__version__ = "0.1.0"

__all__ = [
    "EngineConfig",
    "ExtractProcessingMapping",
    "GlobalFieldMapping",
    "MappingError",
    "MappingSetBuilder",
    "OrderTransformer",
    "Recipe",
    "ShopifyOrder",
    "transform",
]
