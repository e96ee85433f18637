from __future__ import annotations
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .exceptions import MappingError


class Recipe(str, Enum):
    DATE = "date"
    TIME = "time"
    GROUP = "group"
    ITEM_COUNT = "itemCount"
    DESCRIPTION = "description"
    PHONE = "phone"
    SKIP = "skip"


class ItemCountMode(str, Enum):
    SUM_QUANTITIES = "sum_quantities"
    COUNT = "count"

    @classmethod
    def from_format(cls, fmt: Optional[str]) -> "ItemCountMode":
        if fmt == cls.SUM_QUANTITIES.value:
            return cls.SUM_QUANTITIES
        return cls.COUNT


class Address(BaseModel):
    model_config = ConfigDict(extra="allow")

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    company: Optional[str] = None
    address1: Optional[str] = None
    address2: Optional[str] = None
    city: Optional[str] = None
    province: Optional[str] = None
    country: Optional[str] = None
    zip: Optional[str] = None
    phone: Optional[str] = None


class LineItem(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: Optional[int] = None
    sku: Optional[str] = None
    title: Optional[str] = None
    variant_title: Optional[str] = None
    quantity: int = Field(default=0, ge=0)
    current_quantity: Optional[int] = None
    price: Optional[str] = None
    product_id: Optional[int] = None
    variant_id: Optional[int] = None

    @property
    def is_removed(self) -> bool:
        return self.current_quantity is not None and self.current_quantity == 0


class ShopifyOrder(BaseModel):
    """
    Inbound storefront order. Unknown keys are kept so that any dotted
    source path configured by an operator still resolves against the dump.
    """
    model_config = ConfigDict(extra="allow")

    id: Optional[int] = None
    name: Optional[str] = None
    order_number: Optional[int] = None
    email: Optional[str] = None
    tags: Optional[str] = None
    note: Optional[str] = None
    customer: Optional[Dict[str, Any]] = None
    shipping_address: Optional[Address] = None
    billing_address: Optional[Address] = None
    line_items: List[LineItem] = Field(default_factory=list)


class GlobalFieldMapping(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    destination_field: str = Field(alias="dashboardField", min_length=1)
    source_field_paths: List[str] = Field(default_factory=list, alias="shopifyFields")
    join_separator: Optional[str] = Field(default=None, alias="separator")
    no_mapping: bool = Field(default=False, alias="noMapping")

    @property
    def separator(self) -> str:
        return self.join_separator or " "


class ExtractProcessingMapping(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    destination_field: str = Field(alias="dashboardField", min_length=1)
    recipe: Union[Recipe, str] = Field(alias="processingType")
    source_field: str = Field(default="", alias="sourceField")
    format: Optional[str] = None

    @property
    def recipe_name(self) -> str:
        return self.recipe.value if isinstance(self.recipe, Recipe) else str(self.recipe)


GlobalMappingLike = Union[GlobalFieldMapping, Dict[str, Any]]
ExtractMappingLike = Union[ExtractProcessingMapping, Dict[str, Any]]
OrderLike = Union[ShopifyOrder, Dict[str, Any]]


def _coerce(model, items: Optional[list], label: str) -> list:
    out = []
    for i, m in enumerate(items or []):
        if isinstance(m, model):
            out.append(m)
            continue
        try:
            out.append(model.model_validate(m))
        except ValidationError as e:
            raise MappingError(f"Invalid {label} mapping at index {i}: {e}") from e
    return out


def coerce_global_mappings(mappings: Optional[List[GlobalMappingLike]]) -> List[GlobalFieldMapping]:
    return _coerce(GlobalFieldMapping, mappings, "global")


def coerce_extract_mappings(mappings: Optional[List[ExtractMappingLike]]) -> List[ExtractProcessingMapping]:
    return _coerce(ExtractProcessingMapping, mappings, "extract")


def order_as_dict(order: OrderLike) -> Dict[str, Any]:
    if isinstance(order, ShopifyOrder):
        return order.model_dump()
    if isinstance(order, dict):
        return order
    raise TypeError("order must be a ShopifyOrder or a dict.")
