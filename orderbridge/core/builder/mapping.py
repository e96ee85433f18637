from __future__ import annotations
from typing import Any, Dict, List, Optional, Sequence, Union

from ..defaults import DEFAULT_EXTRACT_MAPPINGS
from ..engine import EngineConfig, OrderTransformer
from ..exceptions import MappingError
from ..models import ExtractProcessingMapping, GlobalFieldMapping, Recipe

GLOBAL_KEY = "globalFieldMappings"
EXTRACT_KEY = "extractProcessingMappings"


class MappingSetBuilder:
    """
    Fluent construction of the two mapping sets the dashboard persists.

        >>> mappings = (
        ...     MappingSetBuilder()
        ...     .with_default_extracts()
        ...     .map("firstName", "shipping_address.first_name")
        ...     .map("address", "shipping_address.address1", "shipping_address.city", sep=", ")
        ...     .no_mapping("trackingNo")
        ...     .build()
        ... )
    """
    __slots__ = ("_global", "_extract")

    def __init__(self) -> None:
        self._global: Dict[str, GlobalFieldMapping] = {}
        self._extract: Dict[str, ExtractProcessingMapping] = {}

    def map(self, destination: str, *paths: str, sep: Optional[str] = " ") -> "MappingSetBuilder":
        if not destination or not isinstance(destination, str):
            raise ValueError("map(destination=...) requires a non-empty string.")
        if not paths:
            raise ValueError(f"map('{destination}') requires at least one source path.")
        self._global[destination] = GlobalFieldMapping(
            destination_field=destination,
            source_field_paths=list(paths),
            join_separator=sep,
        )
        return self

    def no_mapping(self, destination: str) -> "MappingSetBuilder":
        if not destination or not isinstance(destination, str):
            raise ValueError("no_mapping(destination=...) requires a non-empty string.")
        self._global[destination] = GlobalFieldMapping(destination_field=destination, no_mapping=True)
        return self

    def extract(
        self,
        destination: str,
        recipe: Union[Recipe, str],
        source: str = "",
        fmt: Optional[str] = None,
    ) -> "MappingSetBuilder":
        if not destination or not isinstance(destination, str):
            raise ValueError("extract(destination=...) requires a non-empty string.")
        self._extract[destination] = ExtractProcessingMapping(
            destination_field=destination,
            recipe=recipe,
            source_field=source,
            format=fmt,
        )
        return self

    def skip(self, destination: str) -> "MappingSetBuilder":
        return self.extract(destination, Recipe.SKIP)

    def with_default_extracts(self) -> "MappingSetBuilder":
        for raw in DEFAULT_EXTRACT_MAPPINGS:
            m = ExtractProcessingMapping.model_validate(raw)
            self._extract[m.destination_field] = m
        return self

    def global_mappings(self) -> List[GlobalFieldMapping]:
        return list(self._global.values())

    def extract_mappings(self) -> List[ExtractProcessingMapping]:
        return list(self._extract.values())

    def build(self) -> Dict[str, List[Dict[str, Any]]]:
        if not self._global and not self._extract:
            raise MappingError("Cannot build mappings: no fields defined.")
        OrderTransformer._validate_mappings(self.global_mappings(), self.extract_mappings(), strict=True)
        return {
            GLOBAL_KEY: [m.model_dump(by_alias=True) for m in self._global.values()],
            EXTRACT_KEY: [_dump_extract(m) for m in self._extract.values()],
        }

    def to_transformer(self, *, config: Optional[EngineConfig] = None) -> OrderTransformer:
        return OrderTransformer(self.global_mappings(), self.extract_mappings(), config=config)

    def from_dict(self, payload: Dict[str, Sequence[Dict[str, Any]]]) -> "MappingSetBuilder":
        if not isinstance(payload, dict):
            raise MappingError("Mapping payload must be an object (dict).")
        transformer = OrderTransformer(payload.get(GLOBAL_KEY) or [], payload.get(EXTRACT_KEY) or [])
        self._global = {m.destination_field: m for m in transformer.global_mappings}
        self._extract = {m.destination_field: m for m in transformer.extract_mappings}
        return self


def _dump_extract(m: ExtractProcessingMapping) -> Dict[str, Any]:
    out = m.model_dump(by_alias=True)
    out["processingType"] = m.recipe_name
    return out
