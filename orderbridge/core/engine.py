from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Set, Tuple, Union
import logging
import time

from .backends.pandas import DataFrameBackend, PandasBackend
from .context import EvaluationContext
from .exceptions import MappingError
from .models import (
    ExtractMappingLike,
    ExtractProcessingMapping,
    GlobalFieldMapping,
    GlobalMappingLike,
    OrderLike,
    Recipe,
    coerce_extract_mappings,
    coerce_global_mappings,
    order_as_dict,
)
from .path import PathResolver, to_str
from .recipes.builtin import describe_line_items, sum_quantities
from .registry import RecipeRegistry, get_registry
from .types import FlatRecord


ErrorMode = str  # "blank" | "warn" | "raise"

LINE_ITEM_PREFIX = "line_items."
LINE_ITEM_FIELDS = ("description", "sku", "qty")
ADDRESS_PARTS = ("address1", "address2", "city", "province", "zip", "country")

PHASE_EXTRACT = "extract"
PHASE_GLOBAL = "global"
PHASE_DEFAULT = "default"
PHASE_PINNED = "pinned"

# Extract mappings always overwrite; global mappings only fill blank destinations.
DUPLICATE_EXTRACT_WINNER = "the last one wins"
DUPLICATE_GLOBAL_WINNER = "the first one that resolves to a non-empty value (or noMapping) wins"


@dataclass
class EngineConfig:
    default_on_error: ErrorMode = "blank"
    trace_enabled: bool = False
    backend: DataFrameBackend = field(default_factory=PandasBackend)

    logger: Optional[logging.Logger] = None
    metrics_increment: Optional[Callable[[str, int], None]] = None
    metrics_observe: Optional[Callable[[str, float], None]] = None


class _Resolution:
    __slots__ = ("values", "pinned", "trace")

    def __init__(self) -> None:
        self.values: Dict[str, str] = {}
        self.pinned: Set[str] = set()
        self.trace: Dict[str, Dict[str, Any]] = {}

    def set(self, dest: str, value: str, phase: str, **detail: Any) -> None:
        self.values[dest] = value
        self.trace[dest] = {"phase": phase, "value": value, **detail}

    def pin(self, dest: str, **detail: Any) -> None:
        self.pinned.add(dest)
        self.set(dest, "", PHASE_PINNED, **detail)

    def is_open(self, dest: str) -> bool:
        return dest not in self.pinned and not self.values.get(dest)


def _is_removed(item: Dict[str, Any]) -> bool:
    cq = item.get("current_quantity")
    return cq is not None and not isinstance(cq, bool) and cq == 0


def _line_item_description(item: Dict[str, Any]) -> str:
    title = to_str(item.get("title"))
    variant = to_str(item.get("variant_title"))
    return f"{title} - {variant}" if variant else title


def _shipping_address(ctx: EvaluationContext) -> str:
    addr = ctx.root.get("shipping_address")
    if not isinstance(addr, dict):
        return ""
    parts = [to_str(addr.get(k)) for k in ADDRESS_PARTS]
    return ", ".join(p for p in parts if p)


def _item_count(ctx: EvaluationContext) -> str:
    items = ctx.line_items
    return sum_quantities(items) if items else "0"


# Order-level fallbacks, applied only to destinations still blank after both mapping phases.
ORDER_DEFAULTS: Tuple[Tuple[str, Callable[[EvaluationContext], str]], ...] = (
    ("description", lambda ctx: describe_line_items(ctx.line_items)),
    ("itemCount", _item_count),
    ("qty", _item_count),
    ("address", _shipping_address),
    ("deliveryOrderNo", lambda ctx: ctx.get_str_from_root("name")),
    ("emailsForNotifications", lambda ctx: ctx.get_str_from_root("email")),
    ("instructions", lambda ctx: ctx.get_str_from_root("note")),
)


class OrderTransformer:
    """
    Turns one storefront order into flat delivery records, one per surviving
    line item, using operator-configured mapping sets.

    Resolution runs in three explicit phases over order-level fields:

      1. extraction recipes (ExtractProcessingMapping)
      2. global field mappings, only for destinations still blank
      3. built-in order defaults, only for destinations still blank

    Destinations resolved by a ``skip`` recipe or a ``noMapping`` global
    mapping are pinned to "" and no later phase touches them.
    """
    def __init__(
        self,
        global_mappings: Optional[List[GlobalMappingLike]] = None,
        extract_mappings: Optional[List[ExtractMappingLike]] = None,
        *,
        registry: Optional[RecipeRegistry] = None,
        config: Optional[EngineConfig] = None,
        backend: Optional[DataFrameBackend] = None,
    ) -> None:
        self.global_mappings: List[GlobalFieldMapping] = coerce_global_mappings(global_mappings)
        self.extract_mappings: List[ExtractProcessingMapping] = coerce_extract_mappings(extract_mappings)
        self._validate_mappings(self.global_mappings, self.extract_mappings)

        self._registry: RecipeRegistry = registry or get_registry()
        self._config: EngineConfig = config or EngineConfig()
        if backend is not None:
            self._config.backend = backend

        self._trace_enabled = bool(self._config.trace_enabled)
        self._warn_on_duplicates()

    def transform(self, order: OrderLike) -> List[FlatRecord]:
        started = time.perf_counter()
        ctx = EvaluationContext(order_as_dict(order))
        res = self._resolve_order_fields(ctx)
        rows = self._fan_out(ctx, res.values)

        self._log("debug", "Created %d rows for order %s", len(rows), ctx.get_str_from_root("name"))
        if self._trace_enabled:
            self._log("debug", "Field trace for order %s: %s", ctx.get_str_from_root("name"), res.trace)
        if self._config.metrics_observe:
            self._config.metrics_observe("transformer.transform_seconds", time.perf_counter() - started)
            self._config.metrics_observe("transformer.rows_per_order", float(len(rows)))
        return rows

    def transform_batch(self, orders: Iterable[OrderLike]) -> List[FlatRecord]:
        rows: List[FlatRecord] = []
        for order in orders:
            rows.extend(self.transform(order))
        return rows

    def order_fields(self, order: OrderLike) -> Dict[str, str]:
        return dict(self._resolve_order_fields(EvaluationContext(order_as_dict(order))).values)

    def to_dataframe_single(self, order: OrderLike, columns: Optional[List[str]] = None):
        return self._config.backend.to_dataframe(self.transform(order), columns)

    def to_dataframe_batch(self, orders: Iterable[OrderLike], columns: Optional[List[str]] = None):
        frames: List[Any] = []
        for order in orders:
            frames.append(self._config.backend.to_dataframe(self.transform(order), columns))

        return self._config.backend.concat(frames)

    def to_dataframe(self, data: Union[OrderLike, List[OrderLike]], columns: Optional[List[str]] = None):
        if isinstance(data, list):
            return self.to_dataframe_batch(data, columns)

        return self.to_dataframe_single(data, columns)

    def trace(self, order: OrderLike) -> Dict[str, Any]:
        ctx = EvaluationContext(order_as_dict(order))
        res = self._resolve_order_fields(ctx)
        rows = self._fan_out(ctx, res.values)
        return {"rows_emitted": len(rows), "fields_trace": res.trace}

    @staticmethod
    def _validate_mappings(
        global_mappings: List[GlobalFieldMapping],
        extract_mappings: List[ExtractProcessingMapping],
        *,
        strict: bool = False,
    ) -> None:
        """
        Destinations and recipe names are always required. With ``strict``,
        empty source paths and phone mappings without a sourceField are
        rejected too; at transform time they simply resolve to "".
        """
        for m in global_mappings:
            if not m.destination_field.strip():
                raise MappingError("Global mapping destination must be a non-empty string.")

            if strict and not m.no_mapping:
                for p in m.source_field_paths:
                    if not p.strip():
                        raise MappingError(f"Global mapping '{m.destination_field}' has an empty source path.")

        for m in extract_mappings:
            if not m.destination_field.strip():
                raise MappingError("Extract mapping destination must be a non-empty string.")

            if not m.recipe_name.strip():
                raise MappingError(f"Extract mapping '{m.destination_field}' must name a recipe.")

            if strict and m.recipe_name == Recipe.PHONE.value and not m.source_field.strip():
                raise MappingError(f"Phone mapping '{m.destination_field}' requires a sourceField.")

    def _resolve_order_fields(self, ctx: EvaluationContext) -> _Resolution:
        res = _Resolution()
        self._extract_phase(ctx, res)
        self._global_phase(ctx, res)
        self._defaults_phase(ctx, res)
        return res

    def _extract_phase(self, ctx: EvaluationContext, res: _Resolution) -> None:
        for mapping in self.extract_mappings:
            dest = mapping.destination_field
            recipe = mapping.recipe_name
            if recipe == Recipe.SKIP.value:
                res.pin(dest, recipe=recipe)
                continue

            res.set(dest, self._run_recipe(mapping, ctx), PHASE_EXTRACT, recipe=recipe, format=mapping.format)

    def _global_phase(self, ctx: EvaluationContext, res: _Resolution) -> None:
        for mapping in self.global_mappings:
            dest = mapping.destination_field
            if not res.is_open(dest):
                self._log("debug", "Skipping global mapping for %s (already resolved)", dest)
                continue

            if mapping.no_mapping:
                res.pin(dest, no_mapping=True)
                continue

            res.set(dest, self._join_sources(mapping, ctx), PHASE_GLOBAL, paths=list(mapping.source_field_paths))

    def _defaults_phase(self, ctx: EvaluationContext, res: _Resolution) -> None:
        for dest, compute in ORDER_DEFAULTS:
            if res.is_open(dest):
                res.set(dest, compute(ctx), PHASE_DEFAULT)

    @staticmethod
    def _join_sources(mapping: GlobalFieldMapping, ctx: EvaluationContext) -> str:
        values: List[str] = []
        for path in mapping.source_field_paths:
            if path.startswith(LINE_ITEM_PREFIX):
                value = PathResolver.get_str(ctx.first_line_item, path[len(LINE_ITEM_PREFIX):])
            else:
                value = ctx.get_str_from_root(path)
            if value:
                values.append(value)
        return mapping.separator.join(values)

    @staticmethod
    def _fan_out(ctx: EvaluationContext, fields: Dict[str, str]) -> List[FlatRecord]:
        survivors = [item for item in ctx.line_items if not _is_removed(item)]
        if not survivors:
            row = dict(fields)
            row.update({name: "" for name in LINE_ITEM_FIELDS})
            return [row]

        rows: List[FlatRecord] = []
        for item in survivors:
            row = dict(fields)
            row["description"] = _line_item_description(item)
            row["sku"] = to_str(item.get("sku"))
            row["qty"] = to_str(item.get("quantity"))
            rows.append(row)
        return rows

    def _run_recipe(self, mapping: ExtractProcessingMapping, ctx: EvaluationContext) -> str:
        handler = self._registry.get_handler(mapping.recipe_name)
        try:
            if handler is None:
                return ctx.get_str_from_root(mapping.source_field)
            return to_str(handler(mapping, ctx))
        except Exception as exc:
            return self._handle_recipe_error(mapping, exc)

    def _handle_recipe_error(self, mapping: ExtractProcessingMapping, exc: Exception) -> str:
        mode: ErrorMode = self._config.default_on_error or "blank"

        if self._config.metrics_increment:
            self._config.metrics_increment("transformer.recipe_errors", 1)

        if mode == "raise":
            raise exc

        if mode == "warn":
            self._log(
                "warning",
                "Recipe error for field '%s': %s | recipe=%s format=%s",
                mapping.destination_field, repr(exc), mapping.recipe_name, mapping.format,
            )

        return ""

    def _warn_on_duplicates(self) -> None:
        for label, dests, winner in (
            ("global", [m.destination_field for m in self.global_mappings], DUPLICATE_GLOBAL_WINNER),
            ("extract", [m.destination_field for m in self.extract_mappings], DUPLICATE_EXTRACT_WINNER),
        ):
            seen: Set[str] = set()
            for d in dests:
                if d in seen:
                    self._log("warning", "Duplicate %s mapping for destination '%s'; %s.", label, d, winner)
                seen.add(d)

    def _log(self, level: str, msg: str, *args: Any) -> None:
        logger = self._config.logger
        if logger is not None:
            getattr(logger, level)(msg, *args)


def transform(
    order: OrderLike,
    global_mappings: Optional[List[GlobalMappingLike]] = None,
    extract_mappings: Optional[List[ExtractMappingLike]] = None,
) -> List[FlatRecord]:
    return OrderTransformer(global_mappings, extract_mappings).transform(order)
