from __future__ import annotations

from typing import Any, Dict, List

from ..context import EvaluationContext
from ..models import ExtractProcessingMapping, ItemCountMode, Recipe
from ..path import to_str
from ..registry import register_recipe
from ..tags import (
    extract_delivery_completion_window,
    extract_job_release_time,
    extract_keyword_date,
    find_literal_date,
    find_time_window,
)
from ..utils import normalize_phone, to_float

TAGS_SOURCE = "order.tags"
NAME_SOURCE = "order.name"
LINE_ITEMS_SOURCE = "line_items"

DATE_FORMAT_LITERAL = "dd/mm/yyyy"
DATE_KEYWORD_FORMATS = ("delivery", "processing")

TIME_FORMAT_WINDOW = "time_window"
TIME_FORMAT_JOB_RELEASE = "job_release_time"
TIME_FORMAT_COMPLETION = "completion_window"

GROUP_FORMAT_PREFIX = "first_two_letters"
PHONE_FORMAT_NORMALIZE = "normalize"
DEFAULT_VARIANT = "Default"


def _source(mapping: ExtractProcessingMapping, ctx: EvaluationContext, default: str) -> Any:
    return ctx.get_from_root(mapping.source_field or default)


def _ensure_list(x: Any) -> List[Dict[str, Any]]:
    if isinstance(x, list):
        return [el for el in x if isinstance(el, dict)]
    return []


def describe_line_items(items: List[Dict[str, Any]]) -> str:
    parts = []
    for item in items:
        title = to_str(item.get("title"))
        variant = to_str(item.get("variant_title")) or DEFAULT_VARIANT
        parts.append(f"{title} - {variant}")
    return ", ".join(parts)


def sum_quantities(items: List[Dict[str, Any]]) -> str:
    total = 0.0
    for item in items:
        q = to_float(item.get("quantity"))
        if q is not None:
            total += q
    return to_str(total)


def _recipe_date(mapping: ExtractProcessingMapping, ctx: EvaluationContext) -> str:
    tags = to_str(_source(mapping, ctx, TAGS_SOURCE))
    fmt = (mapping.format or DATE_FORMAT_LITERAL).lower()
    if fmt in DATE_KEYWORD_FORMATS:
        return extract_keyword_date(tags, fmt)
    if fmt == DATE_FORMAT_LITERAL:
        return find_literal_date(tags)
    return ""
register_recipe(Recipe.DATE, _recipe_date)

def _recipe_time(mapping: ExtractProcessingMapping, ctx: EvaluationContext) -> str:
    tags = to_str(_source(mapping, ctx, TAGS_SOURCE))
    fmt = mapping.format or TIME_FORMAT_WINDOW
    if fmt == TIME_FORMAT_WINDOW:
        return find_time_window(tags)
    if fmt == TIME_FORMAT_JOB_RELEASE:
        return extract_job_release_time(tags)
    if fmt == TIME_FORMAT_COMPLETION:
        return extract_delivery_completion_window(tags)
    return ""
register_recipe(Recipe.TIME, _recipe_time)

def _recipe_group(mapping: ExtractProcessingMapping, ctx: EvaluationContext) -> str:
    name = to_str(_source(mapping, ctx, NAME_SOURCE))
    if mapping.format != GROUP_FORMAT_PREFIX:
        return name
    if name.startswith("#"):
        name = name[1:]
    return name[:2].upper()
register_recipe(Recipe.GROUP, _recipe_group)

def _recipe_item_count(mapping: ExtractProcessingMapping, ctx: EvaluationContext) -> str:
    items = _ensure_list(_source(mapping, ctx, LINE_ITEMS_SOURCE))
    if not items:
        return "0"
    if ItemCountMode.from_format(mapping.format) == ItemCountMode.SUM_QUANTITIES:
        return sum_quantities(items)
    return str(len(items))
register_recipe(Recipe.ITEM_COUNT, _recipe_item_count)

def _recipe_description(mapping: ExtractProcessingMapping, ctx: EvaluationContext) -> str:
    return describe_line_items(_ensure_list(_source(mapping, ctx, LINE_ITEMS_SOURCE)))
register_recipe(Recipe.DESCRIPTION, _recipe_description)

def _recipe_phone(mapping: ExtractProcessingMapping, ctx: EvaluationContext) -> str:
    raw = ctx.get_str_from_root(mapping.source_field)
    if mapping.format == PHONE_FORMAT_NORMALIZE:
        return normalize_phone(raw)
    return raw
register_recipe(Recipe.PHONE, _recipe_phone)

def _recipe_skip(mapping: ExtractProcessingMapping, ctx: EvaluationContext) -> str:
    return ""
register_recipe(Recipe.SKIP, _recipe_skip)
