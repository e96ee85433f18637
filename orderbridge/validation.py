from typing import Any, Dict, List, Optional
import logging

from orderbridge.core import OrderTransformer, MappingError, Recipe, get_registry
from orderbridge.core.engine import DUPLICATE_EXTRACT_WINNER, DUPLICATE_GLOBAL_WINNER
from orderbridge.core.models import coerce_extract_mappings, coerce_global_mappings

logger = logging.getLogger(__name__)


def is_mapping_valid(global_mappings: List[Any], extract_mappings: List[Any]) -> bool:
    try:
        OrderTransformer(global_mappings, extract_mappings)
        return True
    except MappingError as err:
        logger.warning("Invalid mapping: %s", err)
        return False


def validate_with_warnings(global_mappings: List[Any], extract_mappings: List[Any]) -> Dict[str, Any]:
    """
    Structural errors make the result not ok. Duplicate destinations and
    unknown recipes are only warnings: the engine still runs, but which
    duplicate wins is not something operators should rely on.
    """
    out: Dict[str, Any] = {"ok": False, "errors": [], "warnings": []}

    try:
        globals_ = coerce_global_mappings(global_mappings)
        extracts = coerce_extract_mappings(extract_mappings)
        OrderTransformer._validate_mappings(globals_, extracts)
    except MappingError as e:
        out["errors"].append(str(e))
        return out

    def dupes(label: str, dests: List[str], winner: str) -> None:
        seen: Dict[str, int] = {}
        for i, d in enumerate(dests):
            if d in seen:
                out["warnings"].append(f"Duplicate {label} destination '{d}' at indexes {seen[d]} and {i}; {winner}")
            else:
                seen[d] = i

    dupes("global", [m.destination_field for m in globals_], DUPLICATE_GLOBAL_WINNER)
    dupes("extract", [m.destination_field for m in extracts], DUPLICATE_EXTRACT_WINNER)

    reg = get_registry()
    for i, m in enumerate(extracts):
        if m.recipe_name not in reg:
            out["warnings"].append(
                f"Unknown recipe '{m.recipe_name}' at extract[{i}]; '{m.destination_field}' falls back to path lookup"
            )

    for i, m in enumerate(globals_):
        if m.no_mapping:
            continue
        if not m.source_field_paths:
            out["warnings"].append(f"Global mapping '{m.destination_field}' at global[{i}] has no source paths")
        elif any(not p.strip() for p in m.source_field_paths):
            out["warnings"].append(f"Global mapping '{m.destination_field}' at global[{i}] has an empty source path; it is skipped")

    for i, m in enumerate(extracts):
        if m.recipe_name == Recipe.PHONE.value and not m.source_field.strip():
            out["warnings"].append(
                f"Phone mapping '{m.destination_field}' at extract[{i}] has no sourceField; it always resolves to \"\""
            )

    shadowed = {m.destination_field for m in extracts} & {m.destination_field for m in globals_}
    for d in sorted(shadowed):
        out["warnings"].append(f"'{d}' is mapped by both sets; the global mapping only applies when extraction is blank")

    out["ok"] = len(out["errors"]) == 0
    return out


def dry_run(global_mappings: List[Any], extract_mappings: List[Any], sample: Any, columns: Optional[List[str]] = None):
    try:
        transformer = OrderTransformer(global_mappings, extract_mappings)
    except MappingError as e:
        return {"ok": False, "stage": "structure", "error": str(e)}

    try:
        if isinstance(sample, list):
            df = transformer.to_dataframe_batch(sample, columns)
            trace = transformer.trace(sample[0]) if sample else {"rows_emitted": 0, "fields_trace": {}}
        else:
            df = transformer.to_dataframe_single(sample, columns)
            trace = transformer.trace(sample)

        return {"ok": True, "rows": len(df), "columns": list(df.columns), "trace": trace}
    except Exception as e:
        logger.exception("Dry run failed during evaluation")
        return {"ok": False, "stage": "evaluation", "error": repr(e)}
