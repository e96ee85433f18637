from __future__ import annotations
from typing import Any, Dict, List, Optional
import json
import logging

from .defaults import DASHBOARD_FIELD_LABELS
from .engine import OrderTransformer

logger = logging.getLogger(__name__)


def stream_jsonl_to_csv(
    transformer: OrderTransformer,
    in_path: str,
    out_path: str,
    *,
    batch_size: int = 1_000,
    include_header: bool = True,
    columns: Optional[List[str]] = None,
    use_labels: bool = False,
) -> int:
    """
    Transform a JSONL file of orders (one order object per line) into a CSV
    of flat records, batch by batch. Columns are fixed by ``columns`` or, when
    omitted, by the first batch. Returns the number of rows written.
    """
    batch: List[Dict[str, Any]] = []
    header_written = False
    cols: Optional[List[str]] = list(columns) if columns else None
    written = 0

    def flush(fout) -> None:
        nonlocal header_written, cols, written
        df = transformer.to_dataframe_batch(batch)
        if cols is None:
            cols = list(df.columns)
        df = df.reindex(columns=cols, fill_value="")
        if use_labels:
            df = df.rename(columns=DASHBOARD_FIELD_LABELS)
        df.to_csv(fout, header=(include_header and not header_written), index=False, mode="a")
        header_written = True
        written += len(df)
        batch.clear()

    with open(in_path, "r", encoding="utf-8") as fin, open(out_path, "w", encoding="utf-8", newline="") as fout:
        for lineno, line in enumerate(fin, start=1):
            line = line.strip()
            if not line:
                continue

            try:
                batch.append(json.loads(line))
            except json.JSONDecodeError as exc:
                logger.warning("Skipping malformed order on line %d of %s: %s", lineno, in_path, exc)
                continue

            if len(batch) >= batch_size:
                flush(fout)

        if batch:
            flush(fout)

    logger.info("Wrote %d rows to %s", written, out_path)
    return written
