import json
import logging

import pandas as pd

from orderbridge import config
from orderbridge.core import OrderTransformer
from orderbridge.core.io import stream_jsonl_to_csv


def _write_jsonl(path, order):
    second = dict(order, name="#WF1002", line_items=order["line_items"][:1])
    lines = [json.dumps(order), "", "{broken", json.dumps(second)]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")


def test_stream_jsonl_to_csv(tmp_path, order, global_mappings, extract_mappings):
    src, dst = tmp_path / "orders.jsonl", tmp_path / "orders.csv"
    _write_jsonl(src, order)

    written = stream_jsonl_to_csv(OrderTransformer(global_mappings, extract_mappings), str(src), str(dst), batch_size=1)

    df = pd.read_csv(dst, dtype=str, keep_default_na=False)
    assert written == 3
    assert len(df) == 3
    assert list(df["deliveryOrderNo"]) == ["#WF1001", "#WF1001", "#WF1002"]
    assert list(df["deliveryDate"]) == ["20/01/2024"] * 3


def test_stream_jsonl_to_csv_with_labels_and_columns(tmp_path, order):
    src, dst = tmp_path / "orders.jsonl", tmp_path / "orders.csv"
    _write_jsonl(src, order)

    stream_jsonl_to_csv(OrderTransformer(), str(src), str(dst), columns=["deliveryOrderNo", "sku"], use_labels=True)

    df = pd.read_csv(dst, dtype=str, keep_default_na=False)
    assert list(df.columns) == ["Delivery Order (D.O.) No.", "SKU"]
    assert list(df["SKU"]) == ["PROD-001", "PROD-002", "PROD-001"]


def test_engine_config_from_env(monkeypatch):
    monkeypatch.setattr(config, "ORDERBRIDGE_ON_ERROR", "warn")
    monkeypatch.setattr(config, "ORDERBRIDGE_TRACE", True)
    cfg = config.engine_config_from_env()

    assert cfg.default_on_error == "warn"
    assert cfg.trace_enabled is True
    assert isinstance(cfg.logger, logging.Logger)


def test_engine_config_from_env_rejects_unknown_mode(monkeypatch):
    monkeypatch.setattr(config, "ORDERBRIDGE_ON_ERROR", "explode")
    assert config.engine_config_from_env().default_on_error == "blank"
