"""
Caller-side orchestration around the transformer: the polling job and the
webhook follow-up. Duplicate detection and persistence are injected as
callables so the transformer itself stays free of I/O.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional

from orderbridge.core import OrderTransformer
from orderbridge.core.path import to_str
from orderbridge.core.types import FlatRecord
from orderbridge.rest.client import ShopifyOrdersClient
from orderbridge.rest.exceptions import ShopifyClientError
from orderbridge.rest.models import SyncResult, WebhookOrderRef

logger = logging.getLogger(__name__)

IsProcessed = Callable[[str], bool]
SaveRecords = Callable[[Dict[str, Any], List[FlatRecord]], None]


def process_orders(
    orders: Iterable[Dict[str, Any]],
    transformer: OrderTransformer,
    *,
    is_processed: Optional[IsProcessed] = None,
    save: Optional[SaveRecords] = None,
    store: Optional[str] = None,
) -> SyncResult:
    """
    Transform each order that has not been processed yet and hand the records
    to ``save``. A failure on one order is recorded and the batch continues.
    """
    result = SyncResult(store=store)
    for order in orders:
        result.fetched += 1
        order_id = to_str(order.get("id"))
        name = to_str(order.get("name")) or order_id
        try:
            if is_processed is not None and order_id and is_processed(order_id):
                logger.debug("Order %s already processed, skipping", name)
                result.skipped += 1
                continue

            records = transformer.transform(order)
            if save is not None:
                save(order, records)

            result.records[order_id or name] = records
            result.saved += 1
        except Exception as err:
            logger.exception("Error processing order %s", name)
            result.errors.append(f"Order {order_id or name}: {err}")

    logger.info(
        "Processed store %s: fetched=%d saved=%d skipped=%d errors=%d",
        store or "-", result.fetched, result.saved, result.skipped, len(result.errors),
    )
    return result


def poll_store(
    client: ShopifyOrdersClient,
    transformer: OrderTransformer,
    *,
    is_processed: Optional[IsProcessed] = None,
    save: Optional[SaveRecords] = None,
    limit: int = 200,
) -> SyncResult:
    try:
        orders = client.fetch_orders(limit=limit)
    except ShopifyClientError as err:
        logger.error("Failed to fetch orders from %s: %s", client.shop_domain, err)
        return SyncResult(store=client.shop_domain, errors=[f"Failed to fetch: {err}"])

    return process_orders(orders, transformer, is_processed=is_processed, save=save, store=client.shop_domain)


def process_webhook(
    ref: WebhookOrderRef,
    client: ShopifyOrdersClient,
    transformer: OrderTransformer,
    *,
    save: Optional[SaveRecords] = None,
) -> Optional[List[FlatRecord]]:
    """
    Webhook bodies can be partial, so the complete order is fetched first.
    Returns None when the order no longer exists upstream; re-delivered
    webhooks re-transform and overwrite through ``save``.
    """
    order = client.fetch_order(ref.order_id)
    if order is None:
        logger.warning("Order %s not found upstream, skipping webhook", ref.order_id)
        return None

    records = transformer.transform(order)
    if save is not None:
        save(order, records)
    return records
