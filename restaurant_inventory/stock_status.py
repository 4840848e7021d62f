from __future__ import annotations

import math
from typing import Literal, Tuple

from restaurant_inventory.db_models import InventoryItemORM, utcnow
from restaurant_inventory.errors import ValidationError

StockStatus = Literal["good", "warning", "critical"]

CRITICAL_THRESHOLD = 20.0
WARNING_THRESHOLD = 50.0

LOW_STOCK_STATUSES: Tuple[str, ...] = ("warning", "critical")


def classify(current_stock: float, min_stock: float) -> Tuple[float, StockStatus]:
    """Return ``(percent_remaining, status)`` for a stock level.

    ``percent <= 20`` is critical, ``20 < percent <= 50`` is a warning and
    anything above is good. An item with ``min_stock == 0`` has no reorder
    threshold and always reports 100% / good.
    """
    if not (math.isfinite(current_stock) and math.isfinite(min_stock)):
        raise ValidationError("Stock levels must be finite numbers.")
    if current_stock < 0 or min_stock < 0:
        raise ValidationError("Stock levels must be non-negative.")
    if min_stock == 0:
        return 100.0, "good"

    percent = (current_stock / min_stock) * 100
    if percent <= CRITICAL_THRESHOLD:
        return percent, "critical"
    if percent <= WARNING_THRESHOLD:
        return percent, "warning"
    return percent, "good"


def refresh_stock_status(item: InventoryItemORM) -> InventoryItemORM:
    """Recompute the derived fields of ``item`` in place; call before every write."""
    percent, status = classify(item.current_stock, item.min_stock)
    item.percent_remaining = percent
    item.status = status
    item.last_updated = utcnow()
    return item


__all__ = [
    "CRITICAL_THRESHOLD",
    "LOW_STOCK_STATUSES",
    "StockStatus",
    "WARNING_THRESHOLD",
    "classify",
    "refresh_stock_status",
]
