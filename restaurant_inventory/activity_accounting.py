"""Stock adjustments and the activity log entries they produce.

Every change to an item's stock goes through :func:`apply_adjustment`, which
mutates the item, re-runs the status classifier and builds the matching log
entry. :func:`record_adjustment` persists both in one transaction and retries
when another request updated the same item first.
"""

from __future__ import annotations

import logging
import math
import re
from decimal import Decimal
from typing import Any, Optional, Tuple

from sqlalchemy.orm import Session

from restaurant_inventory.db import run_with_retry
from restaurant_inventory.db_models import ActivityLogORM, InventoryItemORM, UserORM, utcnow
from restaurant_inventory.errors import ValidationError
from restaurant_inventory.scoping import require_item_in_scope, resolve_tenant_id
from restaurant_inventory.stock_status import refresh_stock_status

logger = logging.getLogger(__name__)

ADJUSTMENT_TYPES = ("added", "removed", "adjusted", "set")
LOG_TYPES = ("added", "removed", "adjusted")

QUANTITY_PATTERN = re.compile(r"^[-+]?(\d+(?:\.\d+)?)")


def normalize_adjustment_type(raw: Any) -> str:
    """Validate an adjustment type; ``set`` is recorded as ``adjusted``."""
    if not isinstance(raw, str) or raw not in ADJUSTMENT_TYPES:
        raise ValidationError(f"Adjustment type must be one of: {', '.join(ADJUSTMENT_TYPES)}")
    return "adjusted" if raw == "set" else raw


def validate_quantity(raw: Any) -> float:
    if isinstance(raw, bool) or raw is None:
        raise ValidationError("Quantity must be a non-negative number.")
    try:
        value = float(raw)
    except (TypeError, ValueError) as exc:
        raise ValidationError("Quantity must be a non-negative number.") from exc
    if not math.isfinite(value) or value < 0:
        raise ValidationError("Quantity must be a non-negative number.")
    return value


def format_quantity_value(value: float) -> str:
    """Render a number without exponent notation or a trailing ``.0``."""
    dec = Decimal(repr(float(value)))
    if dec == dec.to_integral_value():
        return str(int(dec))
    return format(dec.normalize(), "f")


def format_quantity(adjustment_type: str, value: float, unit: str) -> str:
    amount = format_quantity_value(value)
    if adjustment_type == "added":
        return f"+{amount} {unit}"
    if adjustment_type == "removed":
        return f"-{amount} {unit}"
    return f"{amount} {unit}"


def parse_quantity(text: Optional[str]) -> float:
    """Leading numeric magnitude of a log quantity string; 0 when there is none."""
    match = QUANTITY_PATTERN.match((text or "").strip())
    if not match:
        return 0.0
    return float(match.group(1))


def compute_new_stock(adjustment_type: str, current_stock: float, quantity: float) -> float:
    if adjustment_type == "added":
        return current_stock + quantity
    if adjustment_type == "removed":
        return max(0.0, current_stock - quantity)
    return quantity


def build_log_entry(
    item: InventoryItemORM,
    adjustment_type: str,
    quantity: float,
    actor: UserORM,
    notes: Optional[str],
    stock_before: float,
) -> ActivityLogORM:
    return ActivityLogORM(
        type=adjustment_type,
        item_id=item.id,
        item_name=item.name,
        quantity=format_quantity(adjustment_type, quantity, item.unit),
        timestamp=utcnow(),
        user_id=actor.id,
        user_name=actor.name,
        notes=notes or "",
        owner_id=item.owner_id,
        stock_before=stock_before,
        stock_after=item.current_stock,
    )


def apply_adjustment(
    item: InventoryItemORM,
    adjustment_type: Any,
    quantity_value: Any,
    actor: UserORM,
    notes: Optional[str] = None,
) -> Tuple[InventoryItemORM, ActivityLogORM]:
    """Mutate ``item`` for one adjustment and return it with its unsaved log entry."""
    log_type = normalize_adjustment_type(adjustment_type)
    quantity = validate_quantity(quantity_value)

    stock_before = item.current_stock or 0.0
    item.current_stock = compute_new_stock(log_type, stock_before, quantity)
    refresh_stock_status(item)
    return item, build_log_entry(item, log_type, quantity, actor, notes, stock_before)


def record_adjustment(
    db: Session,
    item_id: str,
    adjustment_type: Any,
    quantity_value: Any,
    actor: UserORM,
    notes: Optional[str] = None,
    *,
    max_retries: int = 3,
) -> Tuple[InventoryItemORM, ActivityLogORM]:
    """Apply and persist an adjustment; the stock change and its log commit together."""
    normalize_adjustment_type(adjustment_type)
    validate_quantity(quantity_value)
    resolve_tenant_id(actor)

    def _attempt() -> Tuple[InventoryItemORM, ActivityLogORM]:
        item = require_item_in_scope(db, item_id, actor)
        item, entry = apply_adjustment(item, adjustment_type, quantity_value, actor, notes)
        db.add(entry)
        return item, entry

    item, entry = run_with_retry(db, _attempt, max_retries=max_retries, what=f"inventory item {item_id}")
    db.refresh(item)
    db.refresh(entry)
    logger.info(
        "Recorded %s of %s on item=%s by user=%s (stock %s -> %s)",
        entry.type,
        entry.quantity,
        item.id,
        actor.id,
        entry.stock_before,
        entry.stock_after,
    )
    return item, entry


__all__ = [
    "ADJUSTMENT_TYPES",
    "LOG_TYPES",
    "apply_adjustment",
    "build_log_entry",
    "compute_new_stock",
    "format_quantity",
    "format_quantity_value",
    "normalize_adjustment_type",
    "parse_quantity",
    "record_adjustment",
    "validate_quantity",
]
