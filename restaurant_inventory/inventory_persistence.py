from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.orm import Session

from restaurant_inventory.activity_accounting import apply_adjustment
from restaurant_inventory.db import commit_or_raise, run_with_retry
from restaurant_inventory.db_models import InventoryItemORM, UserORM
from restaurant_inventory.schemas import InventoryItemCreate, InventoryItemUpdate
from restaurant_inventory.scoping import require_item_in_scope, resolve_tenant_id
from restaurant_inventory.stock_status import refresh_stock_status

logger = logging.getLogger(__name__)

MANUAL_UPDATE_NOTE = "Stock set from item edit"


def create_item(db: Session, payload: InventoryItemCreate, actor: UserORM) -> InventoryItemORM:
    item = InventoryItemORM(
        name=payload.name.strip(),
        category=payload.category,
        current_stock=payload.currentStock,
        min_stock=payload.minStock,
        unit=payload.unit.strip(),
        owner_id=resolve_tenant_id(actor),
        created_by=actor.id,
        created_by_name=actor.name,
    )
    refresh_stock_status(item)
    db.add(item)
    commit_or_raise(db, "new inventory item")
    db.refresh(item)
    logger.info("Created inventory item id=%s owner=%s by user=%s", item.id, item.owner_id, actor.id)
    return item


def update_item(
    db: Session,
    item_id: str,
    payload: InventoryItemUpdate,
    actor: UserORM,
    *,
    max_retries: int = 3,
) -> InventoryItemORM:
    """Apply an item edit. A changed stock level is booked as an ``adjusted`` entry."""
    changes = payload.model_dump(exclude_unset=True)
    notes: Optional[str] = changes.pop("notes", None)

    def _attempt() -> InventoryItemORM:
        item = require_item_in_scope(db, item_id, actor)
        if changes.get("name") is not None:
            item.name = changes["name"].strip()
        if changes.get("category") is not None:
            item.category = changes["category"]
        if changes.get("unit") is not None:
            item.unit = changes["unit"].strip()
        if changes.get("minStock") is not None:
            item.min_stock = changes["minStock"]

        new_stock = changes.get("currentStock")
        if new_stock is not None and new_stock != item.current_stock:
            item, entry = apply_adjustment(item, "adjusted", new_stock, actor, notes or MANUAL_UPDATE_NOTE)
            db.add(entry)
        else:
            refresh_stock_status(item)
        return item

    item = run_with_retry(db, _attempt, max_retries=max_retries, what=f"inventory item {item_id}")
    db.refresh(item)
    logger.info("Updated inventory item id=%s fields=%s by user=%s", item.id, sorted(changes), actor.id)
    return item


def delete_item(db: Session, item_id: str, actor: UserORM) -> None:
    """Remove an item. Its activity log entries are kept."""
    item = require_item_in_scope(db, item_id, actor)
    db.delete(item)
    commit_or_raise(db, f"deletion of inventory item {item_id}")
    logger.info("Deleted inventory item id=%s by user=%s", item_id, actor.id)
