from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from restaurant_inventory.db import get_db
from restaurant_inventory.db_models import InventoryItemORM, UserORM
from restaurant_inventory.deps import get_current_user, get_settings
from restaurant_inventory.inventory_persistence import create_item, delete_item, update_item
from restaurant_inventory.rate_limit import rate_limited
from restaurant_inventory.schemas import (
    DeleteResponse,
    InventoryItemCreate,
    InventoryItemListResponse,
    InventoryItemRead,
    InventoryItemResponse,
    InventoryItemUpdate,
)
from restaurant_inventory.scoping import require_item_in_scope, scope_filter

router = APIRouter(prefix="/inventory", tags=["inventory"])


def build_item_read(item: InventoryItemORM) -> InventoryItemRead:
    return InventoryItemRead(
        id=item.id,
        name=item.name,
        category=item.category,
        currentStock=item.current_stock,
        minStock=item.min_stock,
        unit=item.unit,
        status=item.status,
        percentRemaining=item.percent_remaining,
        lastUpdated=item.last_updated,
        createdBy=item.created_by,
        createdByName=item.created_by_name,
        ownerId=item.owner_id,
        createdAt=item.created_at,
    )


def _split_filter(raw: Optional[str]) -> List[str]:
    if not raw or raw == "all":
        return []
    return [part.strip() for part in raw.split(",") if part.strip()]


@router.get("", response_model=InventoryItemListResponse, dependencies=[Depends(rate_limited(100))])
def list_items(
    category: Optional[str] = Query(None),
    status_filter: Optional[str] = Query(None, alias="status"),
    user: UserORM = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> InventoryItemListResponse:
    query = db.query(InventoryItemORM).filter(scope_filter(user, InventoryItemORM))
    if category and category != "all":
        query = query.filter(InventoryItemORM.category == category)
    statuses = _split_filter(status_filter)
    if statuses:
        query = query.filter(InventoryItemORM.status.in_(statuses))
    items = query.order_by(InventoryItemORM.last_updated.desc()).all()
    return InventoryItemListResponse(items=[build_item_read(i) for i in items])


@router.post(
    "",
    response_model=InventoryItemResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(rate_limited(20))],
)
def add_item(
    payload: InventoryItemCreate,
    user: UserORM = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> InventoryItemResponse:
    item = create_item(db, payload, user)
    return InventoryItemResponse(item=build_item_read(item))


@router.get("/{item_id}", response_model=InventoryItemResponse, dependencies=[Depends(rate_limited(100))])
def get_item(
    item_id: str,
    user: UserORM = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> InventoryItemResponse:
    item = require_item_in_scope(db, item_id, user)
    return InventoryItemResponse(item=build_item_read(item))


@router.put("/{item_id}", response_model=InventoryItemResponse, dependencies=[Depends(rate_limited(20))])
def edit_item(
    item_id: str,
    payload: InventoryItemUpdate,
    user: UserORM = Depends(get_current_user),
    db: Session = Depends(get_db),
    settings: Dict[str, Any] = Depends(get_settings),
) -> InventoryItemResponse:
    item = update_item(db, item_id, payload, user, max_retries=settings["stock_update_max_retries"])
    return InventoryItemResponse(item=build_item_read(item))


@router.delete("/{item_id}", response_model=DeleteResponse, dependencies=[Depends(rate_limited(10))])
def remove_item(
    item_id: str,
    user: UserORM = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> DeleteResponse:
    delete_item(db, item_id, user)
    return DeleteResponse(success=True)
