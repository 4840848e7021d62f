from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from restaurant_inventory.activity_accounting import record_adjustment
from restaurant_inventory.db import get_db
from restaurant_inventory.db_models import ActivityLogORM, UserORM
from restaurant_inventory.deps import get_current_user, get_settings
from restaurant_inventory.rate_limit import rate_limited
from restaurant_inventory.routers.inventory import build_item_read
from restaurant_inventory.schemas import ActivityCreate, ActivityListResponse, ActivityRead, ActivityResponse
from restaurant_inventory.scoping import scope_filter

router = APIRouter(prefix="/activity", tags=["activity"])


def build_activity_read(entry: ActivityLogORM) -> ActivityRead:
    return ActivityRead(
        id=entry.id,
        type=entry.type,
        item=entry.item_id,
        itemName=entry.item_name,
        quantity=entry.quantity,
        timestamp=entry.timestamp,
        user=entry.user_id,
        userName=entry.user_name,
        notes=entry.notes or "",
        stockBefore=entry.stock_before,
        stockAfter=entry.stock_after,
    )


@router.get("", response_model=ActivityListResponse, dependencies=[Depends(rate_limited(100))])
def list_activity(
    type_filter: Optional[str] = Query(None, alias="type"),
    user_filter: Optional[str] = Query(None, alias="user"),
    limit: int = Query(100, ge=1, le=1000),
    user: UserORM = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> ActivityListResponse:
    query = db.query(ActivityLogORM).filter(scope_filter(user, ActivityLogORM))
    if type_filter and type_filter != "all":
        query = query.filter(ActivityLogORM.type == type_filter)
    if user_filter and user_filter != "all":
        query = query.filter(ActivityLogORM.user_name == user_filter)
    entries = query.order_by(ActivityLogORM.timestamp.desc()).limit(limit).all()
    return ActivityListResponse(activities=[build_activity_read(e) for e in entries])


@router.post(
    "",
    response_model=ActivityResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(rate_limited(20))],
)
def create_activity(
    payload: ActivityCreate,
    user: UserORM = Depends(get_current_user),
    db: Session = Depends(get_db),
    settings: Dict[str, Any] = Depends(get_settings),
) -> ActivityResponse:
    item, entry = record_adjustment(
        db,
        payload.item,
        payload.type,
        payload.quantityValue,
        user,
        payload.notes,
        max_retries=settings["stock_update_max_retries"],
    )
    return ActivityResponse(activity=build_activity_read(entry), item=build_item_read(item))
