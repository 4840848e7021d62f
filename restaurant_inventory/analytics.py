"""Usage, cost and stock rollups over a tenant's items and activity log."""

from __future__ import annotations

import calendar
from collections import defaultdict
from datetime import datetime
from typing import Dict, List, Optional, Sequence, Tuple

from sqlalchemy.orm import Session

from restaurant_inventory.activity_accounting import parse_quantity
from restaurant_inventory.db_models import ActivityLogORM, InventoryItemORM, UserORM, utcnow
from restaurant_inventory.schemas import DashboardSummary, OverviewPoint
from restaurant_inventory.scoping import resolve_tenant_id, scope_filter
from restaurant_inventory.stock_status import LOW_STOCK_STATUSES

CATEGORY_UNIT_COSTS: Dict[str, float] = {
    "meat": 25,
    "dairy": 15,
    "oils": 20,
    "beverages": 12,
    "produce": 8,
    "dry-goods": 5,
}
DEFAULT_UNIT_COST = 10

MONTH_LABELS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

MonthWindow = Tuple[str, datetime, datetime]


def unit_cost_for_category(category: Optional[str]) -> float:
    return CATEGORY_UNIT_COSTS.get(category or "", DEFAULT_UNIT_COST)


def _shift_month(year: int, month: int, delta: int) -> Tuple[int, int]:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def one_month_before(moment: datetime) -> datetime:
    year, month = _shift_month(moment.year, moment.month, -1)
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def month_windows(now: datetime, months_back: int = 6) -> List[MonthWindow]:
    """``(label, start, end)`` for the trailing months, oldest first; ``end`` is exclusive."""
    windows: List[MonthWindow] = []
    for offset in range(months_back - 1, -1, -1):
        year, month = _shift_month(now.year, now.month, -offset)
        next_year, next_month = _shift_month(year, month, 1)
        windows.append(
            (
                MONTH_LABELS[month - 1],
                datetime(year, month, 1),
                datetime(next_year, next_month, 1),
            )
        )
    return windows


def _removed_entries(
    db: Session, actor: UserORM, start: datetime, end: Optional[datetime] = None
) -> List[ActivityLogORM]:
    query = db.query(ActivityLogORM).filter(
        scope_filter(actor, ActivityLogORM),
        ActivityLogORM.type == "removed",
        ActivityLogORM.timestamp >= start,
    )
    if end is not None:
        query = query.filter(ActivityLogORM.timestamp < end)
    return query.all()


def usage_total(entries: Sequence[ActivityLogORM]) -> float:
    return sum((parse_quantity(e.quantity) for e in entries if e.type == "removed"), 0.0)


def usage_cost(db: Session, actor: UserORM, since: datetime, until: Optional[datetime] = None) -> float:
    """Estimated cost of stock removed in the window, priced by item category."""
    entries = _removed_entries(db, actor, since, until)
    if not entries:
        return 0.0
    item_ids = {e.item_id for e in entries}
    categories = dict(
        db.query(InventoryItemORM.id, InventoryItemORM.category).filter(InventoryItemORM.id.in_(item_ids)).all()
    )
    return sum(
        (parse_quantity(e.quantity) * unit_cost_for_category(categories.get(e.item_id)) for e in entries),
        0.0,
    )


def stock_at(item: InventoryItemORM, entries: Sequence[ActivityLogORM], boundary: datetime) -> float:
    """Stock of ``item`` just before ``boundary``, replayed from its time-ordered log entries."""
    if item.created_at is not None and item.created_at >= boundary:
        return 0.0
    before = [e for e in entries if e.timestamp < boundary]
    if before and before[-1].stock_after is not None:
        return before[-1].stock_after
    after = [e for e in entries if e.timestamp >= boundary]
    if after and after[0].stock_before is not None:
        return after[0].stock_before
    return item.current_stock


def monthly_overview(
    db: Session, actor: UserORM, months_back: int = 6, now: Optional[datetime] = None
) -> List[OverviewPoint]:
    now = now or utcnow()
    items = db.query(InventoryItemORM).filter(scope_filter(actor, InventoryItemORM)).all()

    entries_by_item: Dict[str, List[ActivityLogORM]] = defaultdict(list)
    if items:
        rows = (
            db.query(ActivityLogORM)
            .filter(
                scope_filter(actor, ActivityLogORM),
                ActivityLogORM.item_id.in_([i.id for i in items]),
            )
            .order_by(ActivityLogORM.timestamp.asc())
            .all()
        )
        for row in rows:
            entries_by_item[row.item_id].append(row)

    result: List[OverviewPoint] = []
    for label, start, end in month_windows(now, months_back):
        usage = usage_total(_removed_entries(db, actor, start, end))
        stock = sum((stock_at(item, entries_by_item[item.id], end) for item in items), 0.0)
        result.append(OverviewPoint(name=label, usage=usage, stock=stock))
    return result


def dashboard_summary(db: Session, actor: UserORM, now: Optional[datetime] = None) -> DashboardSummary:
    now = now or utcnow()
    tenant_id = resolve_tenant_id(actor)
    items_query = db.query(InventoryItemORM).filter(scope_filter(actor, InventoryItemORM))

    total_items = items_query.count()
    low_stock_items = items_query.filter(InventoryItemORM.status.in_(LOW_STOCK_STATUSES)).count()
    active_staff = (
        db.query(UserORM).filter(UserORM.admin_id == tenant_id, UserORM.status == "active").count()
    )

    return DashboardSummary(
        totalItems=total_items,
        lowStockItems=low_stock_items,
        monthlyUsage=usage_cost(db, actor, one_month_before(now)),
        activeStaff=active_staff,
    )


__all__ = [
    "CATEGORY_UNIT_COSTS",
    "DEFAULT_UNIT_COST",
    "dashboard_summary",
    "month_windows",
    "monthly_overview",
    "one_month_before",
    "stock_at",
    "unit_cost_for_category",
    "usage_cost",
    "usage_total",
]
