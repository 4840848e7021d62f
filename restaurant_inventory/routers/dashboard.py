from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from restaurant_inventory.analytics import dashboard_summary, monthly_overview
from restaurant_inventory.currency import format_currency, normalize_currency_code
from restaurant_inventory.db import get_db
from restaurant_inventory.db_models import UserORM
from restaurant_inventory.deps import get_current_user
from restaurant_inventory.rate_limit import rate_limited
from restaurant_inventory.schemas import DashboardSummary, OverviewResponse

router = APIRouter(tags=["dashboard"])


@router.get("/dashboard", response_model=DashboardSummary, dependencies=[Depends(rate_limited(50))])
def get_dashboard(
    currency: Optional[str] = Query(None),
    user: UserORM = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> DashboardSummary:
    code = normalize_currency_code(currency) if currency else None
    summary = dashboard_summary(db, user)
    if code:
        summary.currency = code
        summary.monthlyUsageFormatted = format_currency(summary.monthlyUsage, code)
    return summary


@router.get("/analytics/overview", response_model=OverviewResponse, dependencies=[Depends(rate_limited(20))])
def get_overview(
    months: int = Query(6, ge=1, le=24),
    user: UserORM = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> OverviewResponse:
    return OverviewResponse(data=monthly_overview(db, user, months_back=months))
