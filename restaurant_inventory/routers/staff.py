from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from restaurant_inventory.db import commit_or_raise, get_db
from restaurant_inventory.db_models import UserORM, utcnow
from restaurant_inventory.deps import get_admin_user
from restaurant_inventory.rate_limit import rate_limited
from restaurant_inventory.routers.auth import ensure_email_unique
from restaurant_inventory.schemas import StaffCreate, StaffListResponse, StaffRead, StaffResponse
from restaurant_inventory.security import hash_password

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/staff", tags=["staff"])


def build_staff_read(user: UserORM) -> StaffRead:
    return StaffRead(
        id=user.id,
        name=user.name,
        email=user.email,
        role=user.role,
        department=user.department,
        status=user.status,
        adminId=user.admin_id,
        lastActive=user.last_active,
    )


@router.get("", response_model=StaffListResponse, dependencies=[Depends(rate_limited(100))])
def list_staff(
    role: Optional[str] = Query(None),
    department: Optional[str] = Query(None),
    user: UserORM = Depends(get_admin_user),
    db: Session = Depends(get_db),
) -> StaffListResponse:
    query = db.query(UserORM).filter(UserORM.admin_id == user.id)
    if role and role != "all":
        query = query.filter(UserORM.role == role)
    if department and department != "all":
        query = query.filter(UserORM.department == department)
    members = query.order_by(UserORM.name.asc()).all()
    return StaffListResponse(staff=[build_staff_read(m) for m in members])


@router.post(
    "",
    response_model=StaffResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(rate_limited(20))],
)
def create_staff(
    payload: StaffCreate,
    user: UserORM = Depends(get_admin_user),
    db: Session = Depends(get_db),
) -> StaffResponse:
    email = payload.email.strip().lower()
    ensure_email_unique(db, email, "Email already in use")

    member = UserORM(
        name=payload.name.strip(),
        email=email,
        hashed_password=hash_password(payload.password),
        role=payload.role,
        department=payload.department,
        status="active",
        last_active=utcnow(),
        admin_id=user.id,
    )
    db.add(member)
    commit_or_raise(db, "new staff member")
    db.refresh(member)
    logger.info("Admin id=%s created staff id=%s role=%s", user.id, member.id, member.role)
    return StaffResponse(staff=build_staff_read(member))
