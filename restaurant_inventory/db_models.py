from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String, Text

from restaurant_inventory.db import Base


def _uuid_str() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    """Naive UTC timestamp, the form every DateTime column stores."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class UserORM(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True, default=_uuid_str)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False, unique=True, index=True)
    hashed_password = Column(String, nullable=False)
    role = Column(String, nullable=False, default="staff")  # admin | manager | staff
    department = Column(String, nullable=True)  # management | kitchen | service
    status = Column(String, nullable=False, default="active")
    # Owning admin for managers and staff; NULL for admins.
    admin_id = Column(String, ForeignKey("users.id"), nullable=True, index=True)
    last_active = Column(DateTime, nullable=False, default=utcnow)

    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)


class InventoryItemORM(Base):
    __tablename__ = "inventory_items"

    id = Column(String, primary_key=True, default=_uuid_str)
    name = Column(String, nullable=False)
    category = Column(String, nullable=False, index=True)
    current_stock = Column(Float, nullable=False, default=0.0)
    min_stock = Column(Float, nullable=False, default=0.0)
    unit = Column(String, nullable=False)
    status = Column(String, nullable=False, default="good", index=True)
    percent_remaining = Column(Float, nullable=False, default=100.0)
    last_updated = Column(DateTime, nullable=False, default=utcnow)

    owner_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    created_by = Column(String, ForeignKey("users.id"), nullable=False)
    created_by_name = Column(String, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    version = Column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}


class ActivityLogORM(Base):
    __tablename__ = "activity_logs"

    id = Column(String, primary_key=True, default=_uuid_str)
    type = Column(String, nullable=False, index=True)  # added | removed | adjusted
    # Plain reference: log rows outlive the item they describe.
    item_id = Column(String, nullable=False, index=True)
    item_name = Column(String, nullable=False)
    quantity = Column(String, nullable=False)
    timestamp = Column(DateTime, nullable=False, default=utcnow, index=True)
    user_id = Column(String, nullable=False, index=True)
    user_name = Column(String, nullable=False)
    notes = Column(Text, nullable=False, default="")
    owner_id = Column(String, nullable=False, index=True)

    stock_before = Column(Float, nullable=True)
    stock_after = Column(Float, nullable=True)
