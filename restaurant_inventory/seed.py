from __future__ import annotations

from sqlalchemy.orm import Session

from restaurant_inventory.activity_accounting import apply_adjustment
from restaurant_inventory.db import Database
from restaurant_inventory.db_models import InventoryItemORM, UserORM
from restaurant_inventory.security import hash_password
from restaurant_inventory.stock_status import refresh_stock_status

DEMO_ADMIN_ID = "demo-admin"
DEMO_ADMIN_EMAIL = "demo.admin@example.com"
DEMO_STAFF_EMAIL = "demo.chef@example.com"

DEMO_ITEMS = [
    ("Chicken Breast", "meat", 40, 25, "kg"),
    ("Tomatoes", "produce", 8, 30, "kg"),
    ("Whole Milk", "dairy", 12, 20, "liters"),
    ("Basmati Rice", "dry-goods", 60, 40, "kg"),
    ("Olive Oil", "oils", 3, 10, "liters"),
    ("Sparkling Water", "beverages", 48, 24, "units"),
]


def ensure_demo_admin(db: Session) -> UserORM:
    user = db.query(UserORM).filter(UserORM.id == DEMO_ADMIN_ID).first()
    if not user:
        user = UserORM(
            id=DEMO_ADMIN_ID,
            name="Demo Admin",
            email=DEMO_ADMIN_EMAIL,
            hashed_password=hash_password("password"),
            role="admin",
            department="management",
            status="active",
        )
        db.add(user)
        db.commit()
    return user


def seed_demo_data(database: Database) -> None:
    """Seed a demo tenant (admin, one chef, a few items) if it is missing."""
    with database.session() as db:
        admin = ensure_demo_admin(db)

        chef = db.query(UserORM).filter(UserORM.email == DEMO_STAFF_EMAIL).first()
        if not chef:
            chef = UserORM(
                name="Demo Chef",
                email=DEMO_STAFF_EMAIL,
                hashed_password=hash_password("password"),
                role="staff",
                department="kitchen",
                status="active",
                admin_id=admin.id,
            )
            db.add(chef)
            db.flush()

        if db.query(InventoryItemORM).filter(InventoryItemORM.owner_id == admin.id).first():
            db.commit()
            return

        for name, category, current, minimum, unit in DEMO_ITEMS:
            item = InventoryItemORM(
                name=name,
                category=category,
                current_stock=current,
                min_stock=minimum,
                unit=unit,
                owner_id=admin.id,
                created_by=admin.id,
                created_by_name=admin.name,
            )
            refresh_stock_status(item)
            db.add(item)
            db.flush()
            if category == "produce":
                item, entry = apply_adjustment(item, "removed", 2, chef, "Lunch prep")
                db.add(entry)
        db.commit()
