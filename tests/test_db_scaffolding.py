from fastapi.testclient import TestClient
from sqlalchemy import inspect

from restaurant_inventory.app import create_app
from restaurant_inventory.db import Database
from restaurant_inventory.db_models import ActivityLogORM, InventoryItemORM, UserORM
from restaurant_inventory.seed import DEMO_ADMIN_ID, DEMO_STAFF_EMAIL, seed_demo_data


def test_db_scaffolding_creates_tables(tmp_path):
    database = Database(f"sqlite:///{tmp_path / 'scaffold.db'}")
    database.init_db()
    with database.session() as db:
        user = UserORM(name="Demo Owner", email="owner@example.com", hashed_password="x", role="admin")
        db.add(user)
        db.commit()
        db.refresh(user)
        assert user.id
        assert user.status == "active"
    database.dispose()


def test_seed_demo_data_is_idempotent(tmp_path):
    database = Database(f"sqlite:///{tmp_path / 'seed.db'}")
    database.init_db()
    seed_demo_data(database)
    seed_demo_data(database)

    with database.session() as db:
        assert db.get(UserORM, DEMO_ADMIN_ID).role == "admin"
        chef = db.query(UserORM).filter(UserORM.email == DEMO_STAFF_EMAIL).one()
        assert chef.admin_id == DEMO_ADMIN_ID
        assert db.query(InventoryItemORM).filter(InventoryItemORM.owner_id == DEMO_ADMIN_ID).count() == 6
        removals = db.query(ActivityLogORM).filter(ActivityLogORM.type == "removed").all()
        assert [r.quantity for r in removals] == ["-2 kg"]
        assert removals[0].user_id == chef.id
    database.dispose()


def test_app_creates_tables_on_startup(settings, tmp_path):
    app = create_app(settings=settings)
    # Building the app must not touch the database file.
    assert not (tmp_path / "inventory.db").exists()

    with TestClient(app):
        tables = set(inspect(app.state.database.engine).get_table_names())
    assert {"users", "inventory_items", "activity_logs"} <= tables
