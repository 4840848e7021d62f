import pytest
from fastapi.testclient import TestClient

from restaurant_inventory.app import create_app
from restaurant_inventory.config import get_settings
from restaurant_inventory.db import Database


def _auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def settings(tmp_path):
    values = get_settings()
    values.update(
        {
            "database_url": f"sqlite:///{tmp_path / 'inventory.db'}",
            "secret_key": "test-secret",
            "auth_bypass": False,
            "seed_demo_data": False,
            "rate_limit_enabled": False,
            "stock_update_max_retries": 3,
        }
    )
    return values


@pytest.fixture
def app(settings):
    application = create_app(settings=settings)
    yield application
    application.state.database.dispose()


@pytest.fixture
def client(app):
    # Entering the client runs the startup hook, which creates the tables.
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def database(app, client) -> Database:
    return app.state.database


@pytest.fixture
def register(client):
    def _register(name="Owner One", email="owner@example.com", password="secret-pass"):
        resp = client.post("/auth/register", json={"name": name, "email": email, "password": password})
        assert resp.status_code == 201, resp.text
        body = resp.json()
        return body["user"], _auth_header(body["access_token"])

    return _register


@pytest.fixture
def admin(register):
    return register()


@pytest.fixture
def add_item(client):
    def _add_item(headers, name="Tomatoes", category="produce", current=10, minimum=20, unit="kg"):
        resp = client.post(
            "/inventory",
            json={"name": name, "category": category, "currentStock": current, "minStock": minimum, "unit": unit},
            headers=headers,
        )
        assert resp.status_code == 201, resp.text
        return resp.json()["item"]

    return _add_item


@pytest.fixture
def add_staff(client):
    def _add_staff(headers, name="Line Cook", email="cook@example.com", role="staff", department="kitchen"):
        resp = client.post(
            "/staff",
            json={"name": name, "email": email, "role": role, "department": department, "password": "cook-pass-1"},
            headers=headers,
        )
        assert resp.status_code == 201, resp.text
        return resp.json()["staff"]

    return _add_staff


@pytest.fixture
def login(client):
    def _login(email, password):
        resp = client.post("/auth/login", json={"email": email, "password": password})
        assert resp.status_code == 200, resp.text
        return _auth_header(resp.json()["access_token"])

    return _login
