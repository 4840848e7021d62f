import pytest


def test_dashboard_counts_and_usage(client, admin, add_item, add_staff):
    _, headers = admin
    beef = add_item(headers, name="Beef", category="meat", current=30, minimum=10)
    add_item(headers, name="Milk", category="dairy", current=1, minimum=10)
    add_staff(headers)

    client.post("/activity", json={"type": "removed", "item": beef["id"], "quantityValue": 3}, headers=headers)
    client.post("/activity", json={"type": "removed", "item": beef["id"], "quantityValue": 2.5}, headers=headers)
    client.post("/activity", json={"type": "added", "item": beef["id"], "quantityValue": 10}, headers=headers)

    resp = client.get("/dashboard", headers=headers)
    assert resp.status_code == 200
    summary = resp.json()
    assert summary["totalItems"] == 2
    assert summary["lowStockItems"] == 1
    assert summary["activeStaff"] == 1
    # 5.5 kg of meat at 25 per unit.
    assert summary["monthlyUsage"] == pytest.approx(137.5)
    assert summary["currency"] is None


def test_dashboard_currency_formatting(client, admin, add_item):
    _, headers = admin
    item = add_item(headers, name="Rice", category="dry-goods", current=10, minimum=1)
    client.post("/activity", json={"type": "removed", "item": item["id"], "quantityValue": 2}, headers=headers)

    resp = client.get("/dashboard", params={"currency": "eur"}, headers=headers)
    assert resp.status_code == 200
    assert resp.json()["currency"] == "EUR"
    assert resp.json()["monthlyUsageFormatted"] == "€9.20"

    bad = client.get("/dashboard", params={"currency": "XYZ"}, headers=headers)
    assert bad.status_code == 400
    assert bad.json() == {"detail": "Unsupported currency: XYZ"}


def test_analytics_overview_shape(client, admin, add_item):
    _, headers = admin
    item = add_item(headers, current=20, minimum=10)
    client.post("/activity", json={"type": "removed", "item": item["id"], "quantityValue": 3}, headers=headers)
    client.post("/activity", json={"type": "removed", "item": item["id"], "quantityValue": 2.5}, headers=headers)

    data = client.get("/analytics/overview", headers=headers).json()["data"]
    assert len(data) == 6
    assert set(data[-1]) == {"name", "usage", "stock"}
    # Current month: 5.5 used, 14.5 left; the item did not exist before.
    assert data[-1]["usage"] == pytest.approx(5.5)
    assert data[-1]["stock"] == pytest.approx(14.5)
    assert all(point["usage"] == 0 and point["stock"] == 0 for point in data[:-1])

    three = client.get("/analytics/overview", params={"months": 3}, headers=headers).json()["data"]
    assert len(three) == 3
    assert client.get("/analytics/overview", params={"months": 0}, headers=headers).status_code == 400


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}
