import pytest


def test_create_item_computes_status(client, admin, add_item):
    _, headers = admin
    good = add_item(headers, name="Rice", category="dry-goods", current=100, minimum=50)
    assert good["percentRemaining"] == pytest.approx(200)
    assert good["status"] == "good"

    critical = add_item(headers, name="Beef", category="meat", current=10, minimum=50)
    assert critical["percentRemaining"] == pytest.approx(20)
    assert critical["status"] == "critical"

    no_threshold = add_item(headers, name="Salt", category="dry-goods", current=0, minimum=0)
    assert no_threshold["percentRemaining"] == 100
    assert no_threshold["status"] == "good"


def test_create_item_rejects_invalid_payload(client, admin):
    _, headers = admin
    negative = client.post(
        "/inventory",
        json={"name": "Rice", "category": "dry-goods", "currentStock": -1, "minStock": 5, "unit": "kg"},
        headers=headers,
    )
    assert negative.status_code == 400
    assert "currentStock" in negative.json()["detail"]

    bad_category = client.post(
        "/inventory",
        json={"name": "Rice", "category": "candy", "currentStock": 1, "minStock": 5, "unit": "kg"},
        headers=headers,
    )
    assert bad_category.status_code == 400

    assert client.get("/inventory", headers=headers).json()["items"] == []


def test_list_filters_by_category_and_status(client, admin, add_item):
    _, headers = admin
    add_item(headers, name="Beef", category="meat", current=1, minimum=10)
    add_item(headers, name="Milk", category="dairy", current=4, minimum=10)
    add_item(headers, name="Cola", category="beverages", current=40, minimum=10)

    meat = client.get("/inventory", params={"category": "meat"}, headers=headers).json()["items"]
    assert [i["name"] for i in meat] == ["Beef"]

    low = client.get("/inventory", params={"status": "warning,critical"}, headers=headers).json()["items"]
    assert sorted(i["name"] for i in low) == ["Beef", "Milk"]

    everything = client.get("/inventory", params={"category": "all", "status": "all"}, headers=headers).json()
    assert len(everything["items"]) == 3
    # Newest first.
    assert everything["items"][0]["name"] == "Cola"


def test_get_item_and_missing_item(client, admin, add_item):
    _, headers = admin
    item = add_item(headers)
    resp = client.get(f"/inventory/{item['id']}", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["item"]["name"] == "Tomatoes"

    missing = client.get("/inventory/does-not-exist", headers=headers)
    assert missing.status_code == 404
    assert missing.json() == {"detail": "Inventory item not found"}


def test_update_item_recomputes_status_and_logs_stock_change(client, admin, add_item):
    user, headers = admin
    item = add_item(headers, current=10, minimum=20)

    renamed = client.put(f"/inventory/{item['id']}", json={"name": "Roma Tomatoes", "minStock": 5}, headers=headers)
    assert renamed.status_code == 200
    assert renamed.json()["item"]["name"] == "Roma Tomatoes"
    assert renamed.json()["item"]["status"] == "good"
    assert client.get("/activity", headers=headers).json()["activities"] == []

    restocked = client.put(
        f"/inventory/{item['id']}",
        json={"currentStock": 1, "notes": "stock count"},
        headers=headers,
    )
    assert restocked.status_code == 200
    assert restocked.json()["item"]["currentStock"] == 1
    assert restocked.json()["item"]["status"] == "critical"

    activities = client.get("/activity", headers=headers).json()["activities"]
    assert len(activities) == 1
    assert activities[0]["type"] == "adjusted"
    assert activities[0]["quantity"] == "1 kg"
    assert activities[0]["notes"] == "stock count"
    assert activities[0]["user"] == user["id"]
    assert activities[0]["stockBefore"] == 10
    assert activities[0]["stockAfter"] == 1


def test_update_rejects_negative_stock(client, admin, add_item):
    _, headers = admin
    item = add_item(headers, current=10)
    resp = client.put(f"/inventory/{item['id']}", json={"currentStock": -4}, headers=headers)
    assert resp.status_code == 400
    assert client.get(f"/inventory/{item['id']}", headers=headers).json()["item"]["currentStock"] == 10


def test_delete_item_keeps_activity_history(client, admin, add_item):
    _, headers = admin
    item = add_item(headers, current=10)
    client.post("/activity", json={"type": "removed", "item": item["id"], "quantityValue": 3}, headers=headers)

    resp = client.delete(f"/inventory/{item['id']}", headers=headers)
    assert resp.status_code == 200
    assert resp.json() == {"success": True}
    assert client.get(f"/inventory/{item['id']}", headers=headers).status_code == 404
    assert client.delete(f"/inventory/{item['id']}", headers=headers).status_code == 404

    activities = client.get("/activity", headers=headers).json()["activities"]
    assert [a["item"] for a in activities] == [item["id"]]


def test_non_finite_stock_is_rejected(client, admin, add_item):
    _, headers = admin
    json_headers = {**headers, "Content-Type": "application/json"}
    overflow = client.post(
        "/inventory",
        content='{"name": "Rice", "category": "dry-goods", "currentStock": 1e309, "minStock": 10, "unit": "kg"}',
        headers=json_headers,
    )
    assert overflow.status_code == 400
    assert "currentStock" in overflow.json()["detail"]
    assert client.get("/inventory", headers=headers).json()["items"] == []

    item = add_item(headers, current=10, minimum=20)
    edit = client.put(f"/inventory/{item['id']}", content='{"minStock": 1e309}', headers=json_headers)
    assert edit.status_code == 400
    assert client.get(f"/inventory/{item['id']}", headers=headers).json()["item"]["minStock"] == 20

    overview = client.get("/analytics/overview", headers=headers).json()["data"]
    assert overview[-1]["stock"] == 10
