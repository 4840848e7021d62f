import pytest

from restaurant_inventory.db_models import InventoryItemORM
from restaurant_inventory.errors import ValidationError
from restaurant_inventory.stock_status import classify, refresh_stock_status


@pytest.mark.parametrize(
    "current,minimum,expected_status",
    [
        (0, 20, "critical"),
        (4, 20, "critical"),
        (5, 20, "warning"),
        (10, 20, "warning"),
        (11, 20, "good"),
        (40, 20, "good"),
    ],
)
def test_classify_tiers(current, minimum, expected_status):
    percent, status = classify(current, minimum)
    assert percent == pytest.approx(current / minimum * 100)
    assert status == expected_status


def test_zero_min_stock_is_always_good():
    assert classify(0, 0) == (100.0, "good")
    assert classify(12, 0) == (100.0, "good")


def test_negative_levels_are_rejected():
    with pytest.raises(ValidationError):
        classify(-1, 10)
    with pytest.raises(ValidationError):
        classify(1, -10)


def test_non_finite_levels_are_rejected():
    with pytest.raises(ValidationError):
        classify(float("inf"), 10)
    with pytest.raises(ValidationError):
        classify(5, float("nan"))


def test_refresh_stock_status_updates_derived_fields():
    item = InventoryItemORM(name="Milk", category="dairy", current_stock=3, min_stock=20, unit="liters")
    refresh_stock_status(item)
    assert item.status == "critical"
    assert item.percent_remaining == pytest.approx(15.0)
    assert item.last_updated is not None

    item.current_stock = 30
    refresh_stock_status(item)
    assert item.status == "good"
    assert item.percent_remaining == pytest.approx(150.0)
