from datetime import date, datetime, timedelta
from types import SimpleNamespace

import pytest

from medishare.shared.schemas.enums import InventoryStatusEnum
from medishare.shared.services.inventory_status import InventoryStatusService

NOW = datetime(2026, 3, 1, 9, 30)


@pytest.mark.parametrize("quantity, days, expected", [
    (1000, -1, InventoryStatusEnum.EXPIRED),
    (10, -30, InventoryStatusEnum.EXPIRED),
    (1000, 10, InventoryStatusEnum.EXPIRING_SOON),
    (100, 89, InventoryStatusEnum.EXPIRING_SOON),
    (499, 200, InventoryStatusEnum.LOW_STOCK),
    (500, 200, InventoryStatusEnum.IN_STOCK),
])
def test_classify(quantity, days, expected):
    expiry = (NOW + timedelta(days=days)).date()

    assert InventoryStatusService.classify(quantity, expiry, now=NOW) == expected


def test_days_until_expiry_from_plain_date():
    # midnight of 11 March is 9 days 14.5 hours away
    assert InventoryStatusService.days_until_expiry(date(2026, 3, 11), now=NOW) == 10


def test_days_until_expiry_on_expiry_day_is_zero():
    assert InventoryStatusService.days_until_expiry(date(2026, 3, 1), now=NOW) == 0


def test_refresh_updates_item_status():
    item = SimpleNamespace(quantity=20, expiry_date=date(2027, 1, 1), status="In Stock")

    assert InventoryStatusService.refresh(item, now=NOW) == "Low Stock"
    assert item.status == "Low Stock"


def test_custom_thresholds():
    expiry = (NOW + timedelta(days=100)).date()

    status = InventoryStatusService.classify(
        50, expiry, now=NOW, low_stock_threshold=10, expiring_soon_days=120
    )

    assert status == InventoryStatusEnum.EXPIRING_SOON
