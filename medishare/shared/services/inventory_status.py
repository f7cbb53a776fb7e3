# medishare/shared/services/inventory_status.py
import math
from datetime import date, datetime, time
from typing import Optional, Union

from medishare.config.settings import settings
from medishare.shared.schemas.enums import InventoryStatusEnum

SECONDS_PER_DAY = 24 * 60 * 60


class InventoryStatusService:
    """Derived stock classification for inventory items"""

    @staticmethod
    def days_until_expiry(
        expiry_date: Union[date, datetime],
        now: Optional[datetime] = None
    ) -> int:
        """
        Whole days left before expiry, rounded up.

        A plain date is taken as midnight at the start of that day. The
        result is negative once the item has expired.
        """
        now = now or datetime.now()
        if not isinstance(expiry_date, datetime):
            expiry_date = datetime.combine(expiry_date, time.min)
        delta = expiry_date - now
        return math.ceil(delta.total_seconds() / SECONDS_PER_DAY)

    @staticmethod
    def classify(
        quantity: int,
        expiry_date: Union[date, datetime],
        now: Optional[datetime] = None,
        low_stock_threshold: Optional[int] = None,
        expiring_soon_days: Optional[int] = None
    ) -> InventoryStatusEnum:
        """Expiry outranks stock level: Expired, Expiring Soon, Low Stock, In Stock"""
        if low_stock_threshold is None:
            low_stock_threshold = settings.low_stock_threshold
        if expiring_soon_days is None:
            expiring_soon_days = settings.expiring_soon_days

        days = InventoryStatusService.days_until_expiry(expiry_date, now)

        if days < 0:
            return InventoryStatusEnum.EXPIRED
        if days < expiring_soon_days:
            return InventoryStatusEnum.EXPIRING_SOON
        if quantity < low_stock_threshold:
            return InventoryStatusEnum.LOW_STOCK
        return InventoryStatusEnum.IN_STOCK

    @staticmethod
    def refresh(item, now: Optional[datetime] = None) -> str:
        """Recompute and store ``item.status`` from its quantity and expiry"""
        item.status = InventoryStatusService.classify(item.quantity, item.expiry_date, now).value
        return item.status
