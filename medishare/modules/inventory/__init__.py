# medishare/modules/inventory/__init__.py
"""
Inventory module - medicine catalogue and clinic stock

- Medicines are created on demand while entering inventory
- Item status (In Stock, Low Stock, Expiring Soon, Expired) is derived
"""

from .router import router
from .service import InventoryService
from .repository import InventoryRepository

__all__ = [
    "router",
    "InventoryService",
    "InventoryRepository"
]
