from src.models.catalog import EquipmentModel, Institution, Service
from src.models.inventory import InventoryRecord
from src.models.user import User

__all__ = [
    "Institution",
    "EquipmentModel",
    "Service",
    "User",
    "InventoryRecord",
]
