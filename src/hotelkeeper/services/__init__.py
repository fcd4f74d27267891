from .inventory_service import InventoryService, initialize_defaults, DEFAULT_ROOMS
from .payment_service import PaymentService

__all__ = [
    "InventoryService",
    "PaymentService",
    "initialize_defaults",
    "DEFAULT_ROOMS",
]
