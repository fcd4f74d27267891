"""Hotelkeeper - single-user hotel booking manager with persistent state"""

__version__ = "0.1.0"

# Exceptions
from hotelkeeper.exceptions import (
    HotelKeeperError,
    ConfigurationError,
    DatabaseError,
    StateNotFoundError,
    CorruptStateError,
    SaveError,
    BookingError,
    RoomNotFoundError,
    RoomOccupiedError,
    PaymentDeclinedError,
    ReservationNotFoundError,
)

# Models
from hotelkeeper.models import Room, Reservation, HotelState

# Core abstractions
from hotelkeeper.base_config import HotelKeeperConfig

# Config management
from hotelkeeper.config import get_config, set_config

# Adapters
from hotelkeeper.adapters.base import StateStore
from hotelkeeper.adapters.sqlite_adapter import SQLiteStateStore

# Services
from hotelkeeper.services import InventoryService, PaymentService

__all__ = [
    # Version
    "__version__",

    # Core
    "HotelKeeperConfig",

    # Exceptions
    "HotelKeeperError",
    "ConfigurationError",
    "DatabaseError",
    "StateNotFoundError",
    "CorruptStateError",
    "SaveError",
    "BookingError",
    "RoomNotFoundError",
    "RoomOccupiedError",
    "PaymentDeclinedError",
    "ReservationNotFoundError",

    # Models
    "Room",
    "Reservation",
    "HotelState",

    # Config
    "get_config",
    "set_config",

    # Adapters
    "StateStore",
    "SQLiteStateStore",

    # Services
    "InventoryService",
    "PaymentService",
]
