from .room import Room
from .reservation import Reservation, parse_reservation_id
from .state import HotelState, FIRST_RESERVATION_ID

__all__ = [
    "Room",
    "Reservation",
    "HotelState",
    "FIRST_RESERVATION_ID",
    "parse_reservation_id",
]
