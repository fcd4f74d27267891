from .console import ConsoleChannel, BookingRequest, RoomSelection

__all__ = [
    "ConsoleChannel",
    "BookingRequest",
    "RoomSelection",
]
