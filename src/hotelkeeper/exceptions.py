"""Custom exceptions for Hotelkeeper."""
from __future__ import annotations


class HotelKeeperError(Exception):
    """Base exception for all Hotelkeeper errors."""
    pass


class ConfigurationError(HotelKeeperError):
    """Raised when configuration is invalid or missing."""
    pass


class DatabaseError(HotelKeeperError):
    """Raised when persistence operations fail."""
    pass


class StateNotFoundError(DatabaseError):
    """Raised when no persisted state exists yet (expected on first run)."""
    pass


class CorruptStateError(DatabaseError):
    """Raised when persisted state exists but cannot be read back into the model."""
    pass


class SaveError(DatabaseError):
    """Raised when the full state could not be written to storage."""
    pass


class BookingError(HotelKeeperError):
    """Raised when a booking or cancellation request cannot be carried out."""
    pass


class RoomNotFoundError(BookingError):
    """Raised when a room number does not exist."""
    pass


class RoomOccupiedError(BookingError):
    """Raised when the requested room is already booked."""
    pass


class PaymentDeclinedError(BookingError):
    """Raised when the payment for a booking was not approved."""
    pass


class ReservationNotFoundError(BookingError):
    """Raised when a reservation id is not in the active table."""
    pass
