from __future__ import annotations

import logging
from decimal import Decimal
from typing import Callable, Dict, List, Optional, Union

from hotelkeeper.adapters.base import StateStore
from hotelkeeper.exceptions import (
    PaymentDeclinedError,
    ReservationNotFoundError,
    RoomNotFoundError,
    RoomOccupiedError,
    SaveError,
    StateNotFoundError,
)
from hotelkeeper.models import HotelState, Reservation, Room

logger = logging.getLogger(__name__)

PaymentDecision = Union[bool, Callable[[Decimal], bool]]

DEFAULT_NIGHTS_PER_STAY = 3

# (room number, category, nightly price)
DEFAULT_ROOMS = (
    (101, "Single", "79.99"),
    (102, "Double", "99.99"),
    (103, "Double", "99.99"),
    (201, "Deluxe Double", "129.99"),
    (202, "Suite", "199.99"),
    (301, "Single", "85.00"),
)


def initialize_defaults() -> List[Room]:
    """Seed room layout used when no saved state exists."""
    return [Room(number, room_type, Decimal(price)) for number, room_type, price in DEFAULT_ROOMS]


class InventoryService:
    """
    Owns the in-memory hotel state and is the only place that mutates it.
    Every successful booking or cancellation writes the full state through
    the store. If that write fails the mutation is undone and SaveError
    propagates, so memory never runs ahead of disk.
    """

    def __init__(
        self,
        store: StateStore,
        state: Optional[HotelState] = None,
        nights_per_stay: int = DEFAULT_NIGHTS_PER_STAY,
    ):
        self.store = store
        self.state = state if state is not None else HotelState()
        self.nights_per_stay = nights_per_stay

    # ------------------------------------
    # Lifecycle
    # ------------------------------------
    def initialize_defaults(self) -> List[Room]:
        return initialize_defaults()

    def start(self) -> HotelState:
        """
        Loads the saved state, or seeds the default rooms on first run.
        CorruptStateError is not handled here; a corrupt store stops startup.
        """
        try:
            self.state = self.store.load()
        except StateNotFoundError:
            self.state = HotelState.from_rooms(self.initialize_defaults())
            logger.info(f"No saved data found. Default hotel layout ({len(self.state.rooms)} rooms) created.")
        return self.state

    def save(self) -> None:
        self.store.save(self.state)

    # ------------------------------------
    # Queries
    # ------------------------------------
    def find_room(self, room_number: int) -> Optional[Room]:
        return self.state.rooms.get(room_number)

    def list_available(self, type_filter: Optional[str] = None) -> Dict[str, List[Room]]:
        """
        Groups available rooms by category.

        A non-empty `type_filter` keeps only rooms whose category matches it
        case-insensitively. Rooms inside a group keep the room-list order;
        groups are returned in lexicographic order of their category.
        """
        wanted = (type_filter or "").strip().casefold()
        groups: Dict[str, List[Room]] = {}
        for room in self.state.room_list():
            if not room.available:
                continue
            if wanted and room.room_type.casefold() != wanted:
                continue
            groups.setdefault(room.room_type, []).append(room)
        return {room_type: groups[room_type] for room_type in sorted(groups)}

    def list_all(self) -> List[Reservation]:
        return self.state.sorted_reservations()

    def get_reservation(self, reservation_id: int) -> Reservation:
        reservation = self.state.reservations.get(reservation_id)
        if reservation is None:
            raise ReservationNotFoundError(f"Reservation ID {reservation_id} not found.")
        return reservation

    # ------------------------------------
    # Booking
    # ------------------------------------
    def _bookable_room(self, room_number: int) -> Room:
        room = self.find_room(room_number)
        if room is None:
            raise RoomNotFoundError(f"Room {room_number} not found.")
        if not room.available:
            raise RoomOccupiedError(f"Room {room_number} is currently occupied.")
        return room

    def quote(self, room_number: int) -> Decimal:
        """Total a booking of this room would cost right now."""
        room = self._bookable_room(room_number)
        return room.price * self.nights_per_stay

    def book(
        self,
        room_number: int,
        guest_name: str,
        check_in: str,
        check_out: str,
        payment: PaymentDecision,
    ) -> Reservation:
        """
        Books an available room.

        `payment` is either the payment outcome itself or a callable that
        receives the total cost and returns it. Nothing is changed or saved
        unless the room exists, is free and the payment is approved.
        """
        room = self._bookable_room(room_number)
        total_cost = room.price * self.nights_per_stay

        approved = payment(total_cost) if callable(payment) else bool(payment)
        if not approved:
            logger.info(f"Payment declined for room {room_number} ({total_cost})")
            raise PaymentDeclinedError(f"Payment of {total_cost} for room {room_number} was declined.")

        room.available = False
        reservation_id = self.state.allocate_reservation_id()
        reservation = Reservation(
            reservation_id=reservation_id,
            room_number=room.room_number,
            guest_name=guest_name,
            check_in_date=check_in,
            check_out_date=check_out,
            total_cost=total_cost,
            room_type=room.room_type,
        )
        self.state.reservations[reservation_id] = reservation

        try:
            self.save()
        except SaveError:
            del self.state.reservations[reservation_id]
            self.state.next_reservation_id = reservation_id
            room.available = True
            logger.error(f"Booking of room {room_number} reverted, state could not be saved")
            raise

        logger.info(f"Reservation {reservation_id} created for {guest_name}, room {room_number}")
        return reservation

    def cancel(self, reservation_id: int) -> Reservation:
        reservation = self.get_reservation(reservation_id)

        del self.state.reservations[reservation_id]
        room = self.state.rooms[reservation.room_number]
        room.available = True

        try:
            self.save()
        except SaveError:
            self.state.reservations[reservation_id] = reservation
            room.available = False
            logger.error(f"Cancellation of reservation {reservation_id} reverted, state could not be saved")
            raise

        logger.info(f"Reservation {reservation_id} cancelled, room {room.room_number} is available")
        return reservation
