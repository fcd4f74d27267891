from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from hotelkeeper.exceptions import CorruptStateError
from hotelkeeper.models.reservation import Reservation
from hotelkeeper.models.room import Room

FIRST_RESERVATION_ID = 1001


@dataclass
class HotelState:
    """
    The persisted unit: rooms keyed by number, the active reservation table
    and the next reservation id.

    Reservations refer to rooms by number only, so `rooms` is the single
    source of truth for availability.
    """

    rooms: Dict[int, Room] = field(default_factory=dict)
    reservations: Dict[int, Reservation] = field(default_factory=dict)
    next_reservation_id: int = field(default=FIRST_RESERVATION_ID)

    @classmethod
    def from_rooms(cls, rooms: Iterable[Room]) -> HotelState:
        state = cls()
        for room in rooms:
            state.add_room(room)
        return state

    def add_room(self, room: Room) -> None:
        if room.room_number in self.rooms:
            raise ValueError(f"Duplicate room number: {room.room_number}")
        self.rooms[room.room_number] = room

    def room_list(self) -> List[Room]:
        """Rooms in insertion order."""
        return list(self.rooms.values())

    def sorted_reservations(self) -> List[Reservation]:
        return sorted(self.reservations.values(), key=lambda r: r.reservation_id)

    def active_reservation_for(self, room_number: int) -> Optional[Reservation]:
        for reservation in self.reservations.values():
            if reservation.room_number == room_number:
                return reservation
        return None

    def allocate_reservation_id(self) -> int:
        reservation_id = self.next_reservation_id
        self.next_reservation_id += 1
        return reservation_id

    def check_consistency(self) -> None:
        """Raises CorruptStateError if rooms, reservations and counter disagree."""
        holders: Dict[int, List[int]] = {}
        for key, reservation in self.reservations.items():
            if key != reservation.reservation_id:
                raise CorruptStateError(
                    f"Reservation stored under {key} carries id {reservation.reservation_id}"
                )
            if reservation.room_number not in self.rooms:
                raise CorruptStateError(
                    f"Reservation {reservation.reservation_id} references unknown room {reservation.room_number}"
                )
            holders.setdefault(reservation.room_number, []).append(reservation.reservation_id)
            if reservation.reservation_id >= self.next_reservation_id:
                raise CorruptStateError(
                    f"Reservation id {reservation.reservation_id} is not below the next id {self.next_reservation_id}"
                )

        for room in self.rooms.values():
            held_by = holders.get(room.room_number, [])
            if len(held_by) > 1:
                raise CorruptStateError(f"Room {room.room_number} is held by reservations {held_by}")
            if room.available and held_by:
                raise CorruptStateError(
                    f"Room {room.room_number} is marked available but reserved by {held_by[0]}"
                )
            if not room.available and not held_by:
                raise CorruptStateError(f"Room {room.room_number} is occupied without a reservation")
