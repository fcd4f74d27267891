"""
Console menu channel: the interactive front end over InventoryService.
"""
from __future__ import annotations

import logging
from decimal import Decimal
from typing import Callable, Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError

from hotelkeeper.exceptions import HotelKeeperError
from hotelkeeper.models import Reservation, Room, parse_reservation_id
from hotelkeeper.models.room import format_money
from hotelkeeper.services import InventoryService, PaymentService

logger = logging.getLogger(__name__)

RULE = "==================================="


# --- INPUT SCHEMAS ---

class RoomSelection(BaseModel):
    """Room number typed by the operator."""
    room_number: int = Field(gt=0, description="Room number (positive integer)")


class BookingRequest(RoomSelection):
    """Everything the operator enters for a booking."""
    guest_name: str = Field(description="Guest full name")
    check_in: str = Field(description="Check-in date (YYYY-MM-DD), not validated")
    check_out: str = Field(description="Check-out date (YYYY-MM-DD), not validated")


class ConsoleChannel:
    def __init__(
        self,
        service: InventoryService,
        input_func: Optional[Callable[[str], str]] = None,
        output: Optional[Callable[[str], None]] = None,
        payment: Optional[Callable[[Decimal], bool]] = None,
        title: str = "HOTEL MANAGEMENT SYSTEM",
    ):
        self.service = service
        self._input = input_func or input
        self._output = output or print
        self.payment = payment or PaymentService(input_func=self._input, output=self._output)
        self.title = title
        self._actions: Dict[str, Callable[[], None]] = {
            "1": self.search_availability,
            "2": self.make_reservation,
            "3": self.cancel_reservation,
            "4": self.show_reservations,
        }

    # ------------------------------------
    # Rendering
    # ------------------------------------
    def show_availability(self, type_filter: str = "") -> None:
        groups = self.service.list_available(type_filter)
        if not groups:
            self._output("\n--- No rooms are currently available matching your criteria. ---")
            return

        self._output("\n=== AVAILABLE ROOMS BY CATEGORY ===")
        for room_type, rooms in groups.items():
            self._output(f"\n[ {room_type.upper()} ] ({len(rooms)} available)")
            self._print_rooms(rooms)
        self._output(RULE)

    def _print_rooms(self, rooms: List[Room]) -> None:
        for room in rooms:
            self._output(str(room))

    def show_reservations(self) -> None:
        reservations = self.service.list_all()
        if not reservations:
            self._output("\n--- No active reservations found. ---")
            return
        self._output("\n=== ALL ACTIVE BOOKING DETAILS ===")
        for reservation in reservations:
            self._output(str(reservation))
        self._output(RULE)

    def _print_menu(self) -> None:
        self._output("\n=============================================")
        self._output(f"| {self.title.center(41)} |")
        self._output("=============================================")
        self._output("1. Search & Check Room Availability")
        self._output("2. Make a Reservation (Includes Payment)")
        self._output("3. Cancel a Reservation")
        self._output("4. View All Booking Details")
        self._output("5. Exit System")
        self._output("---------------------------------------------")

    # ------------------------------------
    # Actions
    # ------------------------------------
    def search_availability(self) -> None:
        type_filter = self._input("Enter room type to filter (e.g., Single, Suite) or press Enter for all: ")
        self.show_availability(type_filter.strip())

    def _read_room_number(self) -> Optional[int]:
        raw = self._input("\nEnter desired Room Number: ").strip()
        try:
            return RoomSelection(room_number=raw).room_number
        except ValidationError:
            self._output("Invalid input. Please enter a room number.")
            return None

    def make_reservation(self) -> None:
        self.show_availability("")
        room_number = self._read_room_number()
        if room_number is None:
            return

        # fail fast before asking for guest details
        total = self.service.quote(room_number)

        request = BookingRequest(
            room_number=room_number,
            guest_name=self._input("Enter Guest Name: "),
            check_in=self._input("Enter Check-in Date (YYYY-MM-DD): "),
            check_out=self._input("Enter Check-out Date (YYYY-MM-DD): "),
        )
        self._output(
            f"\nSimulated Total Cost (for {self.service.nights_per_stay} nights): {format_money(total)}"
        )

        reservation = self.service.book(
            request.room_number,
            request.guest_name,
            request.check_in,
            request.check_out,
            payment=self.payment,
        )
        self._report_booking(reservation)

    def _report_booking(self, reservation: Reservation) -> None:
        self._output("\n*** BOOKING SUCCESS! ***")
        self._output(f"Reservation ID: {reservation.reservation_id} ({reservation.get_reference_code()})")
        self._output(f"Booking confirmed for {reservation.guest_name}.")
        self._output(str(reservation))

    def cancel_reservation(self) -> None:
        self.show_reservations()
        raw = self._input("\nEnter Reservation ID to cancel: ")
        try:
            reservation_id = parse_reservation_id(raw)
        except ValueError:
            self._output("Invalid input. Please enter a reservation ID.")
            return

        reservation = self.service.cancel(reservation_id)
        self._output("\n*** CANCELLATION SUCCESSFUL ***")
        self._output(f"Reservation {reservation_id} for {reservation.guest_name} has been cancelled.")
        self._output(f"Room {reservation.room_number} is now available.")

    def shutdown(self) -> None:
        self.service.save()
        self._output("\nSystem shutting down. Data saved. Goodbye!")

    # ------------------------------------
    # Loop
    # ------------------------------------
    def run(self) -> None:
        while True:
            self._print_menu()
            try:
                choice = self._input("Enter your choice (1-5): ").strip()
            except EOFError:
                choice = "5"

            if choice == "5":
                # a failed final save is not recoverable from the menu
                self.shutdown()
                return

            try:
                action = self._actions.get(choice)
                if action is None:
                    self._output("\nInvalid choice. Please enter a number between 1 and 5.")
                    continue
                action()
            except HotelKeeperError as e:
                logger.info(f"Operation failed: {e}")
                self._output(f"\nError: {e}")
