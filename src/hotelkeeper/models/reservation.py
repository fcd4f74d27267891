from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict

from hotelkeeper.models.room import format_money, to_money

REFERENCE_PREFIX = "RSV-"


def parse_reservation_id(reservation_id: Any) -> int:
    """
    Extracts the integer id from a reservation id parameter.
    Accepts plain integers, numeric strings and RSV-XXXXXX codes.
    """
    if isinstance(reservation_id, bool):
        raise ValueError(f"Invalid reservation ID: {reservation_id!r}")
    if isinstance(reservation_id, int):
        return reservation_id

    if isinstance(reservation_id, str):
        value = reservation_id.strip()
        if value.upper().startswith(REFERENCE_PREFIX):
            try:
                return int(value.split("-", 1)[1])
            except (IndexError, ValueError):
                raise ValueError(f"Invalid reservation ID format: {reservation_id}")
        try:
            return int(value)
        except ValueError:
            raise ValueError(f"Invalid reservation ID: {reservation_id}")

    raise ValueError(f"Reservation ID must be int or str, got {type(reservation_id)}")


@dataclass
class Reservation:
    """Booking of one room for one guest, with the cost frozen at booking time."""

    reservation_id: int
    room_number: int
    guest_name: str
    check_in_date: str
    check_out_date: str
    total_cost: Decimal
    room_type: str = ""  # category at booking time, display only

    def __post_init__(self) -> None:
        self.total_cost = to_money(self.total_cost)

    def get_reference_code(self) -> str:
        """Returns an 'RSV-001001' style reference code."""
        return f"{REFERENCE_PREFIX}{self.reservation_id:06d}"

    def __str__(self) -> str:
        return (
            f"| ID: {self.reservation_id} | Guest: {self.guest_name} | "
            f"Room: {self.room_number} ({self.room_type}) | "
            f"Dates: {self.check_in_date} to {self.check_out_date} | "
            f"Total Paid: {format_money(self.total_cost)}"
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "reservation_id": self.reservation_id,
            "room_number": self.room_number,
            "guest_name": self.guest_name,
            "check_in_date": self.check_in_date,
            "check_out_date": self.check_out_date,
            "total_cost": str(self.total_cost),
            "room_type": self.room_type,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Reservation:
        field_names = {f.name for f in cls.__dataclass_fields__.values()}
        filtered_data = {k: v for k, v in data.items() if k in field_names}
        return cls(**filtered_data)
