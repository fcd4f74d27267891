from __future__ import annotations
from dataclasses import dataclass, field, fields
from decimal import Decimal, InvalidOperation
from typing import Any, ClassVar, Dict, Union


def to_money(value: Union[Decimal, float, int, str]) -> Decimal:
    """Converts a price-like value to Decimal without float artefacts."""
    if isinstance(value, bool):
        raise ValueError(f"Invalid amount: {value!r}")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except InvalidOperation as exc:
        raise ValueError(f"Invalid amount: {value!r}") from exc
    # NaN and Infinity parse fine but cannot be compared or charged
    if not amount.is_finite():
        raise ValueError(f"Amount must be finite: {value!r}")
    return amount


def format_money(amount: Decimal) -> str:
    return f"${amount.quantize(Decimal('0.01'))}"


@dataclass
class Room:
    """Hotel room model."""

    room_number: int
    room_type: str  # e.g. "Single", "Double", "Suite"
    price: Decimal  # nightly rate
    available: bool = field(default=True)

    STATUS_AVAILABLE: ClassVar[str] = "AVAILABLE"
    STATUS_OCCUPIED: ClassVar[str] = "OCCUPIED"

    def __post_init__(self) -> None:
        if isinstance(self.room_number, bool) or not isinstance(self.room_number, int):
            raise ValueError(f"Room number must be an integer, got {self.room_number!r}")
        if self.room_number <= 0:
            raise ValueError(f"Room number must be positive, got {self.room_number}")
        self.price = to_money(self.price)
        if self.price < 0:
            raise ValueError(f"Room {self.room_number} has a negative price: {self.price}")
        self.available = bool(self.available)

    @property
    def status(self) -> str:
        return self.STATUS_AVAILABLE if self.available else self.STATUS_OCCUPIED

    def __str__(self) -> str:
        return (
            f"Room {self.room_number} | Category: {self.room_type} | "
            f"Price: {format_money(self.price)}/night | Status: {self.status}"
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "room_number": self.room_number,
            "room_type": self.room_type,
            "price": str(self.price),
            "available": self.available,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Room:
        field_names = {f.name for f in fields(cls)}
        filtered_data = {k: v for k, v in data.items() if k in field_names}
        return cls(**filtered_data)
