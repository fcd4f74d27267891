from __future__ import annotations

from typing import Protocol, runtime_checkable

from hotelkeeper.models import HotelState


@runtime_checkable
class StateStore(Protocol):
    # lifecycle
    def exists(self) -> bool: ...

    # full-state transfer; both directions move rooms, reservations and counter together
    def load(self) -> HotelState: ...
    def save(self, state: HotelState) -> None: ...
