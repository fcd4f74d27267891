"""
Base configuration abstractions for Hotelkeeper.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from hotelkeeper.adapters.base import StateStore
from hotelkeeper.services.inventory_service import InventoryService


class HotelKeeperConfig(ABC):
    """Abstract configuration contract for the booking manager."""

    @abstractmethod
    def get_database_url(self) -> str:
        """Return database URL used by the persistence layer."""

    @abstractmethod
    def create_store(self) -> StateStore:
        """
        Create and return the state store for this configuration.
        Concrete configs decide the backend and its connection parameters.
        Returns:
            StateStore: store instance, not yet loaded
        """

    def get_hotel_display_name(self) -> str:
        """Human friendly hotel label for the console banner."""
        return "Hotel Management System"

    def get_nights_per_stay(self) -> int:
        """Number of nights every booking is charged for. Default: 3"""
        return 3

    def get_log_level(self) -> str:
        return "WARNING"

    def create_service(self) -> InventoryService:
        """Build the inventory service on top of `create_store()`."""
        return InventoryService(self.create_store(), nights_per_stay=self.get_nights_per_stay())
