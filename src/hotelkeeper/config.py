from __future__ import annotations

import importlib
import logging
import os
from typing import Optional, Type

from dotenv import load_dotenv

from hotelkeeper.base_config import HotelKeeperConfig
from hotelkeeper.adapters.base import StateStore
from hotelkeeper.adapters.sqlite_adapter import SQLiteStateStore
from hotelkeeper.exceptions import ConfigurationError

load_dotenv()

DEFAULT_CONFIG_CLASS = "hotelkeeper.config.EnvironmentHotelKeeperConfig"
CONFIG_ENV_KEY = "HOTELKEEPER_CONFIG"

logger = logging.getLogger(__name__)


def load_config_class(path: str) -> Type[HotelKeeperConfig]:
    """
    Resolves `package.module.ClassName` or `package.module:ClassName` to a
    HotelKeeperConfig subclass.
    """
    separator = ":" if ":" in path else "."
    module_path, _, class_name = path.rpartition(separator)
    if not module_path or not class_name:
        raise ConfigurationError(f"Invalid config path '{path}'")

    try:
        module = importlib.import_module(module_path)
    except ImportError as exc:
        raise ConfigurationError(f"Could not import module '{module_path}'") from exc

    cls = getattr(module, class_name, None)
    if not (isinstance(cls, type) and issubclass(cls, HotelKeeperConfig)):
        raise ConfigurationError(f"{path} does not name a HotelKeeperConfig subclass")
    return cls


class EnvironmentHotelKeeperConfig(HotelKeeperConfig):
    """Default configuration that reads from environment variables."""

    def __init__(self) -> None:
        self._env = os.environ

    def get_database_url(self) -> str:
        return self._env.get("DATABASE_URL", "sqlite:///hotelkeeper.db")

    def get_hotel_display_name(self) -> str:
        return self._env.get("HOTEL_NAME", super().get_hotel_display_name())

    def get_nights_per_stay(self) -> int:
        raw = self._env.get("NIGHTS_PER_STAY", "3")
        try:
            nights = int(raw)
        except (TypeError, ValueError):
            logger.warning(f"Invalid NIGHTS_PER_STAY value: {raw}")
            return 3
        if nights <= 0:
            logger.warning(f"NIGHTS_PER_STAY must be positive, got {nights}")
            return 3
        return nights

    def get_log_level(self) -> str:
        return self._env.get("LOG_LEVEL", "WARNING").upper()

    def create_store(self) -> StateStore:
        return SQLiteStateStore(self.get_database_url())


_CONFIG: Optional[HotelKeeperConfig] = None


def get_config(reload: bool = False) -> HotelKeeperConfig:
    """Process-wide config; built on first use from HOTELKEEPER_CONFIG."""
    global _CONFIG
    if _CONFIG is None or reload:
        _CONFIG = load_config_class(os.getenv(CONFIG_ENV_KEY, DEFAULT_CONFIG_CLASS))()
    return _CONFIG


def set_config(config: Optional[HotelKeeperConfig]) -> None:
    global _CONFIG
    _CONFIG = config
