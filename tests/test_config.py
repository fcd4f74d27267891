import pytest

from hotelkeeper.adapters.sqlite_adapter import SQLiteStateStore
from hotelkeeper.base_config import HotelKeeperConfig
from hotelkeeper.config import (
    CONFIG_ENV_KEY,
    EnvironmentHotelKeeperConfig,
    load_config_class,
    get_config,
    set_config,
)
from hotelkeeper.exceptions import ConfigurationError
from hotelkeeper.services import InventoryService


class FixedConfig(HotelKeeperConfig):
    """Config used to check class loading through HOTELKEEPER_CONFIG."""

    def get_database_url(self) -> str:
        return "sqlite:///:memory:"

    def create_store(self):
        return None


@pytest.fixture(autouse=True)
def reset_config():
    set_config(None)
    yield
    set_config(None)


class TestEnvironmentConfig:
    def test_defaults(self, monkeypatch):
        for key in ("DATABASE_URL", "HOTEL_NAME", "NIGHTS_PER_STAY", "LOG_LEVEL"):
            monkeypatch.delenv(key, raising=False)
        config = EnvironmentHotelKeeperConfig()

        assert config.get_database_url() == "sqlite:///hotelkeeper.db"
        assert config.get_hotel_display_name() == "Hotel Management System"
        assert config.get_nights_per_stay() == 3
        assert config.get_log_level() == "WARNING"

    def test_reads_environment(self, monkeypatch, db_url):
        monkeypatch.setenv("DATABASE_URL", db_url)
        monkeypatch.setenv("HOTEL_NAME", "Seaside Inn")
        monkeypatch.setenv("NIGHTS_PER_STAY", "5")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        config = EnvironmentHotelKeeperConfig()

        assert config.get_database_url() == db_url
        assert config.get_hotel_display_name() == "Seaside Inn"
        assert config.get_nights_per_stay() == 5
        assert config.get_log_level() == "DEBUG"

    @pytest.mark.parametrize("raw", ["three", "0", "-2"])
    def test_invalid_nights_fall_back(self, monkeypatch, raw):
        monkeypatch.setenv("NIGHTS_PER_STAY", raw)
        assert EnvironmentHotelKeeperConfig().get_nights_per_stay() == 3

    def test_create_service(self, monkeypatch, db_url):
        monkeypatch.setenv("DATABASE_URL", db_url)
        monkeypatch.setenv("NIGHTS_PER_STAY", "4")
        service = EnvironmentHotelKeeperConfig().create_service()

        assert isinstance(service, InventoryService)
        assert isinstance(service.store, SQLiteStateStore)
        assert service.nights_per_stay == 4


class TestConfigLoading:
    def test_default_class(self, monkeypatch):
        monkeypatch.delenv(CONFIG_ENV_KEY, raising=False)
        assert isinstance(get_config(), EnvironmentHotelKeeperConfig)
        assert get_config() is get_config()

    def test_custom_class_from_env(self, monkeypatch):
        monkeypatch.setenv(CONFIG_ENV_KEY, f"{__name__}.FixedConfig")
        assert type(get_config()).__name__ == "FixedConfig"

    def test_entry_point_style_path(self):
        assert load_config_class("hotelkeeper.config:EnvironmentHotelKeeperConfig") is EnvironmentHotelKeeperConfig

    def test_reload_rebuilds_config(self, monkeypatch):
        monkeypatch.delenv(CONFIG_ENV_KEY, raising=False)
        first = get_config()
        monkeypatch.setenv(CONFIG_ENV_KEY, f"{__name__}:FixedConfig")
        assert get_config() is first
        assert type(get_config(reload=True)).__name__ == "FixedConfig"

    def test_set_config(self):
        config = EnvironmentHotelKeeperConfig()
        set_config(config)
        assert get_config() is config

    @pytest.mark.parametrize(
        "path",
        [
            "NoDots",
            "hotelkeeper.does_not_exist.Config",
            "hotelkeeper.config.MissingConfig",
            "hotelkeeper.exceptions.HotelKeeperError",
            "hotelkeeper.config.CONFIG_ENV_KEY",
            "hotelkeeper.config:",
            ":EnvironmentHotelKeeperConfig",
        ],
    )
    def test_bad_paths(self, path):
        with pytest.raises(ConfigurationError):
            load_config_class(path)
