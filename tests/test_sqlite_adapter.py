import os
import sqlite3
from decimal import Decimal

import pytest

from hotelkeeper.adapters.sqlite_adapter import SQLiteStateStore
from hotelkeeper.exceptions import CorruptStateError, SaveError, StateNotFoundError
from hotelkeeper.models import HotelState, Reservation, Room
from hotelkeeper.services import initialize_defaults


def booked_state() -> HotelState:
    state = HotelState.from_rooms(initialize_defaults())
    state.rooms[202].available = False
    state.rooms[101].available = False
    state.reservations[1001] = Reservation(1001, 202, "Bob", "2025-02-01", "2025-02-04", Decimal("599.97"), "Suite")
    state.reservations[1003] = Reservation(1003, 101, "Alice", "2025-01-01", "2025-01-04", Decimal("239.97"), "Single")
    state.next_reservation_id = 1004
    return state


def test_load_without_database_is_not_found(db_url):
    store = SQLiteStateStore(db_url)
    assert store.exists() is False
    with pytest.raises(StateNotFoundError):
        store.load()


def test_load_empty_database_is_not_found(db_url):
    store = SQLiteStateStore(db_url)
    sqlite3.connect(store.db_path).close()
    with pytest.raises(StateNotFoundError):
        store.load()


def test_save_then_load_round_trip(db_url):
    store = SQLiteStateStore(db_url)
    state = booked_state()
    store.save(state)

    loaded = store.load()
    assert [r.room_number for r in loaded.room_list()] == [101, 102, 103, 201, 202, 301]
    assert loaded.rooms == state.rooms
    assert loaded.reservations == state.reservations
    assert loaded.next_reservation_id == 1004
    assert loaded.rooms[loaded.reservations[1001].room_number].available is False


def test_prices_survive_exactly(db_url):
    store = SQLiteStateStore(db_url)
    store.save(booked_state())
    loaded = store.load()
    assert loaded.rooms[101].price == Decimal("79.99")
    assert loaded.rooms[301].price == Decimal("85.00")
    assert loaded.reservations[1003].total_cost == Decimal("239.97")


def test_save_overwrites_previous_state(db_url):
    store = SQLiteStateStore(db_url)
    store.save(booked_state())

    fresh = HotelState.from_rooms([Room(5, "Loft", Decimal("10"))])
    fresh.next_reservation_id = 2000
    store.save(fresh)

    loaded = store.load()
    assert list(loaded.rooms) == [5]
    assert loaded.reservations == {}
    assert loaded.next_reservation_id == 2000


def test_garbage_file_is_corrupt(db_url):
    store = SQLiteStateStore(db_url)
    with open(store.db_path, "wb") as fh:
        fh.write(b"this is definitely not an sqlite database" * 50)
    with pytest.raises(CorruptStateError):
        store.load()


def test_missing_table_is_corrupt(db_url):
    store = SQLiteStateStore(db_url)
    store.save(booked_state())
    with sqlite3.connect(store.db_path) as conn:
        conn.execute("DROP TABLE counters")
    with pytest.raises(CorruptStateError):
        store.load()


def test_missing_counter_row_is_corrupt(db_url):
    store = SQLiteStateStore(db_url)
    store.save(booked_state())
    with sqlite3.connect(store.db_path) as conn:
        conn.execute("DELETE FROM counters")
    with pytest.raises(CorruptStateError):
        store.load()


def test_dangling_room_reference_is_corrupt(db_url):
    store = SQLiteStateStore(db_url)
    store.save(booked_state())
    with sqlite3.connect(store.db_path) as conn:
        conn.execute("UPDATE reservations SET room_number = 999 WHERE reservation_id = 1001")
    with pytest.raises(CorruptStateError):
        store.load()


def test_malformed_price_is_corrupt(db_url):
    store = SQLiteStateStore(db_url)
    store.save(booked_state())
    with sqlite3.connect(store.db_path) as conn:
        conn.execute("UPDATE rooms SET price = 'cheap' WHERE room_number = 102")
    with pytest.raises(CorruptStateError):
        store.load()


@pytest.mark.parametrize("amount", ["NaN", "sNaN", "Infinity", "-Infinity"])
def test_non_finite_room_price_is_corrupt(db_url, amount):
    store = SQLiteStateStore(db_url)
    store.save(booked_state())
    with sqlite3.connect(store.db_path) as conn:
        conn.execute("UPDATE rooms SET price = ? WHERE room_number = 102", (amount,))
    with pytest.raises(CorruptStateError):
        store.load()


@pytest.mark.parametrize("amount", ["NaN", "sNaN", "Infinity"])
def test_non_finite_total_cost_is_corrupt(db_url, amount):
    store = SQLiteStateStore(db_url)
    store.save(booked_state())
    with sqlite3.connect(store.db_path) as conn:
        conn.execute("UPDATE reservations SET total_cost = ? WHERE reservation_id = 1001", (amount,))
    with pytest.raises(CorruptStateError):
        store.load()


def test_failed_save_keeps_previous_state(db_url):
    store = SQLiteStateStore(db_url)
    store.save(booked_state())

    broken = booked_state()
    # duplicate primary key makes the reservation insert fail mid-transaction
    broken.reservations[1003].reservation_id = 1001
    with pytest.raises(SaveError):
        store.save(broken)

    loaded = store.load()
    assert sorted(loaded.reservations) == [1001, 1003]
    assert loaded.next_reservation_id == 1004


def test_save_into_unwritable_location_raises(tmp_dir):
    store = SQLiteStateStore(tmp_dir)  # a directory cannot be opened as a database
    with pytest.raises(SaveError):
        store.save(booked_state())
    assert os.path.isdir(tmp_dir)
