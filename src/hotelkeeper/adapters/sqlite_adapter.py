from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, List

from hotelkeeper.exceptions import CorruptStateError, SaveError, StateNotFoundError
from hotelkeeper.models import HotelState, Reservation, Room

logger = logging.getLogger(__name__)

ROOMS_TABLE = "rooms"
RESERVATIONS_TABLE = "reservations"
COUNTERS_TABLE = "counters"
STATE_TABLES = (ROOMS_TABLE, RESERVATIONS_TABLE, COUNTERS_TABLE)

NEXT_ID_KEY = "next_reservation_id"


class SQLiteStateStore:
    """
    Keeps the whole hotel state in one SQLite file.

    Rooms, reservations and the next reservation id live in three tables
    that are always read and written together inside a single transaction.
    """

    def __init__(self, db_url: str):
        # Format: sqlite:///path
        if db_url.startswith("sqlite:///"):
            self.db_path = db_url.replace("sqlite:///", "")
        else:
            self.db_path = db_url

        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        logger.info(f"SQLiteStateStore initialised. Database path: {self.db_path}")

    @contextmanager
    def _conn(self) -> Iterator[sqlite3.Connection]:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
        finally:
            conn.close()

    # ------------------------------------
    # Lifecycle
    # ------------------------------------
    def exists(self) -> bool:
        return Path(self.db_path).is_file()

    def _create_schema(self, cur: sqlite3.Cursor) -> None:
        cur.execute(
            f"""
            CREATE TABLE IF NOT EXISTS {ROOMS_TABLE} (
                room_number INTEGER PRIMARY KEY,
                position INTEGER NOT NULL,
                room_type TEXT NOT NULL,
                price TEXT NOT NULL,
                available INTEGER NOT NULL DEFAULT 1
            )
            """
        )
        cur.execute(
            f"""
            CREATE TABLE IF NOT EXISTS {RESERVATIONS_TABLE} (
                reservation_id INTEGER PRIMARY KEY,
                room_number INTEGER NOT NULL,
                guest_name TEXT NOT NULL,
                check_in_date TEXT NOT NULL,
                check_out_date TEXT NOT NULL,
                total_cost TEXT NOT NULL,
                room_type TEXT NOT NULL DEFAULT '',
                FOREIGN KEY(room_number) REFERENCES {ROOMS_TABLE}(room_number)
            )
            """
        )
        cur.execute(
            f"""
            CREATE TABLE IF NOT EXISTS {COUNTERS_TABLE} (
                name TEXT PRIMARY KEY,
                value INTEGER NOT NULL
            )
            """
        )

    # ------------------------------------
    # Load
    # ------------------------------------
    def load(self) -> HotelState:
        """
        Reads rooms, reservations and the next id as one unit.

        Raises StateNotFoundError when nothing has been saved yet and
        CorruptStateError when stored data cannot be turned back into a
        consistent HotelState. Nothing is returned unless all three parts
        were read and validated.
        """
        if not self.exists():
            logger.info(f"No saved state at {self.db_path}")
            raise StateNotFoundError(f"No saved state at {self.db_path}")

        try:
            with self._conn() as conn:
                cur = conn.cursor()
                cur.execute("BEGIN")
                try:
                    present = self._existing_tables(cur)
                    if not present:
                        logger.info(f"Database {self.db_path} holds no saved state")
                        raise StateNotFoundError(f"Database {self.db_path} holds no saved state")
                    missing = [t for t in STATE_TABLES if t not in present]
                    if missing:
                        raise CorruptStateError(f"Saved state is incomplete, missing tables: {missing}")

                    room_rows = self._fetch(cur, f"SELECT * FROM {ROOMS_TABLE} ORDER BY position, room_number")
                    reservation_rows = self._fetch(cur, f"SELECT * FROM {RESERVATIONS_TABLE} ORDER BY reservation_id")
                    cur.execute(f"SELECT value FROM {COUNTERS_TABLE} WHERE name = ?", (NEXT_ID_KEY,))
                    counter_row = cur.fetchone()
                finally:
                    conn.rollback()
        except sqlite3.DatabaseError as e:
            logger.error(f"Saved state at {self.db_path} is unreadable: {e}")
            raise CorruptStateError(f"Saved state is unreadable: {e}") from e

        try:
            state = self._build_state(room_rows, reservation_rows, counter_row)
        except CorruptStateError as e:
            logger.error(f"Saved state at {self.db_path} is corrupt: {e}")
            raise

        logger.info(
            f"State loaded: {len(state.rooms)} rooms, {len(state.reservations)} reservations, "
            f"next id {state.next_reservation_id}"
        )
        return state

    def _existing_tables(self, cur: sqlite3.Cursor) -> List[str]:
        placeholders = ", ".join("?" * len(STATE_TABLES))
        cur.execute(
            f"SELECT name FROM sqlite_master WHERE type = 'table' AND name IN ({placeholders})",
            STATE_TABLES,
        )
        return [row["name"] for row in cur.fetchall()]

    def _fetch(self, cur: sqlite3.Cursor, query: str) -> List[Dict[str, Any]]:
        cur.execute(query)
        return [dict(r) for r in cur.fetchall()]

    def _build_state(
        self,
        room_rows: List[Dict[str, Any]],
        reservation_rows: List[Dict[str, Any]],
        counter_row: Any,
    ) -> HotelState:
        if counter_row is None:
            raise CorruptStateError("Next reservation id is missing")
        next_id = counter_row["value"]
        if isinstance(next_id, bool) or not isinstance(next_id, int):
            raise CorruptStateError(f"Next reservation id is not an integer: {next_id!r}")

        state = HotelState(next_reservation_id=next_id)
        try:
            for row in room_rows:
                if row.get("available") not in (0, 1):
                    raise ValueError(f"availability flag {row.get('available')!r}")
                state.add_room(Room.from_dict(row))
            for row in reservation_rows:
                reservation = Reservation.from_dict(row)
                if not isinstance(reservation.room_number, int):
                    raise ValueError(f"room number {reservation.room_number!r}")
                state.reservations[reservation.reservation_id] = reservation
        except (TypeError, ValueError) as e:
            raise CorruptStateError(f"Saved row does not match the model: {e}") from e

        state.check_consistency()
        return state

    # ------------------------------------
    # Save
    # ------------------------------------
    def save(self, state: HotelState) -> None:
        """Replaces all persisted content with `state` in a single transaction."""
        try:
            with self._conn() as conn:
                cur = conn.cursor()
                cur.execute("BEGIN IMMEDIATE")
                try:
                    self._create_schema(cur)
                    for table in STATE_TABLES:
                        cur.execute(f"DELETE FROM {table}")

                    cur.executemany(
                        f"""
                        INSERT INTO {ROOMS_TABLE} (room_number, position, room_type, price, available)
                        VALUES (?, ?, ?, ?, ?)
                        """,
                        [
                            (room.room_number, position, room.room_type, str(room.price), int(room.available))
                            for position, room in enumerate(state.room_list())
                        ],
                    )
                    cur.executemany(
                        f"""
                        INSERT INTO {RESERVATIONS_TABLE}
                            (reservation_id, room_number, guest_name, check_in_date, check_out_date, total_cost, room_type)
                        VALUES (?, ?, ?, ?, ?, ?, ?)
                        """,
                        [
                            (
                                r.reservation_id,
                                r.room_number,
                                r.guest_name,
                                r.check_in_date,
                                r.check_out_date,
                                str(r.total_cost),
                                r.room_type,
                            )
                            for r in state.sorted_reservations()
                        ],
                    )
                    cur.execute(
                        f"INSERT INTO {COUNTERS_TABLE} (name, value) VALUES (?, ?)",
                        (NEXT_ID_KEY, state.next_reservation_id),
                    )
                    conn.commit()
                except BaseException:
                    conn.rollback()
                    raise
        except (sqlite3.Error, OSError) as e:
            logger.error(f"Error saving state to {self.db_path}: {e}")
            raise SaveError(f"Could not save state: {e}") from e

        logger.info(
            f"State saved: {len(state.rooms)} rooms, {len(state.reservations)} reservations, "
            f"next id {state.next_reservation_id}"
        )
