"""
SQLite-backed registry store.

The code column is the primary key with NOCASE collation, so the
database itself rejects duplicates regardless of letter case. Any other
sqlite3 fault surfaces as StoreError.
"""

import sqlite3
import threading
from collections.abc import Iterable
from pathlib import Path

from swiftregistry.errors import DuplicateCodeError, StoreError
from swiftregistry.models import SwiftCodeEntry
from swiftregistry.store.base import RegistryStore
from swiftregistry.utils.logging import get_logger

log = get_logger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS swift_codes (
    swift_code     TEXT PRIMARY KEY COLLATE NOCASE,
    bank_name      TEXT NOT NULL,
    address        TEXT,
    town_name      TEXT,
    country_iso2   TEXT NOT NULL COLLATE NOCASE,
    country_name   TEXT NOT NULL,
    is_headquarter INTEGER NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_country_iso2 ON swift_codes (country_iso2);
"""

_COLUMNS = (
    "swift_code, bank_name, address, town_name, "
    "country_iso2, country_name, is_headquarter"
)


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _to_row(entry: SwiftCodeEntry) -> tuple[object, ...]:
    return (
        entry.swift_code,
        entry.bank_name,
        entry.address,
        entry.town_name,
        entry.country_iso2,
        entry.country_name,
        int(entry.is_headquarter),
    )


def _to_entry(row: sqlite3.Row) -> SwiftCodeEntry:
    return SwiftCodeEntry(
        swift_code=row["swift_code"],
        bank_name=row["bank_name"],
        address=row["address"],
        town_name=row["town_name"],
        country_iso2=row["country_iso2"],
        country_name=row["country_name"],
        is_headquarter=bool(row["is_headquarter"]),
    )


class SqliteStore(RegistryStore):
    """
    Registry store in a single SQLite file.

    One connection is shared across threads and serialized with a lock;
    every write runs in its own transaction.
    """

    def __init__(self, path: Path | str) -> None:
        """
        Open (and create if needed) the database.

        Args:
            path: Database file, or ":memory:" for a throwaway database.
        """
        self.path = str(path)
        if self.path != ":memory:":
            Path(self.path).parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()
        try:
            self._conn = sqlite3.connect(self.path, check_same_thread=False)
            self._conn.row_factory = sqlite3.Row
            self._conn.executescript(_SCHEMA)
        except sqlite3.Error as e:
            msg = f"Cannot open registry database {self.path}: {e}"
            raise StoreError(msg) from e
        log.debug("Opened SQLite store", path=self.path)

    def _query(self, sql: str, params: tuple[object, ...] = ()) -> list[sqlite3.Row]:
        try:
            with self._lock:
                return self._conn.execute(sql, params).fetchall()
        except sqlite3.Error as e:
            msg = f"Registry query failed: {e}"
            raise StoreError(msg) from e

    def find_by_code(self, swift_code: str) -> SwiftCodeEntry | None:
        rows = self._query(
            f"SELECT {_COLUMNS} FROM swift_codes WHERE swift_code = ?", (swift_code,)
        )
        return _to_entry(rows[0]) if rows else None

    def find_by_country(self, country_iso2: str) -> list[SwiftCodeEntry]:
        rows = self._query(
            f"SELECT {_COLUMNS} FROM swift_codes WHERE country_iso2 = ? ORDER BY rowid",
            (country_iso2,),
        )
        return [_to_entry(row) for row in rows]

    def find_branches(self, prefix: str, exclude_code: str) -> list[SwiftCodeEntry]:
        rows = self._query(
            f"SELECT {_COLUMNS} FROM swift_codes "
            "WHERE swift_code LIKE ? ESCAPE '\\' AND swift_code <> ? ORDER BY rowid",
            (_escape_like(prefix) + "%", exclude_code),
        )
        return [_to_entry(row) for row in rows]

    def exists(self, swift_code: str) -> bool:
        rows = self._query(
            "SELECT 1 FROM swift_codes WHERE swift_code = ? LIMIT 1", (swift_code,)
        )
        return bool(rows)

    def save(self, entry: SwiftCodeEntry) -> None:
        try:
            with self._lock, self._conn:
                self._conn.execute(
                    f"INSERT INTO swift_codes ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?)",
                    _to_row(entry),
                )
        except sqlite3.IntegrityError as e:
            raise DuplicateCodeError(entry.swift_code) from e
        except sqlite3.Error as e:
            msg = f"Cannot save SWIFT code '{entry.swift_code}': {e}"
            raise StoreError(msg) from e

    def save_batch(self, entries: Iterable[SwiftCodeEntry]) -> int:
        batch = list(entries)
        if not batch:
            return 0
        try:
            with self._lock, self._conn:
                self._conn.executemany(
                    f"INSERT INTO swift_codes ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?)",
                    [_to_row(entry) for entry in batch],
                )
        except sqlite3.IntegrityError as e:
            raise DuplicateCodeError(self._first_duplicate(batch)) from e
        except sqlite3.Error as e:
            msg = f"Cannot save batch of {len(batch)} SWIFT codes: {e}"
            raise StoreError(msg) from e
        return len(batch)

    def _first_duplicate(self, batch: list[SwiftCodeEntry]) -> str:
        seen: set[str] = set()
        for entry in batch:
            key = entry.swift_code.upper()
            if key in seen or self.exists(key):
                return entry.swift_code
            seen.add(key)
        return batch[0].swift_code

    def delete(self, entry: SwiftCodeEntry) -> None:
        try:
            with self._lock, self._conn:
                self._conn.execute(
                    "DELETE FROM swift_codes WHERE swift_code = ?", (entry.swift_code,)
                )
        except sqlite3.Error as e:
            msg = f"Cannot delete SWIFT code '{entry.swift_code}': {e}"
            raise StoreError(msg) from e

    def count(self) -> int:
        return int(self._query("SELECT COUNT(*) FROM swift_codes")[0][0])

    def close(self) -> None:
        with self._lock:
            self._conn.close()
