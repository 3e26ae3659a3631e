"""In-memory registry store, keyed by the uppercased SWIFT code."""

import threading
from collections.abc import Iterable

from swiftregistry.errors import DuplicateCodeError
from swiftregistry.models import SwiftCodeEntry
from swiftregistry.store.base import RegistryStore


class InMemoryStore(RegistryStore):
    """
    Dict-backed store for tests and the `memory` backend.

    Iteration order is insertion order, which is what the find_* methods
    return.
    """

    def __init__(self, entries: Iterable[SwiftCodeEntry] = ()) -> None:
        self._entries: dict[str, SwiftCodeEntry] = {}
        self._lock = threading.RLock()
        if entries:
            self.save_batch(entries)

    def find_by_code(self, swift_code: str) -> SwiftCodeEntry | None:
        with self._lock:
            return self._entries.get(swift_code.upper())

    def find_by_country(self, country_iso2: str) -> list[SwiftCodeEntry]:
        iso2 = country_iso2.upper()
        with self._lock:
            return [e for e in self._entries.values() if e.country_iso2.upper() == iso2]

    def find_branches(self, prefix: str, exclude_code: str) -> list[SwiftCodeEntry]:
        prefix = prefix.upper()
        excluded = exclude_code.upper()
        with self._lock:
            return [
                entry
                for key, entry in self._entries.items()
                if key.startswith(prefix) and key != excluded
            ]

    def exists(self, swift_code: str) -> bool:
        with self._lock:
            return swift_code.upper() in self._entries

    def save(self, entry: SwiftCodeEntry) -> None:
        key = entry.swift_code.upper()
        with self._lock:
            if key in self._entries:
                raise DuplicateCodeError(entry.swift_code)
            self._entries[key] = entry

    def save_batch(self, entries: Iterable[SwiftCodeEntry]) -> int:
        batch = list(entries)
        with self._lock:
            staged: dict[str, SwiftCodeEntry] = {}
            for entry in batch:
                key = entry.swift_code.upper()
                if key in self._entries or key in staged:
                    raise DuplicateCodeError(entry.swift_code)
                staged[key] = entry
            self._entries.update(staged)
        return len(staged)

    def delete(self, entry: SwiftCodeEntry) -> None:
        with self._lock:
            self._entries.pop(entry.swift_code.upper(), None)

    def count(self) -> int:
        with self._lock:
            return len(self._entries)
