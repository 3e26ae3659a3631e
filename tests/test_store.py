"""Tests for registry store adapters."""

import sqlite3
from pathlib import Path

import pytest

from swiftregistry.config import StoreBackend, StoreConfig
from swiftregistry.errors import DuplicateCodeError, StoreError
from swiftregistry.store import InMemoryStore, RegistryStore, SqliteStore, open_store


class TestRegistryStore:
    """Behaviour shared by every adapter."""

    def test_save_and_find(self, store: RegistryStore, hq_entry) -> None:
        store.save(hq_entry)
        assert store.find_by_code("AAAABBCCXXX") == hq_entry
        assert store.count() == 1

    def test_lookup_is_case_insensitive(self, store: RegistryStore, hq_entry) -> None:
        store.save(hq_entry)
        assert store.find_by_code("aaaabbccxxx") == hq_entry
        assert store.exists("AaAaBbCcXxX")
        assert store.find_by_code("AAAABBCCXX1") is None

    def test_duplicate_save(self, store: RegistryStore, hq_entry, make_entry) -> None:
        """Test that a second entry with the same code in any case is rejected."""
        store.save(hq_entry)
        with pytest.raises(DuplicateCodeError) as exc_info:
            store.save(make_entry("aaaabbccxxx"))
        assert exc_info.value.swift_code.upper() == "AAAABBCCXXX"
        assert store.count() == 1

    def test_find_by_country(self, store: RegistryStore, make_entry) -> None:
        store.save_batch(
            [make_entry("AAAABBCCXXX"), make_entry("EEEEPLPW"), make_entry("DDDDBBEE")]
        )
        codes = [e.swift_code for e in store.find_by_country("bb")]
        assert sorted(codes) == ["AAAABBCCXXX", "DDDDBBEE"]
        assert store.find_by_country("ZZ") == []

    def test_find_branches(self, store: RegistryStore, make_entry) -> None:
        store.save_batch(
            [
                make_entry("AAAABBCCXXX"),
                make_entry("AAAABBCCD01"),
                make_entry("AAAABBCDD01"),
            ]
        )
        branches = store.find_branches("aaaabbcc", "AAAABBCCXXX")
        assert [b.swift_code for b in branches] == ["AAAABBCCD01"]

    def test_find_branches_matches_prefix_literally(
        self, store: RegistryStore, make_entry
    ) -> None:
        """Test that wildcard characters in the prefix are not interpreted."""
        store.save_batch([make_entry("AAAABBCCXXX"), make_entry("AAAABBCCD01")])
        assert store.find_branches("AAAA%", "") == []
        assert store.find_branches("AAAABB_C", "") == []

    def test_delete(self, store: RegistryStore, hq_entry) -> None:
        store.save(hq_entry)
        store.delete(hq_entry)
        assert store.find_by_code(hq_entry.swift_code) is None
        assert store.count() == 0

    def test_save_batch(self, store: RegistryStore, make_entry) -> None:
        saved = store.save_batch([make_entry("AAAABBCCXXX"), make_entry("AAAABBCCD01")])
        assert saved == 2
        assert store.count() == 2

    def test_empty_batch(self, store: RegistryStore) -> None:
        assert store.save_batch([]) == 0

    def test_batch_is_atomic_against_store(self, store: RegistryStore, make_entry) -> None:
        """Test that a batch colliding with stored data leaves nothing behind."""
        store.save(make_entry("AAAABBCCD01"))
        with pytest.raises(DuplicateCodeError) as exc_info:
            store.save_batch([make_entry("AAAABBCCXXX"), make_entry("AAAABBCCD01")])
        assert exc_info.value.swift_code == "AAAABBCCD01"
        assert store.count() == 1
        assert not store.exists("AAAABBCCXXX")

    def test_batch_is_atomic_within_itself(self, store: RegistryStore, make_entry) -> None:
        with pytest.raises(DuplicateCodeError):
            store.save_batch(
                [make_entry("AAAABBCCXXX"), make_entry("EEEEPLPW"), make_entry("aaaabbccxxx")]
            )
        assert store.count() == 0

    def test_context_manager(self, store: RegistryStore, hq_entry) -> None:
        with store as opened:
            opened.save(hq_entry)
            assert opened.count() == 1


class TestSqliteStore:
    """SQLite-specific behaviour."""

    def test_persists_across_connections(self, tmp_path: Path, hq_entry) -> None:
        path = tmp_path / "nested" / "registry.db"
        with SqliteStore(path) as first:
            first.save(hq_entry)

        with SqliteStore(path) as second:
            assert second.find_by_code("AAAABBCCXXX") == hq_entry

    def test_round_trips_optional_fields(self, tmp_path: Path, make_entry) -> None:
        entry = make_entry("EEEEPLPW", address=None, town_name=None)
        with SqliteStore(tmp_path / "registry.db") as store:
            store.save(entry)
            assert store.find_by_code("EEEEPLPW") == entry

    def test_in_memory_database(self, hq_entry) -> None:
        with SqliteStore(":memory:") as store:
            store.save(hq_entry)
            assert store.count() == 1

    def test_write_faults_are_store_errors(
        self, tmp_path: Path, hq_entry, branch_entry
    ) -> None:
        """Test that database faults other than duplicates surface as StoreError."""
        path = tmp_path / "registry.db"
        with SqliteStore(path) as store:
            store.save(hq_entry)
            conn = sqlite3.connect(path)
            conn.executescript(
                "CREATE TRIGGER break_inserts BEFORE INSERT ON swift_codes "
                "BEGIN INSERT INTO missing_table VALUES (1); END;"
                "CREATE TRIGGER break_deletes BEFORE DELETE ON swift_codes "
                "BEGIN INSERT INTO missing_table VALUES (1); END;"
            )
            conn.close()

            with pytest.raises(StoreError, match="Cannot save batch") as exc_info:
                store.save_batch([branch_entry])
            assert not isinstance(exc_info.value, DuplicateCodeError)
            with pytest.raises(StoreError, match="Cannot delete"):
                store.delete(hq_entry)
            assert store.count() == 1

    def test_unopenable_path(self, tmp_path: Path) -> None:
        """Test that a directory path is reported as a StoreError."""
        with pytest.raises(StoreError, match="Cannot open registry database"):
            SqliteStore(tmp_path)


class TestOpenStore:
    """Tests for adapter selection from configuration."""

    def test_memory_backend(self) -> None:
        store = open_store(StoreConfig(backend=StoreBackend.MEMORY))
        assert isinstance(store, InMemoryStore)

    def test_sqlite_backend(self, tmp_path: Path) -> None:
        store = open_store(StoreConfig(backend="sqlite", path=tmp_path / "r.db"))
        try:
            assert isinstance(store, SqliteStore)
            assert (tmp_path / "r.db").exists()
        finally:
            store.close()
