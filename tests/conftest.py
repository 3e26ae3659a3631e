"""Pytest configuration and shared fixtures."""

import csv
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest

from swiftregistry.models import SwiftCodeEntry
from swiftregistry.schemas.bank_codes import SOURCE_COLUMNS
from swiftregistry.store import InMemoryStore, RegistryStore, SqliteStore

EntryFactory = Callable[..., SwiftCodeEntry]
CsvWriter = Callable[..., Path]


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def test_data_dir(project_root: Path) -> Path:
    """Return the test data directory."""
    return project_root / "tests" / "data"


@pytest.fixture
def sample_csv(test_data_dir: Path) -> Path:
    """Sample dataset: 10 valid rows followed by 4 invalid ones."""
    return test_data_dir / "swift_codes_sample.csv"


@pytest.fixture
def make_entry() -> EntryFactory:
    """Factory for consistent entries; the country follows the code."""

    def factory(swift_code: str = "AAAABBCCXXX", **overrides: Any) -> SwiftCodeEntry:
        fields: dict[str, Any] = {
            "swift_code": swift_code,
            "bank_name": f"BANK {swift_code}",
            "address": f"STREET {swift_code}",
            "town_name": "TOWN",
            "country_iso2": swift_code[4:6].upper(),
            "country_name": f"COUNTRY {swift_code[4:6].upper()}",
            "is_headquarter": swift_code.upper().endswith("XXX"),
        }
        fields.update(overrides)
        return SwiftCodeEntry(**fields)

    return factory


@pytest.fixture
def hq_entry(make_entry: EntryFactory) -> SwiftCodeEntry:
    """Headquarters entry AAAABBCCXXX."""
    return make_entry("AAAABBCCXXX")


@pytest.fixture
def branch_entry(make_entry: EntryFactory) -> SwiftCodeEntry:
    """Branch AAAABBCCD01 of the headquarters fixture."""
    return make_entry("AAAABBCCD01")


@pytest.fixture
def memory_store() -> InMemoryStore:
    """Empty in-memory store."""
    return InMemoryStore()


@pytest.fixture(params=["memory", "sqlite"])
def store(request: pytest.FixtureRequest, tmp_path: Path) -> Iterator[RegistryStore]:
    """Empty store, once per adapter."""
    if request.param == "memory":
        adapter: RegistryStore = InMemoryStore()
    else:
        adapter = SqliteStore(tmp_path / "registry.db")
    yield adapter
    adapter.close()


@pytest.fixture
def valid_request() -> dict[str, Any]:
    """JSON payload for a consistent headquarters candidate."""
    return {
        "swiftCode": "BREXPLPWXXX",
        "bankName": "mBank S.A.",
        "address": "Prosta 18, Warszawa",
        "countryISO2": "PL",
        "countryName": "Poland",
        "isHeadquarter": True,
    }


@pytest.fixture
def write_csv(tmp_path: Path) -> CsvWriter:
    """Write dataset rows (sequences in SOURCE_COLUMNS order) to a CSV file."""

    def writer(
        rows: list[list[str]],
        name: str = "swift_codes.csv",
        header: tuple[str, ...] = SOURCE_COLUMNS,
        encoding: str = "utf-8",
    ) -> Path:
        path = tmp_path / name
        with path.open("w", encoding=encoding, newline="") as f:
            csv_writer = csv.writer(f)
            csv_writer.writerow(header)
            csv_writer.writerows(rows)
        return path

    return writer


@pytest.fixture
def dataset_row() -> Callable[..., list[str]]:
    """Builder for one dataset row; the ISO2 defaults to the country in the code."""
    return build_dataset_row


def build_dataset_row(
    swift_code: str,
    country_iso2: str | None = None,
    *,
    name: str = "SOME BANK",
    address: str = "SOME STREET 1",
    town: str = "SOME TOWN",
    country_name: str = "SOME COUNTRY",
) -> list[str]:
    """One dataset row; the ISO2 defaults to the country embedded in the code."""
    iso2 = country_iso2 if country_iso2 is not None else swift_code[4:6]
    code_type = "BIC11" if len(swift_code) == 11 else "BIC"
    return [iso2, swift_code, code_type, name, address, town, country_name, "CET"]
