"""
Registry service: the operations exposed to the HTTP adapter and CLI.

Each operation returns either its view or a Failure. Unexpected
exceptions are logged with their traceback and surfaced as a generic
INTERNAL failure.
"""

import functools
from collections.abc import Callable, Mapping
from typing import Any, ParamSpec, TypeVar

from swiftregistry.errors import DuplicateCodeError, Failure
from swiftregistry.hierarchy import resolve_details
from swiftregistry.models import (
    CountrySwiftCodesView,
    MessageView,
    SwiftCodeRequest,
    SwiftCodeView,
)
from swiftregistry.projection import project_country
from swiftregistry.store.base import RegistryStore
from swiftregistry.utils.logging import get_logger
from swiftregistry.validation.checker import validate_and_normalize

log = get_logger(__name__)

P = ParamSpec("P")
R = TypeVar("R")


def _guarded(func: Callable[P, R]) -> Callable[P, R | Failure]:
    """Turn any unexpected exception into an INTERNAL failure."""

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R | Failure:
        try:
            return func(*args, **kwargs)
        except Exception:
            log.exception("Unexpected error in registry operation", operation=func.__name__)
            return Failure.internal()

    return wrapper


class SwiftCodeService:
    """Lookup, listing, insert and delete over a registry store."""

    def __init__(self, store: RegistryStore) -> None:
        self.store = store

    @_guarded
    def get_details(self, swift_code: str) -> SwiftCodeView | Failure:
        """Entry view for a code; headquarters include their branches."""
        log.debug("Retrieving details", swift_code=swift_code)
        return resolve_details(swift_code, self.store)

    @_guarded
    def get_by_country(self, country_iso2: str) -> CountrySwiftCodesView | Failure:
        """All entries of a country; an unknown country yields an empty list."""
        iso2 = country_iso2.strip().upper()
        if not iso2:
            return Failure.invalid("Country ISO2 code cannot be blank")
        entries = self.store.find_by_country(iso2)
        if not entries:
            log.info("No SWIFT codes found for country", country_iso2=iso2)
        else:
            log.info("Found SWIFT codes for country", country_iso2=iso2, n=len(entries))
        return project_country(iso2, entries)

    @_guarded
    def add(
        self, candidate: SwiftCodeRequest | Mapping[str, Any]
    ) -> MessageView | Failure:
        """
        Validate and store a new entry.

        A uniqueness violation raised by the store itself (a concurrent
        insert of the same code) is reported as CONFLICT as well.
        """
        entry = validate_and_normalize(candidate, self.store)
        if isinstance(entry, Failure):
            return entry

        try:
            self.store.save(entry)
        except DuplicateCodeError:
            log.warning("Store rejected duplicate SWIFT code", swift_code=entry.swift_code)
            return Failure.conflict(f"SWIFT code '{entry.swift_code}' already exists.")

        log.info("Added SWIFT code", swift_code=entry.swift_code)
        return MessageView(message=f"SWIFT code '{entry.swift_code}' added successfully.")

    @_guarded
    def delete(self, swift_code: str) -> MessageView | Failure:
        """Remove an entry by code, any letter case."""
        code = swift_code.strip().upper()
        entry = self.store.find_by_code(code)
        if entry is None:
            log.warning("Attempted to delete non-existent SWIFT code", swift_code=code)
            return Failure.not_found(f"SWIFT code '{code}' not found, cannot delete.")

        self.store.delete(entry)
        log.info("Deleted SWIFT code", swift_code=code)
        return MessageView(message=f"SWIFT code '{code}' deleted successfully.")
