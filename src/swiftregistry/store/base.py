"""
Registry store interface.

Every lookup is case-insensitive on the SWIFT code and the country code.
Adapters must enforce code uniqueness themselves and raise
DuplicateCodeError on violation.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable

from swiftregistry.models import SwiftCodeEntry


class RegistryStore(ABC):
    """Abstract keyed store of SwiftCodeEntry records."""

    @abstractmethod
    def find_by_code(self, swift_code: str) -> SwiftCodeEntry | None:
        """Return the entry for a code, or None."""
        ...

    @abstractmethod
    def find_by_country(self, country_iso2: str) -> list[SwiftCodeEntry]:
        """Return all entries registered for a country."""
        ...

    @abstractmethod
    def find_branches(self, prefix: str, exclude_code: str) -> list[SwiftCodeEntry]:
        """Return entries whose code starts with prefix, except exclude_code."""
        ...

    @abstractmethod
    def exists(self, swift_code: str) -> bool:
        ...

    @abstractmethod
    def save(self, entry: SwiftCodeEntry) -> None:
        """
        Persist one entry atomically.

        Raises:
            DuplicateCodeError: If the code is already stored.
        """
        ...

    @abstractmethod
    def save_batch(self, entries: Iterable[SwiftCodeEntry]) -> int:
        """
        Persist a batch of entries in one transaction.

        Either the whole batch is stored or none of it is.

        Returns:
            Number of entries stored.

        Raises:
            DuplicateCodeError: If any code is already stored or repeated.
        """
        ...

    @abstractmethod
    def delete(self, entry: SwiftCodeEntry) -> None:
        ...

    @abstractmethod
    def count(self) -> int:
        ...

    def close(self) -> None:
        """Release resources held by the adapter."""

    def __enter__(self) -> "RegistryStore":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
