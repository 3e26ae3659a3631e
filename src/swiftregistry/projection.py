"""Projection of stored entries onto their external views."""

from collections.abc import Sequence

from swiftregistry.models import (
    CountrySwiftCodesView,
    SwiftCodeEntry,
    SwiftCodeView,
    is_blank,
)


def display_address(entry: SwiftCodeEntry) -> str:
    """Street address, falling back to the town, then to an empty string."""
    if not is_blank(entry.address):
        return entry.address  # type: ignore[return-value]
    if not is_blank(entry.town_name):
        return entry.town_name  # type: ignore[return-value]
    return ""


def project(
    entry: SwiftCodeEntry,
    include_country_name: bool,
    branches: Sequence[SwiftCodeView] | None = None,
) -> SwiftCodeView:
    """
    Map an entry to its view.

    Args:
        entry: Stored entry.
        include_country_name: False for items nested in a list, where the
            country is already given by the container.
        branches: Branch views to attach; an empty sequence is dropped.

    Returns:
        The entry view.
    """
    return SwiftCodeView(
        address=display_address(entry),
        bank_name=entry.bank_name,
        country_iso2=entry.country_iso2,
        country_name=entry.country_name if include_country_name else None,
        is_headquarter=entry.is_headquarter,
        swift_code=entry.swift_code,
        branches=list(branches) if branches else None,
    )


def project_country(
    country_iso2: str, entries: Sequence[SwiftCodeEntry]
) -> CountrySwiftCodesView:
    """
    Build the country listing container.

    The container's country name comes from the first entry, or is empty
    when the country has no entries.
    """
    country_name = entries[0].country_name.upper() if entries else ""
    return CountrySwiftCodesView(
        country_iso2=country_iso2.upper(),
        country_name=country_name,
        swift_codes=[project(entry, include_country_name=False) for entry in entries],
    )
