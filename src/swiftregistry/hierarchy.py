"""
Headquarters/branch resolution.

A branch is any other entry sharing the first 8 characters of a
headquarters code. The relation is derived at read time and never stored.
"""

from swiftregistry.errors import Failure
from swiftregistry.models import SwiftCodeEntry, SwiftCodeView
from swiftregistry.projection import project
from swiftregistry.store.base import RegistryStore
from swiftregistry.utils.logging import get_logger

log = get_logger(__name__)


def find_branches(entry: SwiftCodeEntry, store: RegistryStore) -> list[SwiftCodeEntry]:
    """
    Branches of a headquarters entry, sorted by code.

    Non-headquarters entries have no branches, even when other codes share
    their prefix.
    """
    if not entry.is_headquarter:
        return []
    branches = store.find_branches(entry.branch_prefix, entry.swift_code)
    return sorted(branches, key=lambda branch: branch.swift_code.upper())


def resolve_details(swift_code: str, store: RegistryStore) -> SwiftCodeView | Failure:
    """
    Look up a code and expand headquarters into their branches.

    Args:
        swift_code: Code to look up, any letter case.
        store: Registry store.

    Returns:
        View with country name (and branches for a headquarters), or
        a NOT_FOUND failure.
    """
    code = swift_code.strip()
    entry = store.find_by_code(code)
    if entry is None:
        log.warning("SWIFT code not found", swift_code=code)
        return Failure.not_found(f"SWIFT code '{code}' not found.")

    if not entry.is_headquarter:
        log.debug("Resolved branch entry", swift_code=entry.swift_code)
        return project(entry, include_country_name=True)

    branches = find_branches(entry, store)
    log.debug(
        "Resolved headquarters entry",
        swift_code=entry.swift_code,
        prefix=entry.branch_prefix,
        n_branches=len(branches),
    )
    return project(
        entry,
        include_country_name=True,
        branches=[project(branch, include_country_name=False) for branch in branches],
    )
