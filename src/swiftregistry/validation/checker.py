"""
Validation and consistency checks for a single add-candidate.

Structural problems come back as VALIDATION_FAILED, a code that is
already registered as CONFLICT, and cross-field contradictions as
INCONSISTENT_DATA. The existence read here is advisory; the store's
uniqueness constraint remains the real guard.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from swiftregistry.errors import Failure
from swiftregistry.models import (
    SwiftCodeEntry,
    SwiftCodeRequest,
    embedded_country,
    is_headquarter_code,
)
from swiftregistry.store.base import RegistryStore
from swiftregistry.utils.logging import get_logger

log = get_logger(__name__)


def format_validation_error(error: ValidationError) -> str:
    """
    Flatten a pydantic error into one caller-facing message.

    Args:
        error: Pydantic ValidationError from parsing a candidate.

    Returns:
        Message like "Validation failed: 'swiftCode': ...; 'bankName': ...".
    """
    parts = []
    for err in error.errors():
        field = ".".join(str(loc) for loc in err["loc"]) or "body"
        message = err["msg"].removeprefix("Value error, ")
        parts.append(f"'{field}': {message}")
    return "Validation failed: " + "; ".join(parts)


def parse_request(
    candidate: SwiftCodeRequest | Mapping[str, Any],
) -> SwiftCodeRequest | Failure:
    """Turn a raw payload into a SwiftCodeRequest, or a VALIDATION_FAILED failure."""
    if isinstance(candidate, SwiftCodeRequest):
        return candidate
    if not isinstance(candidate, Mapping):
        return Failure.invalid("Validation failed: request body must be a JSON object")
    try:
        return SwiftCodeRequest.model_validate(dict(candidate))
    except ValidationError as e:
        message = format_validation_error(e)
        log.warning("Candidate failed validation", errors=message)
        return Failure.invalid(message)


def validate_and_normalize(
    candidate: SwiftCodeRequest | Mapping[str, Any],
    store: RegistryStore,
) -> SwiftCodeEntry | Failure:
    """
    Validate a candidate and build the normalized entry to store.

    Args:
        candidate: Parsed request or raw JSON-like mapping.
        store: Store used for the duplicate pre-check.

    Returns:
        Normalized SwiftCodeEntry ready for save, or a Failure.
    """
    request = parse_request(candidate)
    if isinstance(request, Failure):
        return request

    swift_code = request.swift_code
    log.debug("Validating candidate", swift_code=swift_code)

    if store.exists(swift_code):
        log.warning("Duplicate SWIFT code", swift_code=swift_code)
        return Failure.conflict(f"SWIFT code '{swift_code}' already exists.")

    code_country = embedded_country(swift_code)
    if code_country != request.country_iso2:
        message = (
            "Data consistency error: The country code from SWIFT "
            f"('{code_country}' in '{swift_code}') does not match the provided "
            f"Country ISO2 ('{request.country_iso2}')."
        )
        log.warning("Inconsistent country code", swift_code=swift_code, message=message)
        return Failure.inconsistent(message)

    expected_hq = is_headquarter_code(swift_code)
    if request.is_headquarter != expected_hq:
        log.warning(
            "Inconsistent headquarter flag",
            swift_code=swift_code,
            flag=request.is_headquarter,
            expected=expected_hq,
        )
        return Failure.inconsistent(
            f"Provided 'isHeadquarter' flag ({str(request.is_headquarter).lower()}) "
            f"is inconsistent with the SWIFT code format ({swift_code})."
        )

    return SwiftCodeEntry(
        swift_code=swift_code,
        bank_name=request.bank_name,
        address=request.address,
        town_name=None,
        country_iso2=request.country_iso2,
        country_name=request.country_name,
        is_headquarter=expected_hq,
    )
