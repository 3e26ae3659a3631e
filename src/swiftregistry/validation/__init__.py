"""Candidate validation and result reporting."""

from swiftregistry.validation.checker import (
    format_validation_error,
    parse_request,
    validate_and_normalize,
)
from swiftregistry.validation.reporter import ConsoleReporter

__all__ = [
    "ConsoleReporter",
    "format_validation_error",
    "parse_request",
    "validate_and_normalize",
]
