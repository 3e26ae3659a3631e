"""
Failure kinds and store exceptions.

Business-rule outcomes are returned as Failure values so callers can
branch on the kind. Exceptions are reserved for store-level faults.
"""

from dataclasses import dataclass
from enum import Enum
from http import HTTPStatus


class FailureKind(str, Enum):
    """Caller-visible failure categories."""

    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INCONSISTENT_DATA = "inconsistent_data"
    VALIDATION_FAILED = "validation_failed"
    INTERNAL = "internal"

    @property
    def http_status(self) -> HTTPStatus:
        """Status code the HTTP adapter answers with."""
        return _HTTP_STATUS[self]


_HTTP_STATUS: dict[FailureKind, HTTPStatus] = {
    FailureKind.NOT_FOUND: HTTPStatus.NOT_FOUND,
    FailureKind.CONFLICT: HTTPStatus.CONFLICT,
    FailureKind.INCONSISTENT_DATA: HTTPStatus.BAD_REQUEST,
    FailureKind.VALIDATION_FAILED: HTTPStatus.BAD_REQUEST,
    FailureKind.INTERNAL: HTTPStatus.INTERNAL_SERVER_ERROR,
}

INTERNAL_ERROR_MESSAGE = "An internal server error occurred. Please try again later."


@dataclass(frozen=True)
class Failure:
    """A named, non-exceptional failure outcome."""

    kind: FailureKind
    message: str

    @classmethod
    def not_found(cls, message: str) -> "Failure":
        return cls(FailureKind.NOT_FOUND, message)

    @classmethod
    def conflict(cls, message: str) -> "Failure":
        return cls(FailureKind.CONFLICT, message)

    @classmethod
    def inconsistent(cls, message: str) -> "Failure":
        return cls(FailureKind.INCONSISTENT_DATA, message)

    @classmethod
    def invalid(cls, message: str) -> "Failure":
        return cls(FailureKind.VALIDATION_FAILED, message)

    @classmethod
    def internal(cls) -> "Failure":
        return cls(FailureKind.INTERNAL, INTERNAL_ERROR_MESSAGE)

    def to_dict(self) -> dict[str, str]:
        """Error body as exposed to callers."""
        return {"message": self.message}


class StoreError(Exception):
    """Raised by store adapters for low-level persistence faults."""


class DuplicateCodeError(StoreError):
    """Raised when the store's uniqueness constraint on the code is violated."""

    def __init__(self, swift_code: str) -> None:
        self.swift_code = swift_code
        super().__init__(f"SWIFT code '{swift_code}' already exists.")


class SourceError(Exception):
    """Raised when an ingestion dataset cannot be opened, decoded or parsed."""
