"""
Value models for the SWIFT code registry.

SwiftCodeEntry is the persisted record; SwiftCodeRequest is an
add-candidate as supplied by callers; the *View models are the
external JSON shapes.
"""

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

HQ_SUFFIX = "XXX"
CODE_LENGTHS = (8, 11)
MAX_ADDRESS_LENGTH = 512

# bank (4 letters) + country (2 letters) + location (2 alnum) + optional branch (3 alnum)
SWIFT_CODE_PATTERN = re.compile(r"^[A-Z]{4}[A-Z]{2}[A-Z0-9]{2}([A-Z0-9]{3})?$")
ISO2_PATTERN = re.compile(r"^[A-Za-z]{2}$")


def is_blank(value: str | None) -> bool:
    """True for None, empty, or whitespace-only strings."""
    return value is None or not value.strip()


def embedded_country(swift_code: str) -> str:
    """Country part of a SWIFT code (characters 5-6), uppercased."""
    return swift_code[4:6].upper()


def is_headquarter_code(swift_code: str) -> bool:
    """Headquarters codes end with the literal XXX branch part."""
    return swift_code.upper().endswith(HQ_SUFFIX)


def branch_prefix(swift_code: str) -> str:
    """First 8 characters shared by a headquarters and its branches."""
    return swift_code[:8].upper()


class SwiftCodeEntry(BaseModel):
    """
    One registry record.

    Construction enforces the structural invariants of a stored entry:
    code length, embedded country and headquarters flag. Uniqueness is
    the store's job.
    """

    model_config = ConfigDict(frozen=True)

    swift_code: str
    bank_name: str
    address: str | None = None
    town_name: str | None = None
    country_iso2: str
    country_name: str
    is_headquarter: bool

    @field_validator("bank_name", "country_name")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if is_blank(v):
            msg = "must not be blank"
            raise ValueError(msg)
        return v

    @field_validator("country_iso2")
    @classmethod
    def validate_iso2(cls, v: str) -> str:
        if not ISO2_PATTERN.match(v):
            msg = f"country ISO2 must be exactly 2 letters, got: {v!r}"
            raise ValueError(msg)
        return v

    @model_validator(mode="after")
    def validate_consistency(self) -> "SwiftCodeEntry":
        code = self.swift_code
        if len(code) not in CODE_LENGTHS:
            msg = f"SWIFT code must have 8 or 11 characters, got {len(code)} ({code!r})"
            raise ValueError(msg)
        if embedded_country(code) != self.country_iso2.upper():
            msg = (
                f"SWIFT code {code!r} embeds country {embedded_country(code)!r}, "
                f"not {self.country_iso2!r}"
            )
            raise ValueError(msg)
        if self.is_headquarter != is_headquarter_code(code):
            msg = f"is_headquarter={self.is_headquarter} contradicts SWIFT code {code!r}"
            raise ValueError(msg)
        return self

    @property
    def branch_prefix(self) -> str:
        """Prefix that branches of this entry share."""
        return branch_prefix(self.swift_code)


class SwiftCodeRequest(BaseModel):
    """
    Candidate for a new registry entry.

    Accepts the JSON field names (swiftCode, countryISO2, ...) as well as
    the Python names. Codes are trimmed and uppercased before the format
    check; bank name and address are kept as given.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    swift_code: str = Field(alias="swiftCode")
    bank_name: str = Field(alias="bankName")
    address: str | None = Field(default=None, max_length=MAX_ADDRESS_LENGTH)
    country_iso2: str = Field(alias="countryISO2")
    country_name: str = Field(alias="countryName")
    is_headquarter: bool = Field(alias="isHeadquarter")

    @field_validator("swift_code")
    @classmethod
    def validate_swift_code(cls, v: str) -> str:
        if is_blank(v):
            msg = "SWIFT code cannot be blank"
            raise ValueError(msg)
        code = v.strip().upper()
        if not SWIFT_CODE_PATTERN.match(code):
            msg = (
                "Invalid SWIFT/BIC format. Should be an 8 to 11-character "
                "identifier (e.g., BANKPLPWXXX, BANKDEFF)"
            )
            raise ValueError(msg)
        return code

    @field_validator("bank_name")
    @classmethod
    def validate_bank_name(cls, v: str) -> str:
        if is_blank(v):
            msg = "Bank name cannot be blank"
            raise ValueError(msg)
        return v

    @field_validator("country_iso2")
    @classmethod
    def validate_country_iso2(cls, v: str) -> str:
        if is_blank(v):
            msg = "Country ISO2 code cannot be blank"
            raise ValueError(msg)
        if not ISO2_PATTERN.match(v):
            msg = "Country ISO2 code must be exactly 2 letters"
            raise ValueError(msg)
        return v.upper()

    @field_validator("country_name")
    @classmethod
    def validate_country_name(cls, v: str) -> str:
        if is_blank(v):
            msg = "Country name cannot be blank"
            raise ValueError(msg)
        return v.upper()


class SwiftCodeView(BaseModel):
    """External view of one entry, optionally with its branches."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    address: str
    bank_name: str = Field(alias="bankName")
    country_iso2: str = Field(alias="countryISO2")
    country_name: str | None = Field(default=None, alias="countryName")
    is_headquarter: bool = Field(alias="isHeadquarter")
    swift_code: str = Field(alias="swiftCode")
    branches: list["SwiftCodeView"] | None = None

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready dict; absent country name and branches are omitted."""
        return self.model_dump(by_alias=True, exclude_none=True)


class CountrySwiftCodesView(BaseModel):
    """All entries registered for one country."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    country_iso2: str = Field(alias="countryISO2")
    country_name: str = Field(alias="countryName")
    swift_codes: list[SwiftCodeView] = Field(default_factory=list, alias="swiftCodes")

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class MessageView(BaseModel):
    """Plain acknowledgment."""

    model_config = ConfigDict(frozen=True)

    message: str

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump()
