"""Tests for registry value models."""

import pytest
from pydantic import ValidationError

from swiftregistry.models import (
    MessageView,
    SwiftCodeEntry,
    SwiftCodeRequest,
    SwiftCodeView,
    branch_prefix,
    embedded_country,
    is_blank,
    is_headquarter_code,
)


class TestCodeHelpers:
    """Tests for the SWIFT code helper functions."""

    def test_embedded_country(self) -> None:
        assert embedded_country("BREXPLPWXXX") == "PL"
        assert embedded_country("deutdeff") == "DE"

    def test_is_headquarter_code(self) -> None:
        assert is_headquarter_code("BREXPLPWXXX")
        assert is_headquarter_code("brexplpwxxx")
        assert not is_headquarter_code("BREXPLPWWAW")
        assert not is_headquarter_code("DEUTDEFF")

    def test_branch_prefix(self) -> None:
        assert branch_prefix("brexplpwxxx") == "BREXPLPW"

    @pytest.mark.parametrize("value", [None, "", "   ", "\t"])
    def test_is_blank(self, value: str | None) -> None:
        assert is_blank(value)

    def test_is_not_blank(self) -> None:
        assert not is_blank(" x ")


class TestSwiftCodeEntry:
    """Tests for structural invariants of stored entries."""

    def test_valid_headquarters(self, hq_entry: SwiftCodeEntry) -> None:
        """Test that a consistent headquarters entry is accepted."""
        assert hq_entry.is_headquarter
        assert hq_entry.branch_prefix == "AAAABBCC"

    def test_eight_character_code_is_not_headquarters(self, make_entry) -> None:
        """Test that 8-character codes are plain (non-headquarters) entries."""
        entry = make_entry("DEUTPLPX")
        assert not entry.is_headquarter

    def test_optional_address_and_town(self, make_entry) -> None:
        entry = make_entry("DEUTPLPX", address=None, town_name=None)
        assert entry.address is None
        assert entry.town_name is None

    @pytest.mark.parametrize("code", ["DEUTPLP", "DEUTPLPXX", "DEUTPLPXXXXX"])
    def test_rejects_bad_length(self, make_entry, code: str) -> None:
        with pytest.raises(ValidationError, match="8 or 11 characters"):
            make_entry(code, country_iso2="PL", is_headquarter=False)

    def test_rejects_country_mismatch(self, make_entry) -> None:
        with pytest.raises(ValidationError, match="embeds country"):
            make_entry("BREXPLPWXXX", country_iso2="DE")

    def test_rejects_wrong_headquarter_flag(self, make_entry) -> None:
        with pytest.raises(ValidationError, match="contradicts"):
            make_entry("BREXPLPWXXX", is_headquarter=False)
        with pytest.raises(ValidationError, match="contradicts"):
            make_entry("BREXPLPWWAW", is_headquarter=True)

    def test_rejects_blank_bank_name(self, make_entry) -> None:
        with pytest.raises(ValidationError, match="must not be blank"):
            make_entry("BREXPLPWXXX", bank_name="  ")

    def test_rejects_bad_iso2(self, make_entry) -> None:
        with pytest.raises(ValidationError, match="exactly 2 letters"):
            make_entry("BREXPLPWXXX", country_iso2="P1")

    def test_entry_is_frozen(self, hq_entry: SwiftCodeEntry) -> None:
        with pytest.raises(ValidationError):
            hq_entry.bank_name = "OTHER"  # type: ignore[misc]


class TestSwiftCodeRequest:
    """Tests for add-candidate parsing and normalization."""

    def test_parses_json_names(self, valid_request) -> None:
        """Test that camelCase JSON keys populate the model."""
        request = SwiftCodeRequest.model_validate(valid_request)
        assert request.swift_code == "BREXPLPWXXX"
        assert request.bank_name == "mBank S.A."
        assert request.country_iso2 == "PL"
        assert request.is_headquarter is True

    def test_normalizes_case(self, valid_request) -> None:
        """Test that code, ISO2 and country name are uppercased; bank name is kept."""
        payload = {
            **valid_request,
            "swiftCode": "  brexplpwxxx ",
            "countryISO2": "pl",
            "countryName": "poland",
        }
        request = SwiftCodeRequest.model_validate(payload)
        assert request.swift_code == "BREXPLPWXXX"
        assert request.country_iso2 == "PL"
        assert request.country_name == "POLAND"
        assert request.bank_name == "mBank S.A."

    def test_accepts_python_names(self) -> None:
        request = SwiftCodeRequest(
            swift_code="DEUTPLPX",
            bank_name="Deutsche Bank Polska",
            country_iso2="PL",
            country_name="Poland",
            is_headquarter=False,
        )
        assert request.address is None

    @pytest.mark.parametrize("code", ["BREX", "BREXPLPWXX", "1REXPLPWXXX", "BREX-LPWXXX"])
    def test_rejects_bad_format(self, valid_request, code: str) -> None:
        with pytest.raises(ValidationError, match="Invalid SWIFT/BIC format"):
            SwiftCodeRequest.model_validate({**valid_request, "swiftCode": code})

    def test_rejects_blank_code(self, valid_request) -> None:
        with pytest.raises(ValidationError, match="SWIFT code cannot be blank"):
            SwiftCodeRequest.model_validate({**valid_request, "swiftCode": "  "})

    def test_rejects_blank_bank_name(self, valid_request) -> None:
        with pytest.raises(ValidationError, match="Bank name cannot be blank"):
            SwiftCodeRequest.model_validate({**valid_request, "bankName": ""})

    def test_rejects_bad_iso2(self, valid_request) -> None:
        with pytest.raises(ValidationError, match="exactly 2 letters"):
            SwiftCodeRequest.model_validate({**valid_request, "countryISO2": "POL"})
        with pytest.raises(ValidationError, match="cannot be blank"):
            SwiftCodeRequest.model_validate({**valid_request, "countryISO2": " "})

    def test_rejects_long_address(self, valid_request) -> None:
        with pytest.raises(ValidationError):
            SwiftCodeRequest.model_validate({**valid_request, "address": "x" * 513})

    def test_requires_headquarter_flag(self, valid_request) -> None:
        payload = dict(valid_request)
        del payload["isHeadquarter"]
        with pytest.raises(ValidationError):
            SwiftCodeRequest.model_validate(payload)


class TestViews:
    """Tests for the external JSON shapes."""

    def test_omits_absent_fields(self) -> None:
        """Test that a nested branch view has no countryName or branches key."""
        view = SwiftCodeView(
            address="ADDR",
            bank_name="BANK",
            country_iso2="PL",
            is_headquarter=False,
            swift_code="BREXPLPWWAW",
        )
        assert view.to_dict() == {
            "address": "ADDR",
            "bankName": "BANK",
            "countryISO2": "PL",
            "isHeadquarter": False,
            "swiftCode": "BREXPLPWWAW",
        }

    def test_key_order(self) -> None:
        view = SwiftCodeView(
            address="",
            bank_name="BANK",
            country_iso2="PL",
            country_name="POLAND",
            is_headquarter=True,
            swift_code="BREXPLPWXXX",
            branches=[],
        )
        assert list(view.to_dict()) == [
            "address",
            "bankName",
            "countryISO2",
            "countryName",
            "isHeadquarter",
            "swiftCode",
            "branches",
        ]

    def test_message_view(self) -> None:
        assert MessageView(message="done").to_dict() == {"message": "done"}
