"""
Unit tests for API request/response models.

Tests Pydantic model validation for the registry endpoints.
"""

import pytest
from pydantic import ValidationError

from src.api.models import (
    AuthorityRequest,
    CharityResponse,
    CharityUpdateResponse,
    ErrorResponse,
    FeeRequest,
    RegisterCharityRequest,
    UpdateCharityRequest,
)
from src.domain.models import Charity, CharityUpdate
from src.domain.ports import CharityType, Currency
from tests.factories import charity_payload


class TestRegisterCharityRequest:
    def test_valid_request(self) -> None:
        request = RegisterCharityRequest(**charity_payload())

        assert request.name == "HelpFund"
        assert request.proof_hash_bytes() == bytes(32)

    def test_field_rules_left_to_domain(self) -> None:
        """Out-of-range values parse; the domain reports them with its codes."""
        request = RegisterCharityRequest(
            **charity_payload(name="", currency="EUR", verification_level=9, proof_hash="00")
        )

        assert request.name == ""
        assert request.proof_hash_bytes() == b"\x00"

    def test_non_hex_proof_hash_rejected(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            RegisterCharityRequest(**charity_payload(proof_hash="not-hex"))
        assert "proof_hash" in str(exc_info.value)

    def test_contact_info_defaults_to_empty(self) -> None:
        payload = charity_payload()
        del payload["contact_info"]

        assert RegisterCharityRequest(**payload).contact_info == ""

    def test_missing_name_rejected(self) -> None:
        payload = charity_payload()
        del payload["name"]

        with pytest.raises(ValidationError):
            RegisterCharityRequest(**payload)

    def test_non_integer_donation_rejected(self) -> None:
        with pytest.raises(ValidationError):
            RegisterCharityRequest(**charity_payload(min_donation="lots"))


class TestAdminRequests:
    def test_authority_request_requires_principal(self) -> None:
        with pytest.raises(ValidationError):
            AuthorityRequest(principal="")

    def test_fee_request(self) -> None:
        assert FeeRequest(amount=1000).amount == 1000

    def test_update_request(self) -> None:
        request = UpdateCharityRequest(update_name="New", update_description="Desc")
        assert request.update_name == "New"


class TestResponses:
    def test_charity_response_from_domain(self) -> None:
        charity = Charity(
            name="HelpFund",
            description="Aid for all",
            proof_hash=b"\xab" * 32,
            category="health",
            location="Global",
            currency=Currency.BTC,
            min_donation=10,
            max_goal=10000,
            timestamp=3,
            creator="ST1TEST",
            charity_type=CharityType.ENVIRONMENTAL,
            contact_info="",
            verification_level=2,
        )

        response = CharityResponse.from_domain(7, charity)

        assert response.id == 7
        assert response.proof_hash == "ab" * 32
        assert response.currency == "BTC"
        assert response.charity_type == "environmental"
        assert response.status is True

    def test_update_response_from_domain(self) -> None:
        response = CharityUpdateResponse.from_domain(CharityUpdate("N", "D", 4, "ST1TEST"))

        assert response.model_dump() == {
            "update_name": "N",
            "update_description": "D",
            "update_timestamp": 4,
            "updater": "ST1TEST",
        }

    def test_error_response_code_optional(self) -> None:
        assert ErrorResponse(detail="Charity not found").code is None
