"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
Field rules (lengths, enums, ranges) are deliberately left to the domain so
that every rejection carries the registry's own error code.
"""

from pydantic import BaseModel, Field, field_validator

from src.domain.models import Charity, CharityUpdate


class AuthorityRequest(BaseModel):
    """Request model for binding the authority contract."""

    principal: str = Field(..., min_length=1, description="Principal to bind as authority")


class FeeRequest(BaseModel):
    """Request model for changing the registration fee."""

    amount: int = Field(..., description="New registration fee")


class AcceptedResponse(BaseModel):
    """Response model for accepted administrative writes."""

    success: bool = True


class RegisterCharityRequest(BaseModel):
    """Request model for charity registration."""

    name: str
    description: str
    proof_hash: str = Field(..., description="Hex-encoded attestation digest (32 bytes)")
    category: str
    location: str
    currency: str = Field(..., description="One of STX, USD, BTC")
    min_donation: int
    max_goal: int
    charity_type: str = Field(..., description="One of non-profit, community, environmental")
    contact_info: str = ""
    verification_level: int = Field(..., description="Verification level 0-5")

    @field_validator("proof_hash")
    @classmethod
    def proof_hash_is_hex(cls, value: str) -> str:
        try:
            bytes.fromhex(value)
        except ValueError:
            raise ValueError("proof_hash must be a hex string") from None
        return value

    def proof_hash_bytes(self) -> bytes:
        return bytes.fromhex(self.proof_hash)


class RegisterCharityResponse(BaseModel):
    """Response model for successful registration."""

    id: int


class UpdateCharityRequest(BaseModel):
    """Request model for a self-service charity update."""

    update_name: str
    update_description: str


class CharityResponse(BaseModel):
    """Stored charity record."""

    id: int
    name: str
    description: str
    proof_hash: str
    category: str
    location: str
    currency: str
    min_donation: int
    max_goal: int
    timestamp: int
    creator: str
    charity_type: str
    contact_info: str
    status: bool
    verification_level: int

    @classmethod
    def from_domain(cls, charity_id: int, charity: Charity) -> "CharityResponse":
        return cls(
            id=charity_id,
            name=charity.name,
            description=charity.description,
            proof_hash=charity.proof_hash.hex(),
            category=charity.category,
            location=charity.location,
            currency=charity.currency.value,
            min_donation=charity.min_donation,
            max_goal=charity.max_goal,
            timestamp=charity.timestamp,
            creator=charity.creator,
            charity_type=charity.charity_type.value,
            contact_info=charity.contact_info,
            status=charity.status,
            verification_level=charity.verification_level,
        )


class CharityUpdateResponse(BaseModel):
    """Latest update record for a charity."""

    update_name: str
    update_description: str
    update_timestamp: int
    updater: str

    @classmethod
    def from_domain(cls, record: CharityUpdate) -> "CharityUpdateResponse":
        return cls(
            update_name=record.update_name,
            update_description=record.update_description,
            update_timestamp=record.update_timestamp,
            updater=record.updater,
        )


class CountResponse(BaseModel):
    count: int


class ExistenceResponse(BaseModel):
    name: str
    exists: bool


class ErrorResponse(BaseModel):
    """Standard error response model."""

    detail: str
    code: int | None = None
