"""
Domain models - Charity records, update records and operation results.

Plain dataclasses with no framework dependencies. Records are frozen;
the store replaces them wholesale instead of mutating in place.
"""

from dataclasses import dataclass, replace
from typing import Any, Generic, TypeVar

from .exceptions import RegistryError
from .ports import CharityType, Currency, ErrorCode

T = TypeVar("T")


@dataclass(frozen=True)
class Charity:
    """One registered organization."""

    name: str
    description: str
    proof_hash: bytes
    category: str
    location: str
    currency: Currency
    min_donation: int
    max_goal: int
    timestamp: int
    creator: str
    charity_type: CharityType
    contact_info: str
    status: bool = True
    verification_level: int = 0

    def with_fields(self, **fields: Any) -> "Charity":
        """Return a copy with the given fields replaced."""
        return replace(self, **fields)


@dataclass(frozen=True)
class CharityUpdate:
    """Most recent self-service update applied to a charity."""

    update_name: str
    update_description: str
    update_timestamp: int
    updater: str


@dataclass(frozen=True)
class CharityDraft:
    """
    Registration inputs as submitted by a caller.

    Fields are unvalidated: currency and charity_type are raw strings and
    may name values outside their enums.
    """

    name: str
    description: str
    proof_hash: bytes
    category: str
    location: str
    currency: str
    min_donation: int
    max_goal: int
    charity_type: str
    contact_info: str
    verification_level: int


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Outcome of a registry write operation.

    Exactly one of value/error is meaningful: ok results carry a payload,
    failed results carry a stable ErrorCode.
    """

    value: T | None = None
    error: ErrorCode | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: ErrorCode) -> "Result[T]":
        return cls(error=error)

    def unwrap(self) -> T:
        """
        Return the payload or raise.

        Raises:
            RegistryError: If the result is a failure
        """
        if self.error is not None:
            raise RegistryError(self.error)
        return self.value  # type: ignore[return-value]
