"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the vocabulary (enums, error codes) and the interfaces
(ports) the registry core requires from its collaborators. Adapters
implement these protocols by structural subtyping.
"""

from contextlib import AbstractContextManager
from enum import Enum, IntEnum
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from .models import Charity, CharityUpdate


class Currency(str, Enum):
    """Currencies a charity may denominate donations in."""

    STX = "STX"
    USD = "USD"
    BTC = "BTC"


class CharityType(str, Enum):
    """Organization kinds accepted by the registry."""

    NON_PROFIT = "non-profit"
    COMMUNITY = "community"
    ENVIRONMENTAL = "environmental"


class ErrorCode(IntEnum):
    """
    Stable error codes returned by registry operations.

    Numeric values are part of the public contract and never change.
    """

    NOT_AUTHORIZED = 100
    INVALID_NAME = 101
    INVALID_DESCRIPTION = 102
    INVALID_PROOF_HASH = 103
    CHARITY_ALREADY_EXISTS = 105
    CHARITY_NOT_FOUND = 106
    AUTHORITY_NOT_VERIFIED = 108
    INVALID_CATEGORY = 109
    INVALID_LOCATION = 110
    INVALID_CURRENCY = 111
    INVALID_MIN_DONATION = 112
    INVALID_MAX_GOAL = 113
    MAX_CHARITIES_EXCEEDED = 116
    INVALID_CHARITY_TYPE = 117
    INVALID_CONTACT_INFO = 118
    INVALID_REGISTRATION_FEE = 119
    INVALID_VERIFICATION_LEVEL = 120
    INVALID_AUTHORITY_CONTRACT = 121
    AUTHORITY_ALREADY_SET = 122
    TRANSFER_FAILED = 123


class SequenceSource(Protocol):
    """Port interface for the externally supplied sequence number (block height)."""

    def current_sequence(self) -> int:
        """Return the current sequence number. Never decreases between calls."""
        ...


class AuthorityOracle(Protocol):
    """Port interface for the verified-authority membership oracle."""

    def is_verified_authority(self, principal: str) -> bool:
        """Return True if principal may register charities."""
        ...


class ValueTransfer(Protocol):
    """Port interface for the ledger that moves registration fees."""

    def transfer(self, amount: int, sender: str, recipient: str) -> bool:
        """
        Move amount from sender to recipient.

        Args:
            amount: Fee amount in the ledger's base unit
            sender: Paying principal (the registering caller)
            recipient: Receiving principal (the bound authority contract)

        Returns:
            True if the transfer was accepted, False if it was refused
        """
        ...


class CharityStore(Protocol):
    """
    Port interface for registry state persistence.

    Holds the id-keyed charity records, the name uniqueness index, the
    per-charity update slot and the registry counters/settings. Mutation
    primitives are only called by the registry service, inside atomic().
    """

    def atomic(self) -> AbstractContextManager[None]:
        """
        Open a unit of work.

        All writes made inside become visible together. If an exception
        propagates out of the block, every write is rolled back and the
        exception is re-raised. Nested calls join the outer unit.

        Units opened by different threads or tasks run one at a time, so
        reads made inside a unit still hold when its writes are applied.
        """
        ...

    def get(self, charity_id: int) -> "Charity | None":
        """Point lookup by id; None for unknown ids."""
        ...

    def get_update(self, charity_id: int) -> "CharityUpdate | None":
        """Return the latest update record for a charity, if any."""
        ...

    def id_for_name(self, name: str) -> int | None:
        """Uniqueness index lookup."""
        ...

    def exists_by_name(self, name: str) -> bool:
        """True if name is present in the uniqueness index."""
        ...

    def count(self) -> int:
        """Return next_charity_id (the number of registered charities)."""
        ...

    def insert_new(self, charity: "Charity") -> int:
        """Store charity under the next id, index its name, bump the counter."""
        ...

    def rename(self, charity_id: int, old_name: str, new_name: str) -> None:
        """
        Rename a charity.

        Updates the record's name and swaps old_name for new_name in the
        uniqueness index as one step.
        """
        ...

    def overwrite_fields(self, charity_id: int, **fields: Any) -> None:
        """Replace the given non-name fields of a stored charity."""
        ...

    def upsert_update_record(self, charity_id: int, record: "CharityUpdate") -> None:
        """Create or overwrite the update slot for a charity."""
        ...

    def authority_contract(self) -> str | None:
        """Return the bound authority contract, or None if unbound."""
        ...

    def bind_authority_contract(self, principal: str) -> bool:
        """Bind the authority contract once. False if already bound."""
        ...

    def registration_fee(self) -> int:
        """Return the current registration fee."""
        ...

    def set_registration_fee(self, amount: int) -> None:
        """Overwrite the registration fee."""
        ...

    def max_charities(self) -> int:
        """Return the capacity ceiling."""
        ...
