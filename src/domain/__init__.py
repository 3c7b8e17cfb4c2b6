"""
Domain layer - Pure business logic with zero framework imports.

This package contains the core state-transition logic of the charity
registry: validation, authority gating, fee policy and the registration and
update orchestration. It defines its own port interfaces for infrastructure
abstraction, ensuring true hexagonal architecture decoupling.
"""

from .authority import BURN_PRINCIPAL, AuthorityGate
from .exceptions import RegistryError, TransferFailed
from .fees import FeePolicy
from .models import Charity, CharityDraft, CharityUpdate, Result
from .ports import (
    AuthorityOracle,
    CharityStore,
    CharityType,
    Currency,
    ErrorCode,
    SequenceSource,
    ValueTransfer,
)
from .registry import CharityRegistryService

__all__ = [
    "BURN_PRINCIPAL",
    "AuthorityGate",
    "AuthorityOracle",
    "Charity",
    "CharityDraft",
    "CharityRegistryService",
    "CharityStore",
    "CharityType",
    "CharityUpdate",
    "Currency",
    "ErrorCode",
    "FeePolicy",
    "RegistryError",
    "Result",
    "SequenceSource",
    "TransferFailed",
    "ValueTransfer",
]
