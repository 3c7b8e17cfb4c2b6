"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- In-memory registry wiring (store, oracle, ledger, sequence)
- A ready-made registry service with a bound authority contract

Data factories live in tests/factories.py.
"""

import pytest

from src.adapters.identity import AllowlistAuthorityOracle, ManualSequence
from src.adapters.ledger import ConsoleLedger
from src.adapters.repository import InMemoryCharityStore
from src.domain.registry import CharityRegistryService
from tests.factories import AUTHORITY, CREATOR


@pytest.fixture
def store() -> InMemoryCharityStore:
    return InMemoryCharityStore(max_charities=5000, registration_fee=500)


@pytest.fixture
def oracle() -> AllowlistAuthorityOracle:
    return AllowlistAuthorityOracle([CREATOR])


@pytest.fixture
def ledger() -> ConsoleLedger:
    return ConsoleLedger()


@pytest.fixture
def sequence() -> ManualSequence:
    return ManualSequence()


@pytest.fixture
def unbound_service(
    store: InMemoryCharityStore,
    oracle: AllowlistAuthorityOracle,
    ledger: ConsoleLedger,
    sequence: ManualSequence,
) -> CharityRegistryService:
    """Registry service with no authority contract bound yet."""
    return CharityRegistryService(store=store, oracle=oracle, ledger=ledger, sequence=sequence)


@pytest.fixture
def service(unbound_service: CharityRegistryService) -> CharityRegistryService:
    """Registry service with the authority contract bound to AUTHORITY."""
    assert unbound_service.set_authority_contract(AUTHORITY).ok
    return unbound_service
