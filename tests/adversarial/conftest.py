"""
Shared fixtures for adversarial tests.

Provides registry wiring whose collaborators can be made to misbehave.
"""

import pytest

from src.adapters.identity import AllowlistAuthorityOracle, ManualSequence
from src.adapters.repository import InMemoryCharityStore
from tests.factories import CREATOR


@pytest.fixture
def store() -> InMemoryCharityStore:
    return InMemoryCharityStore(max_charities=50, registration_fee=500)


@pytest.fixture
def oracle() -> AllowlistAuthorityOracle:
    return AllowlistAuthorityOracle([CREATOR, "ST4SECOND"])


@pytest.fixture
def sequence() -> ManualSequence:
    return ManualSequence()
