"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
"""

from fastapi import Depends, Request
from fastapi.security import APIKeyHeader

from src.domain.ports import AuthorityOracle, CharityStore, SequenceSource, ValueTransfer
from src.domain.registry import CharityRegistryService


def get_store(request: Request) -> CharityStore:
    """
    Get the charity store from app state.

    The store is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.store


def get_oracle(request: Request) -> AuthorityOracle:
    return request.app.state.oracle


def get_ledger(request: Request) -> ValueTransfer:
    return request.app.state.ledger


def get_sequence(request: Request) -> SequenceSource:
    return request.app.state.sequence


def get_registry_service(request: Request) -> CharityRegistryService:
    """
    Create registry service with injected dependencies.

    Wires together the store, authority oracle, ledger and sequence source.
    """
    return CharityRegistryService(
        store=get_store(request),
        oracle=get_oracle(request),
        ledger=get_ledger(request),
        sequence=get_sequence(request),
    )


# Caller principal header security scheme for OpenAPI documentation.
# Authentication happens upstream; the registry trusts the supplied principal.
caller_principal_header = APIKeyHeader(name="X-Caller-Principal")


def get_caller(principal: str = Depends(caller_principal_header)) -> str:
    """
    Extract the caller principal from the X-Caller-Principal header.

    FastAPI's APIKeyHeader rejects requests without the header before the
    route runs. Surrounding whitespace is stripped.
    """
    return principal.strip()
