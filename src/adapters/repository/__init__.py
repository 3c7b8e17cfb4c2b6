"""Repository adapters - Charity store implementations."""

from .memory import InMemoryCharityStore
from .postgres import PostgresCharityStore, run_migrations

__all__ = ["InMemoryCharityStore", "PostgresCharityStore", "run_migrations"]
