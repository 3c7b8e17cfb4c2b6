"""Ledger adapters - Value transfer implementations."""

from .console import ConsoleLedger, Transfer

__all__ = ["ConsoleLedger", "Transfer"]
