"""Identity adapters - Authority membership oracle and sequence sources."""

from .allowlist import AllowlistAuthorityOracle
from .sequence import ManualSequence, WallClockSequence

__all__ = ["AllowlistAuthorityOracle", "ManualSequence", "WallClockSequence"]
