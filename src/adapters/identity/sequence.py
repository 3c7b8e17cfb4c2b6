"""
Sequence sources - Implement SequenceSource protocol.

The registry stamps records with an externally supplied, non-decreasing
sequence number (a block height on a ledger). ManualSequence is advanced by
whoever orders the operations; WallClockSequence derives it from the clock.
"""

import time
from collections.abc import Callable


class ManualSequence:
    """Sequence number advanced explicitly by the external sequencer."""

    def __init__(self, start: int = 0) -> None:
        if start < 0:
            raise ValueError("Sequence number cannot be negative")
        self._height = start

    def current_sequence(self) -> int:
        return self._height

    def advance(self, steps: int = 1) -> int:
        """Move the sequence forward and return the new value."""
        if steps < 0:
            raise ValueError("Sequence number cannot move backwards")
        self._height += steps
        return self._height


class WallClockSequence:
    """
    Unix seconds as the sequence number.

    Clamped so a clock stepping backwards never yields a smaller value.
    """

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._last = 0

    def current_sequence(self) -> int:
        self._last = max(self._last, int(self._clock()))
        return self._last
