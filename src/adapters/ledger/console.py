"""
Console ledger adapter - Implements ValueTransfer protocol.

This module provides a process-local implementation of the domain's value
transfer port. Transfers are logged to the console and recorded in order,
which makes the adapter double as an audit trail in tests and demos.
"""

import logging
import threading
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Transfer:
    """One accepted value transfer."""

    amount: int
    sender: str
    recipient: str


class ConsoleLedger:
    """
    Implements ValueTransfer protocol via console logging.

    Uses structural subtyping - no explicit inheritance from Protocol.

    Without balances every transfer is accepted. With balances, a transfer
    that would overdraw the sender is refused and nothing moves.
    """

    def __init__(self, balances: dict[str, int] | None = None) -> None:
        self._balances = dict(balances) if balances is not None else None
        self._transfers: list[Transfer] = []
        self._lock = threading.Lock()

    @property
    def transfers(self) -> list[Transfer]:
        """Accepted transfers, oldest first."""
        with self._lock:
            return list(self._transfers)

    def balance(self, principal: str) -> int | None:
        """Current balance for principal, or None when balances are not tracked."""
        if self._balances is None:
            return None
        with self._lock:
            return self._balances.get(principal, 0)

    def transfer(self, amount: int, sender: str, recipient: str) -> bool:
        """
        Move amount from sender to recipient.

        Args:
            amount: Amount in the ledger's base unit
            sender: Paying principal
            recipient: Receiving principal

        Returns:
            True if accepted, False if refused (negative amount or overdraft)
        """
        if amount < 0:
            logger.warning("[TRANSFER] Refused negative amount %d from %s", amount, sender)
            return False

        with self._lock:
            if self._balances is not None:
                available = self._balances.get(sender, 0)
                if available < amount:
                    logger.warning(
                        "[TRANSFER] Refused %d from %s to %s: balance %d",
                        amount,
                        sender,
                        recipient,
                        available,
                    )
                    return False
                self._balances[sender] = available - amount
                self._balances[recipient] = self._balances.get(recipient, 0) + amount
            self._transfers.append(Transfer(amount=amount, sender=sender, recipient=recipient))

        logger.info("[TRANSFER] Amount: %d From: %s To: %s", amount, sender, recipient)
        return True
