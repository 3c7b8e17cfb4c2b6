"""Fee policy - The registration fee, changeable once an authority is bound."""

from dataclasses import dataclass

from .authority import AuthorityGate
from .models import Result
from .ports import CharityStore, ErrorCode
from .validation import MAX_AMOUNT


@dataclass
class FeePolicy:
    store: CharityStore
    gate: AuthorityGate

    def current_fee(self) -> int:
        return self.store.registration_fee()

    def set_registration_fee(self, amount: int) -> Result[bool]:
        """
        Overwrite the registration fee.

        No business bounds apply; only amounts outside the unsigned 128-bit
        ledger range are rejected.
        """
        with self.store.atomic():
            if not self.gate.is_bound():
                return Result.failure(ErrorCode.AUTHORITY_NOT_VERIFIED)
            if not 0 <= amount <= MAX_AMOUNT:
                return Result.failure(ErrorCode.INVALID_REGISTRATION_FEE)
            self.store.set_registration_fee(amount)
        return Result.success(True)
