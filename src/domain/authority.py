"""
Authority gate - Verified-authority checks and the authority contract binding.

The authority contract is an init-then-lock value: it moves from unbound to
bound exactly once and never changes afterwards.
"""

from dataclasses import dataclass

from .models import Result
from .ports import AuthorityOracle, CharityStore, ErrorCode

# Reserved null/burn principal; can never be bound as the authority contract.
BURN_PRINCIPAL = "SP000000000000000000002Q6VF78"


@dataclass
class AuthorityGate:
    """Answers who may register and holds the one-time authority binding."""

    oracle: AuthorityOracle
    store: CharityStore

    def is_verified_authority(self, principal: str) -> bool:
        return self.oracle.is_verified_authority(principal)

    def authority_contract(self) -> str | None:
        return self.store.authority_contract()

    def is_bound(self) -> bool:
        return self.store.authority_contract() is not None

    def set_authority_contract(self, principal: str) -> Result[bool]:
        """
        Bind the authority contract.

        Returns:
            ok(True) on first successful binding;
            INVALID_AUTHORITY_CONTRACT for the burn principal or a
            principal containing NUL;
            AUTHORITY_ALREADY_SET if a contract is already bound
        """
        if principal == BURN_PRINCIPAL or "\x00" in principal:
            return Result.failure(ErrorCode.INVALID_AUTHORITY_CONTRACT)
        with self.store.atomic():
            if not self.store.bind_authority_contract(principal):
                return Result.failure(ErrorCode.AUTHORITY_ALREADY_SET)
        return Result.success(True)
