"""
Allow-list authority oracle - Implements AuthorityOracle protocol.

The set of verified authorities is maintained outside the registry core;
this adapter holds it in memory, seeded from settings, and lets operators
grant or revoke membership at runtime.
"""

import logging
from collections.abc import Iterable

logger = logging.getLogger(__name__)


class AllowlistAuthorityOracle:
    """Membership test against a mutable set of verified principals."""

    def __init__(self, principals: Iterable[str] = ()) -> None:
        self._principals = set(principals)

    def is_verified_authority(self, principal: str) -> bool:
        return principal in self._principals

    def grant(self, principal: str) -> None:
        self._principals.add(principal)
        logger.info("Verified authority granted: %s", principal)

    def revoke(self, principal: str) -> None:
        self._principals.discard(principal)
        logger.info("Verified authority revoked: %s", principal)
