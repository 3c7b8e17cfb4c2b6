"""
Validation engine - Pure field checks for registration and update.

Every check maps to exactly one ErrorCode. Checks run in a fixed order and
the first failure is returned; no results are merged. Nothing here reads
or writes registry state.
"""

from .models import CharityDraft
from .ports import CharityType, Currency, ErrorCode

MAX_NAME_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 500
PROOF_HASH_LENGTH = 32
MAX_CATEGORY_LENGTH = 50
MAX_LOCATION_LENGTH = 100
MAX_CONTACT_INFO_LENGTH = 200
MAX_VERIFICATION_LEVEL = 5
# Ledger amounts are unsigned 128-bit integers
MAX_AMOUNT = 2**128 - 1

VALID_CURRENCIES = frozenset(c.value for c in Currency)
VALID_CHARITY_TYPES = frozenset(t.value for t in CharityType)


def _bounded(value: str, max_length: int, *, allow_empty: bool = False) -> bool:
    if not allow_empty and not value:
        return False
    # NUL cannot be stored as text
    if "\x00" in value:
        return False
    return len(value) <= max_length


def check_capacity(count: int, max_charities: int) -> ErrorCode | None:
    """Registry must have room for one more charity."""
    if count >= max_charities:
        return ErrorCode.MAX_CHARITIES_EXCEEDED
    return None


def check_name(name: str) -> ErrorCode | None:
    if not _bounded(name, MAX_NAME_LENGTH):
        return ErrorCode.INVALID_NAME
    return None


def check_description(description: str) -> ErrorCode | None:
    if not _bounded(description, MAX_DESCRIPTION_LENGTH):
        return ErrorCode.INVALID_DESCRIPTION
    return None


def check_proof_hash(proof_hash: bytes) -> ErrorCode | None:
    if len(proof_hash) != PROOF_HASH_LENGTH:
        return ErrorCode.INVALID_PROOF_HASH
    return None


def check_category(category: str) -> ErrorCode | None:
    if not _bounded(category, MAX_CATEGORY_LENGTH):
        return ErrorCode.INVALID_CATEGORY
    return None


def check_location(location: str) -> ErrorCode | None:
    if not _bounded(location, MAX_LOCATION_LENGTH):
        return ErrorCode.INVALID_LOCATION
    return None


def check_currency(currency: str) -> ErrorCode | None:
    if currency not in VALID_CURRENCIES:
        return ErrorCode.INVALID_CURRENCY
    return None


def check_min_donation(min_donation: int) -> ErrorCode | None:
    if not 0 < min_donation <= MAX_AMOUNT:
        return ErrorCode.INVALID_MIN_DONATION
    return None


def check_max_goal(max_goal: int) -> ErrorCode | None:
    if not 0 < max_goal <= MAX_AMOUNT:
        return ErrorCode.INVALID_MAX_GOAL
    return None


def check_charity_type(charity_type: str) -> ErrorCode | None:
    if charity_type not in VALID_CHARITY_TYPES:
        return ErrorCode.INVALID_CHARITY_TYPE
    return None


def check_contact_info(contact_info: str) -> ErrorCode | None:
    # Empty contact info is allowed
    if not _bounded(contact_info, MAX_CONTACT_INFO_LENGTH, allow_empty=True):
        return ErrorCode.INVALID_CONTACT_INFO
    return None


def check_verification_level(verification_level: int) -> ErrorCode | None:
    if not 0 <= verification_level <= MAX_VERIFICATION_LEVEL:
        return ErrorCode.INVALID_VERIFICATION_LEVEL
    return None


def validate_draft(draft: CharityDraft) -> ErrorCode | None:
    """
    Run the field checks for a registration, in order.

    Capacity and the state-dependent checks (authority, duplicate name,
    authority binding) are the service's job; this covers the fields only.

    Returns:
        The first failing ErrorCode, or None if every field is valid
    """
    return (
        check_name(draft.name)
        or check_description(draft.description)
        or check_proof_hash(draft.proof_hash)
        or check_category(draft.category)
        or check_location(draft.location)
        or check_currency(draft.currency)
        or check_min_donation(draft.min_donation)
        or check_max_goal(draft.max_goal)
        or check_charity_type(draft.charity_type)
        or check_contact_info(draft.contact_info)
        or check_verification_level(draft.verification_level)
    )


def validate_update(update_name: str, update_description: str) -> ErrorCode | None:
    """Field checks for a self-service update: name first, then description."""
    return check_name(update_name) or check_description(update_description)
