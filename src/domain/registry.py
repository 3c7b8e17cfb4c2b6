"""
Charity registry domain service - Registration and update state machine.

This module composes the authority gate, fee policy, validation engine and
charity store into the registry's two state transitions.

Charity Lifecycle
=================

States:
- Unregistered: no record exists for the name
- Active: record stored after a successful registration

Valid Transitions:
    Unregistered -> Active   (register_charity)
    Active -> Active         (update_charity: name, description, timestamp)

There is no deactivation or removal. The stored ``status`` flag is kept as
state but no operation changes it.

Atomicity
=========

Every operation reads the state it decides on and applies all of its writes
inside one ``store.atomic()`` unit, so concurrent callers cannot act on a
stale decision. For registration the fee transfer is requested inside the
same unit; if the ledger refuses it, TransferFailed unwinds the unit and no
charity, index entry or counter change survives.
"""

import logging
from dataclasses import dataclass, field

from .authority import AuthorityGate
from .exceptions import TransferFailed
from .fees import FeePolicy
from .models import Charity, CharityDraft, CharityUpdate, Result
from .ports import (
    AuthorityOracle,
    CharityStore,
    CharityType,
    Currency,
    ErrorCode,
    SequenceSource,
    ValueTransfer,
)
from .validation import check_capacity, validate_draft, validate_update

logger = logging.getLogger(__name__)


@dataclass
class CharityRegistryService:
    """
    Domain service for the charity registry.

    Orchestrates validation, authority gating, uniqueness checks, store
    mutation and the registration fee transfer. Callers identify themselves
    per call through the ``caller`` keyword.
    """

    store: CharityStore
    oracle: AuthorityOracle
    ledger: ValueTransfer
    sequence: SequenceSource
    gate: AuthorityGate = field(init=False)
    fees: FeePolicy = field(init=False)

    def __post_init__(self) -> None:
        self.gate = AuthorityGate(oracle=self.oracle, store=self.store)
        self.fees = FeePolicy(store=self.store, gate=self.gate)

    # Authority and fee administration

    def set_authority_contract(self, principal: str) -> Result[bool]:
        result = self.gate.set_authority_contract(principal)
        if result.ok:
            logger.info("Authority contract bound to %s", principal)
        else:
            logger.debug("Authority binding to %s rejected: %s", principal, result.error)
        return result

    def set_registration_fee(self, amount: int) -> Result[bool]:
        result = self.fees.set_registration_fee(amount)
        if result.ok:
            logger.info("Registration fee set to %d", amount)
        else:
            logger.debug("Registration fee change to %d rejected: %s", amount, result.error)
        return result

    def is_verified_authority(self, principal: str) -> bool:
        return self.gate.is_verified_authority(principal)

    # State transitions

    def register_charity(
        self,
        name: str,
        description: str,
        proof_hash: bytes,
        category: str,
        location: str,
        currency: str,
        min_donation: int,
        max_goal: int,
        charity_type: str,
        contact_info: str,
        verification_level: int,
        *,
        caller: str,
    ) -> Result[int]:
        """
        Register a new charity on behalf of caller.

        Checks run in a fixed order and the first failure is returned:
        capacity, field checks, verified authority, duplicate name,
        authority binding. On success the fee is transferred from caller
        to the bound authority contract as part of the same atomic unit.

        Returns:
            ok(new charity id), or the first failing ErrorCode
        """
        draft = CharityDraft(
            name=name,
            description=description,
            proof_hash=proof_hash,
            category=category,
            location=location,
            currency=currency,
            min_donation=min_donation,
            max_goal=max_goal,
            charity_type=charity_type,
            contact_info=contact_info,
            verification_level=verification_level,
        )
        try:
            with self.store.atomic():
                error = self._check_registration(draft, caller)
                if error is not None:
                    logger.debug(
                        "Registration of %r by %s rejected: %s", name, caller, error.name
                    )
                    return Result.failure(error)

                authority = self.gate.authority_contract()
                fee = self.fees.current_fee()
                charity_id = self.store.insert_new(self._build_charity(draft, caller))
                if not self.ledger.transfer(fee, caller, authority):
                    raise TransferFailed(fee, caller, authority)
        except TransferFailed as e:
            logger.warning("Registration of %r rolled back: %s", name, e)
            return Result.failure(e.code)

        logger.info("Registered charity %r as id %d (creator %s)", name, charity_id, caller)
        return Result.success(charity_id)

    def update_charity(
        self,
        charity_id: int,
        update_name: str,
        update_description: str,
        *,
        caller: str,
    ) -> Result[bool]:
        """
        Apply a self-service update to a charity.

        Only the creator may update. Renaming to another charity's name is
        rejected; keeping the current name is allowed.

        Returns:
            ok(True), or CHARITY_NOT_FOUND / NOT_AUTHORIZED / INVALID_NAME /
            INVALID_DESCRIPTION / CHARITY_ALREADY_EXISTS
        """
        with self.store.atomic():
            charity = self.store.get(charity_id)
            if charity is None:
                return self._reject_update(charity_id, caller, ErrorCode.CHARITY_NOT_FOUND)
            error = self._check_update(charity, charity_id, update_name, update_description, caller)
            if error is not None:
                return self._reject_update(charity_id, caller, error)

            timestamp = self.sequence.current_sequence()
            if update_name != charity.name:
                self.store.rename(charity_id, charity.name, update_name)
            self.store.overwrite_fields(
                charity_id,
                description=update_description,
                timestamp=timestamp,
            )
            self.store.upsert_update_record(
                charity_id,
                CharityUpdate(
                    update_name=update_name,
                    update_description=update_description,
                    update_timestamp=timestamp,
                    updater=caller,
                ),
            )

        logger.info("Updated charity %d (%r -> %r)", charity_id, charity.name, update_name)
        return Result.success(True)

    # Read-only queries

    def get_charity(self, charity_id: int) -> Charity | None:
        return self.store.get(charity_id)

    def get_charity_update(self, charity_id: int) -> CharityUpdate | None:
        return self.store.get_update(charity_id)

    def get_charity_count(self) -> int:
        return self.store.count()

    def check_charity_existence(self, name: str) -> bool:
        return self.store.exists_by_name(name)

    def registration_fee(self) -> int:
        return self.fees.current_fee()

    def authority_contract(self) -> str | None:
        return self.gate.authority_contract()

    # Validation order

    def _build_charity(self, draft: CharityDraft, caller: str) -> Charity:
        return Charity(
            name=draft.name,
            description=draft.description,
            proof_hash=bytes(draft.proof_hash),
            category=draft.category,
            location=draft.location,
            currency=Currency(draft.currency),
            min_donation=draft.min_donation,
            max_goal=draft.max_goal,
            timestamp=self.sequence.current_sequence(),
            creator=caller,
            charity_type=CharityType(draft.charity_type),
            contact_info=draft.contact_info,
            status=True,
            verification_level=draft.verification_level,
        )

    def _reject_update(self, charity_id: int, caller: str, error: ErrorCode) -> Result[bool]:
        logger.debug("Update of charity %d by %s rejected: %s", charity_id, caller, error.name)
        return Result.failure(error)

    def _check_registration(self, draft: CharityDraft, caller: str) -> ErrorCode | None:
        error = check_capacity(self.store.count(), self.store.max_charities())
        if error is not None:
            return error
        error = validate_draft(draft)
        if error is not None:
            return error
        if not self.gate.is_verified_authority(caller):
            return ErrorCode.NOT_AUTHORIZED
        if self.store.exists_by_name(draft.name):
            return ErrorCode.CHARITY_ALREADY_EXISTS
        if not self.gate.is_bound():
            return ErrorCode.AUTHORITY_NOT_VERIFIED
        return None

    def _check_update(
        self,
        charity: Charity,
        charity_id: int,
        update_name: str,
        update_description: str,
        caller: str,
    ) -> ErrorCode | None:
        if charity.creator != caller:
            return ErrorCode.NOT_AUTHORIZED
        error = validate_update(update_name, update_description)
        if error is not None:
            return error
        existing = self.store.id_for_name(update_name)
        if existing is not None and existing != charity_id:
            return ErrorCode.CHARITY_ALREADY_EXISTS
        return None
