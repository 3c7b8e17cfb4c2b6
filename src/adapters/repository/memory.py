"""
In-memory charity store adapter - Implements CharityStore protocol.

Keeps the id-keyed records, the name uniqueness index and the update slots
in plain dicts. atomic() snapshots the whole state on entry and restores it
if the block raises, so a failed unit of work leaves nothing behind. Units
hold a re-entrant lock, so units from different threads run one at a time.
"""

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from src.domain.models import Charity, CharityUpdate


class InMemoryCharityStore:
    """
    Implements CharityStore protocol with process-local dicts.

    Uses structural subtyping - no explicit inheritance from Protocol.
    Not durable; suitable for tests and single-process deployments.
    """

    def __init__(self, max_charities: int = 5000, registration_fee: int = 500) -> None:
        self._charities: dict[int, Charity] = {}
        self._updates: dict[int, CharityUpdate] = {}
        self._by_name: dict[str, int] = {}
        self._next_charity_id = 0
        self._max_charities = max_charities
        self._registration_fee = registration_fee
        self._authority_contract: str | None = None
        self._depth = 0
        self._lock = threading.RLock()

    @contextmanager
    def atomic(self) -> Iterator[None]:
        with self._lock:
            if self._depth:
                # Join the enclosing unit of work
                yield
                return

            snapshot = self._snapshot()
            self._depth += 1
            try:
                yield
            except BaseException:
                self._restore(snapshot)
                raise
            finally:
                self._depth -= 1

    def _snapshot(self) -> dict[str, Any]:
        # Records are frozen dataclasses, so shallow dict copies suffice
        return {
            "charities": dict(self._charities),
            "updates": dict(self._updates),
            "by_name": dict(self._by_name),
            "next_charity_id": self._next_charity_id,
            "registration_fee": self._registration_fee,
            "authority_contract": self._authority_contract,
        }

    def _restore(self, snapshot: dict[str, Any]) -> None:
        self._charities = snapshot["charities"]
        self._updates = snapshot["updates"]
        self._by_name = snapshot["by_name"]
        self._next_charity_id = snapshot["next_charity_id"]
        self._registration_fee = snapshot["registration_fee"]
        self._authority_contract = snapshot["authority_contract"]

    def get(self, charity_id: int) -> Charity | None:
        return self._charities.get(charity_id)

    def get_update(self, charity_id: int) -> CharityUpdate | None:
        return self._updates.get(charity_id)

    def id_for_name(self, name: str) -> int | None:
        return self._by_name.get(name)

    def exists_by_name(self, name: str) -> bool:
        return name in self._by_name

    def count(self) -> int:
        return self._next_charity_id

    def insert_new(self, charity: Charity) -> int:
        if charity.name in self._by_name:
            raise ValueError(f"Name already indexed: {charity.name!r}")
        charity_id = self._next_charity_id
        self._charities[charity_id] = charity
        self._by_name[charity.name] = charity_id
        self._next_charity_id += 1
        return charity_id

    def rename(self, charity_id: int, old_name: str, new_name: str) -> None:
        if self._by_name.get(old_name) != charity_id:
            raise KeyError(f"Charity {charity_id} is not indexed as {old_name!r}")
        if self._by_name.get(new_name, charity_id) != charity_id:
            raise ValueError(f"Name already indexed: {new_name!r}")
        del self._by_name[old_name]
        self._by_name[new_name] = charity_id
        self._charities[charity_id] = self._charities[charity_id].with_fields(name=new_name)

    def overwrite_fields(self, charity_id: int, **fields: Any) -> None:
        if "name" in fields:
            raise ValueError("Use rename() to change a charity name")
        self._charities[charity_id] = self._charities[charity_id].with_fields(**fields)

    def upsert_update_record(self, charity_id: int, record: CharityUpdate) -> None:
        self._updates[charity_id] = record

    def authority_contract(self) -> str | None:
        return self._authority_contract

    def bind_authority_contract(self, principal: str) -> bool:
        if self._authority_contract is not None:
            return False
        self._authority_contract = principal
        return True

    def registration_fee(self) -> int:
        return self._registration_fee

    def set_registration_fee(self, amount: int) -> None:
        self._registration_fee = amount

    def max_charities(self) -> int:
        return self._max_charities

