"""Test data factories shared across unit, integration and adversarial tests."""

from typing import Any

CREATOR = "ST1TEST"
AUTHORITY = "ST2TEST"
OUTSIDER = "ST3FAKE"


def charity_fields(**overrides: Any) -> dict[str, Any]:
    """Valid register_charity keyword arguments, with overrides applied."""
    fields: dict[str, Any] = {
        "name": "HelpFund",
        "description": "Aid for all",
        "proof_hash": bytes(32),
        "category": "health",
        "location": "Global",
        "currency": "STX",
        "min_donation": 10,
        "max_goal": 10000,
        "charity_type": "non-profit",
        "contact_info": "contact@helpfund.org",
        "verification_level": 3,
    }
    fields.update(overrides)
    return fields


def charity_payload(**overrides: Any) -> dict[str, Any]:
    """Valid POST /v1/charities JSON body, with overrides applied."""
    payload = charity_fields()
    payload["proof_hash"] = payload["proof_hash"].hex()
    payload.update(overrides)
    return payload


class ExplodingLedger:
    """ValueTransfer that raises instead of answering."""

    def __init__(self) -> None:
        self.calls = 0

    def transfer(self, amount: int, sender: str, recipient: str) -> bool:
        self.calls += 1
        raise ConnectionError("ledger unreachable")


def state_of(store) -> tuple:
    """Observable registry state of a store, for before/after comparisons."""
    records = {}
    names = {}
    updates = {}
    for charity_id in range(store.count() + 1):
        charity = store.get(charity_id)
        if charity is not None:
            records[charity_id] = charity
            names[charity.name] = store.id_for_name(charity.name)
            updates[charity_id] = store.get_update(charity_id)
    return (
        store.count(),
        store.registration_fee(),
        store.authority_contract(),
        records,
        names,
        updates,
    )
