"""
Integration tests for the charity registry flow.

Tests the full flow through the API with the application lifespan wiring
an in-memory store, allow-list oracle and console ledger.
"""

import logging
from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from src.api.main import app
from src.config.settings import get_settings
from tests.factories import AUTHORITY, CREATOR, OUTSIDER, charity_payload


@pytest.fixture
def client(monkeypatch: pytest.MonkeyPatch) -> Generator[TestClient, None, None]:
    """Start the application with an in-memory backend."""
    monkeypatch.setenv("STORAGE_BACKEND", "memory")
    monkeypatch.setenv("VERIFIED_AUTHORITIES", f'["{CREATOR}"]')
    monkeypatch.setenv("REGISTRATION_FEE", "500")
    monkeypatch.setenv("MAX_CHARITIES", "5000")
    get_settings.cache_clear()
    with TestClient(app) as test_client:
        yield test_client
    get_settings.cache_clear()


def as_caller(principal: str) -> dict[str, str]:
    return {"X-Caller-Principal": principal}


class TestCharityFlow:
    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "storage": "memory"}

    def test_end_to_end_scenario(
        self, client: TestClient, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Bind, register with fee, reject duplicate, rename."""
        assert client.put("/v1/authority", json={"principal": AUTHORITY}).status_code == 200

        with caplog.at_level(logging.INFO):
            response = client.post(
                "/v1/charities", json=charity_payload(name="X"), headers=as_caller(CREATOR)
            )
        assert response.status_code == 201
        assert response.json() == {"id": 0}
        assert "[TRANSFER] Amount: 500" in caplog.text
        assert client.app.state.ledger.transfers[0].recipient == AUTHORITY

        duplicate = client.post(
            "/v1/charities", json=charity_payload(name="X"), headers=as_caller(CREATOR)
        )
        assert duplicate.status_code == 409
        assert duplicate.json()["code"] == 105
        assert client.get("/v1/charities/count").json() == {"count": 1}

        updated = client.patch(
            "/v1/charities/0",
            json={"update_name": "Y", "update_description": "Renamed"},
            headers=as_caller(CREATOR),
        )
        assert updated.status_code == 200
        assert client.get("/v1/charities/exists", params={"name": "X"}).json()["exists"] is False
        assert client.get("/v1/charities/exists", params={"name": "Y"}).json()["exists"] is True

        update = client.get("/v1/charities/0/update").json()
        assert update["update_name"] == "Y"
        assert update["updater"] == CREATOR

    def test_registered_record_round_trips(self, client: TestClient) -> None:
        client.put("/v1/authority", json={"principal": AUTHORITY})
        payload = charity_payload(proof_hash="ab" * 32, currency="BTC", charity_type="community")

        client.post("/v1/charities", json=payload, headers=as_caller(CREATOR))
        body = client.get("/v1/charities/0").json()

        assert body["proof_hash"] == "ab" * 32
        assert body["currency"] == "BTC"
        assert body["charity_type"] == "community"
        assert body["creator"] == CREATOR
        assert body["status"] is True

    def test_registration_without_authority(self, client: TestClient) -> None:
        response = client.post(
            "/v1/charities", json=charity_payload(), headers=as_caller(CREATOR)
        )

        assert response.status_code == 409
        assert response.json()["code"] == 108

    def test_unverified_caller(self, client: TestClient) -> None:
        client.put("/v1/authority", json={"principal": AUTHORITY})

        response = client.post(
            "/v1/charities", json=charity_payload(), headers=as_caller(OUTSIDER)
        )

        assert response.status_code == 403
        assert response.json()["code"] == 100

    def test_invalid_proof_hash_length(self, client: TestClient) -> None:
        client.put("/v1/authority", json={"principal": AUTHORITY})

        response = client.post(
            "/v1/charities",
            json=charity_payload(proof_hash="00" * 31),
            headers=as_caller(CREATOR),
        )

        assert response.status_code == 400
        assert response.json()["code"] == 103
        assert client.get("/v1/charities/count").json() == {"count": 0}

    def test_fee_change_charged(self, client: TestClient) -> None:
        assert client.put("/v1/fee", json={"amount": 1000}).status_code == 409
        client.put("/v1/authority", json={"principal": AUTHORITY})
        assert client.put("/v1/fee", json={"amount": 1000}).status_code == 200

        client.post("/v1/charities", json=charity_payload(), headers=as_caller(CREATOR))

        assert client.app.state.ledger.transfers[-1].amount == 1000

    def test_authority_binding_is_write_once(self, client: TestClient) -> None:
        burn = client.put("/v1/authority", json={"principal": "SP000000000000000000002Q6VF78"})
        assert burn.status_code == 400

        assert client.put("/v1/authority", json={"principal": AUTHORITY}).status_code == 200
        again = client.put("/v1/authority", json={"principal": "ST9OTHER"})
        assert again.status_code == 409
        assert again.json()["code"] == 122

    def test_update_by_non_creator(self, client: TestClient) -> None:
        client.put("/v1/authority", json={"principal": AUTHORITY})
        client.post("/v1/charities", json=charity_payload(), headers=as_caller(CREATOR))

        response = client.patch(
            "/v1/charities/0",
            json={"update_name": "Stolen", "update_description": "Mine now"},
            headers=as_caller(OUTSIDER),
        )

        assert response.status_code == 403
        assert client.get("/v1/charities/0").json()["name"] == "HelpFund"
