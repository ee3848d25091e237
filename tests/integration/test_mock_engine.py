"""
Integration tests for the mock calculation engine's contract.
"""

import uuid
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from mocks.engine.server import MockEngineServer
from service_proposals.app.security.token_issuer import TokenIssuer


@pytest.fixture
def engine():
    return MockEngineServer()


@pytest.fixture
def client(engine):
    return TestClient(engine.app)


def _body(plan="PRO", gross=10000.0):
    return {"customerId": str(uuid.uuid4()), "grossAmount": gross, "plan": plan}


def _auth(plan="PRO"):
    return {"Authorization": TokenIssuer().issue("user-1", plan).authorization_header}


class TestMockEngine:
    """Test cases for MockEngineServer."""

    def test_health(self, client, engine):
        """Health reflects the toggle."""
        assert client.get("/health").json() == {"status": "UP"}

        engine.healthy = False
        assert client.get("/health").status_code == 503

    def test_calculate(self, client):
        """STARTER pays a 6% fee."""
        response = client.post("/api/calculate", json=_body("STARTER", 1000.0), headers=_auth("STARTER"))

        assert response.status_code == 200
        data = response.json()
        assert data["netAmount"] == "940.00"
        assert data["appliedRate"] == "0.06"
        assert data["status"] == "PROCESSED"
        uuid.UUID(data["proposalId"])

    def test_unknown_plan_has_no_fee(self, client):
        """Plans without a rate are passed through."""
        response = client.post("/api/calculate", json=_body("BASIC", 1000.0), headers=_auth("BASIC"))

        assert Decimal(response.json()["netAmount"]) == Decimal("1000")

    def test_missing_token(self, client):
        """Calls without a bearer token are unauthorized."""
        assert client.post("/api/calculate", json=_body()).status_code == 401

    def test_malformed_token(self, client):
        """Tokens whose claims cannot be decoded are unauthorized."""
        response = client.post("/api/calculate", json=_body(), headers={"Authorization": "Bearer nonsense"})

        assert response.status_code == 401

    def test_plan_mismatch(self, client):
        """The token plan must match the requested plan."""
        response = client.post("/api/calculate", json=_body("VIP"), headers=_auth("PRO"))

        assert response.status_code == 403

    def test_negative_amount(self, client):
        """Negative gross amounts are rejected."""
        response = client.post("/api/calculate", json=_body(gross=-5.0), headers=_auth())

        assert response.status_code == 400
