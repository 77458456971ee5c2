"""
Tests for the web API endpoints.

This module tests the FastAPI application endpoints for bank listing,
live account validation, IBAN generation and verification.
"""

import pytest
from fastapi.testclient import TestClient

from pkiban.config import Bank, Registry
from pkiban.core.builder import IBANBuilder
from pkiban.web.api import app, get_builder


@pytest.fixture
def client():
    """Create test client for FastAPI app."""
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture
def synthetic_client():
    """Client whose builder only knows a made-up bank."""
    registry = Registry(banks=[Bank(name="Test Bank", code="TEST", logo="test.png")])
    app.dependency_overrides[get_builder] = lambda: IBANBuilder(registry)
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


class TestBasicEndpoints:
    """Test basic API endpoints."""

    def test_root_endpoint(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert "pkiban API" in response.json()["message"]

    def test_health_check(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "pkiban-api"

    def test_banks_sorted(self, client):
        response = client.get("/banks")
        assert response.status_code == 200
        banks = response.json()
        assert len(banks) == 15
        names = [b["name"] for b in banks]
        assert names == sorted(names, key=str.casefold)
        assert {"name", "code", "logo"} <= set(banks[0])


class TestValidateAccount:
    def test_valid(self, client):
        response = client.post("/validate-account", json={"account_number": "123"})
        assert response.json() == {"valid": True, "kind": None, "message": ""}

    def test_non_digit(self, client):
        data = client.post("/validate-account", json={"account_number": "12a4"}).json()
        assert data["valid"] is False
        assert data["kind"] == "NonDigitAccountNumber"

    def test_missing(self, client):
        data = client.post("/validate-account", json={}).json()
        assert data["kind"] == "EmptyAccountNumber"


class TestGenerate:
    def test_golden(self, client):
        response = client.post("/generate", json={"account_number": "1234567890123", "bank_code": "HABB"})
        assert response.status_code == 200
        data = response.json()
        assert data["iban"] == "PK29HABB0001234567890123"
        assert data["formatted"] == "PK29 HABB 0001 2345 6789 0123"
        assert data["bank"]["code"] == "HABB"

    @pytest.mark.parametrize("payload,kind", [
        ({"account_number": "", "bank_code": "HABB"}, "EmptyAccountNumber"),
        ({"account_number": "1" * 17, "bank_code": "HABB"}, "AccountNumberTooLong"),
        ({"account_number": "123"}, "NoBankSelected"),
    ])
    def test_validation_failures(self, client, payload, kind):
        response = client.post("/generate", json=payload)
        assert response.status_code == 422
        assert response.json()["detail"]["kind"] == kind

    def test_injected_registry(self, synthetic_client):
        ok = synthetic_client.post("/generate", json={"account_number": "1", "bank_code": "TEST"})
        assert ok.status_code == 200
        assert ok.json()["bank"]["logo"] == "test.png"
        missing = synthetic_client.post("/generate", json={"account_number": "1", "bank_code": "HABB"})
        assert missing.status_code == 422


class TestVerify:
    def test_valid_with_spaces(self, client):
        data = client.post("/verify", json={"iban": "pk29 habb 0001 2345 6789 0123"}).json()
        assert data == {"iban": "PK29HABB0001234567890123", "valid": True}

    def test_invalid(self, client):
        data = client.post("/verify", json={"iban": "PK28HABB0001234567890123"}).json()
        assert data["valid"] is False
