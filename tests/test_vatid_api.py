"""Tests for the VAT ID HTTP routes.

Covers:
- /health
- /vatid/validate: valid, invalid, empty input, malformed body, registry failure
"""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.api.vatid import SERVICE_NAME, router
from src.integrations.vies.errors import TransportError


@pytest.fixture
def mock_validator():
    validator = AsyncMock()
    validator.validate_vat_id = AsyncMock(return_value="true")
    return validator


@pytest.fixture
def client(mock_validator):
    """Create a test client with the validator injected on app state."""
    test_app = FastAPI()
    test_app.include_router(router)
    test_app.state.validator = mock_validator
    return TestClient(test_app)


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["service"] == SERVICE_NAME


class TestValidateRoute:
    def test_valid_vat(self, client, mock_validator):
        response = client.post("/vatid/validate", json={"vat_number": "DE302210417"})

        assert response.status_code == 200
        assert response.json() == {"valid": True}
        mock_validator.validate_vat_id.assert_awaited_once_with("DE302210417")

    @pytest.mark.parametrize("status", ["false", ""])
    def test_non_true_status_is_invalid(self, client, mock_validator, status):
        mock_validator.validate_vat_id.return_value = status

        response = client.post("/vatid/validate", json={"vat_number": "FM402210417"})

        assert response.status_code == 200
        assert response.json() == {"valid": False}

    @pytest.mark.parametrize("payload", [{"vat_number": "   "}, {"vat_number": ""}, {}])
    def test_missing_vat_number(self, client, mock_validator, payload):
        response = client.post("/vatid/validate", json=payload)

        assert response.status_code == 400
        assert response.json()["detail"] == "vat_number not provided"
        mock_validator.validate_vat_id.assert_not_called()

    def test_non_json_body_rejected(self, client, mock_validator):
        response = client.post(
            "/vatid/validate",
            content="vat_number=DE302210417",
            headers={"Content-Type": "text/plain"},
        )

        assert response.status_code == 422
        mock_validator.validate_vat_id.assert_not_called()

    def test_registry_failure_is_500(self, client, mock_validator):
        mock_validator.validate_vat_id.side_effect = TransportError("connection refused")

        response = client.post("/vatid/validate", json={"vat_number": "DE302210417"})

        assert response.status_code == 500
        assert response.json()["detail"] == "connection refused"

    def test_get_not_allowed(self, client):
        assert client.get("/vatid/validate").status_code == 405


class TestAppLifespan:
    def test_lifespan_wires_validator(self):
        """The real app builds a VatIdValidator on startup; malformed IDs never hit VIES."""
        from src.main import app
        from src.validator import VatIdValidator

        with TestClient(app) as live_client:
            assert isinstance(app.state.validator, VatIdValidator)
            response = live_client.post("/vatid/validate", json={"vat_number": "FM402210417"})

        assert response.status_code == 200
        assert response.json() == {"valid": False}
