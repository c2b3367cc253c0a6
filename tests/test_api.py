# =============================================================================
# tests/test_api.py - Endpoint Integration Tests
# =============================================================================
# Exercises the FastAPI app through TestClient:
#   - POST /api/generate-barcode success and error paths
#   - 405 for other methods
#   - Health and root endpoints
#
# Run with: pytest tests/test_api.py -v
# =============================================================================

import io
from unittest.mock import patch

import pytest
from PIL import Image

from app.config import settings
from core.services.barcode_service import BarcodeGenerationError
from core.services.label_service import LabelService

ENDPOINT = "/api/generate-barcode"


def generate_spy():
    """Patch LabelService.generate_png, still rendering, to inspect the LabelSpec."""
    return patch(
        "app.routers.barcode.LabelService.generate_png",
        wraps=LabelService.generate_png,
    )


# =============================================================================
# Success
# =============================================================================

class TestGenerateBarcode:
    """Tests for a successful POST."""

    def test_returns_png_attachment(self, client, label_payload):
        response = client.post(ENDPOINT, json=label_payload)

        assert response.status_code == 200
        assert response.headers["content-type"] == "image/png"
        assert response.headers["content-disposition"] == (
            'attachment; filename="barcode-ABC123.png"'
        )
        image = Image.open(io.BytesIO(response.content))
        assert image.format == "PNG"
        assert image.mode == "RGBA"

    def test_mask_scenario(self, client, label_payload):
        with generate_spy() as spy:
            response = client.post(ENDPOINT, json=label_payload)

        assert response.status_code == 200
        spec = spy.call_args.args[0]
        assert spec.hashed_sales == "***"
        assert spec.hashed_purchase == "75***50"
        assert spec.product_name == "Blue Widget"

    def test_replace_scenario(self, client):
        payload = {
            "productCode": "P-509",
            "salesPrice": "509",
            "purchasePrice": 90.5,
            "hashingFormat": "replace",
        }
        with generate_spy() as spy:
            response = client.post(ENDPOINT, json=payload)

        assert response.status_code == 200
        spec = spy.call_args.args[0]
        assert spec.hashed_sales == "@#*"
        assert spec.hashed_purchase == "*#.@"

    def test_base64_format(self, client):
        payload = {
            "productCode": "B64",
            "salesPrice": "75.50",
            "purchasePrice": 100,
            "hashingFormat": "base64",
        }
        with generate_spy() as spy:
            client.post(ENDPOINT, json=payload)

        spec = spy.call_args.args[0]
        assert spec.hashed_sales == "NzUuNTA="
        assert spec.hashed_purchase == "MTAw"

    @pytest.mark.parametrize("hashing_format", [None, "rot13"])
    def test_default_format_used(self, client, hashing_format):
        payload = {"productCode": "DEF", "salesPrice": 100, "purchasePrice": "75.50"}
        if hashing_format:
            payload["hashingFormat"] = hashing_format

        with generate_spy() as spy:
            response = client.post(ENDPOINT, json=payload)

        assert response.status_code == 200
        assert settings.DEFAULT_HASHING_FORMAT.value == "letter_substitution"
        spec = spy.call_args.args[0]
        assert spec.hashed_sales == "OTT"
        assert spec.hashed_purchase == "SFZFT"

    def test_long_product_name_truncated(self, client, label_payload):
        label_payload["productName"] = "z" * 55
        with generate_spy() as spy:
            client.post(ENDPOINT, json=label_payload)

        assert spy.call_args.args[0].product_name == "z" * 40 + "..."

    def test_versioned_path(self, client, label_payload):
        response = client.post("/api/v1/generate-barcode", json=label_payload)
        assert response.status_code == 200

    def test_filename_sanitized(self, client, label_payload):
        label_payload["productCode"] = 'AB"12'
        response = client.post(ENDPOINT, json=label_payload)

        assert response.status_code == 200
        assert response.headers["content-disposition"] == (
            'attachment; filename="barcode-AB_12.png"'
        )


# =============================================================================
# Client Errors
# =============================================================================

class TestValidation:
    """Tests for 400/405/413 responses."""

    def test_missing_product_code(self, client, label_payload):
        del label_payload["productCode"]
        response = client.post(ENDPOINT, json=label_payload)

        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "MISSING_FIELDS"
        assert body["details"]["missing_fields"] == ["productCode"]
        assert "productCode" in body["detail"]

    def test_all_missing_named(self, client):
        response = client.post(ENDPOINT, json={"billId": 7})

        assert response.status_code == 400
        assert response.json()["details"]["missing_fields"] == [
            "productCode", "salesPrice", "purchasePrice",
        ]

    def test_zero_price_accepted(self, client):
        payload = {"productCode": "ZERO", "salesPrice": 0, "purchasePrice": 0}
        response = client.post(ENDPOINT, json=payload)
        assert response.status_code == 200

    @pytest.mark.parametrize("price", [-1, "abc", True, [1]])
    def test_invalid_price(self, client, label_payload, price):
        label_payload["salesPrice"] = price
        response = client.post(ENDPOINT, json=label_payload)

        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "INVALID_FIELD"
        assert body["details"]["field"] == "salesPrice"

    def test_malformed_json(self, client):
        response = client.post(
            ENDPOINT,
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_BODY"

    def test_oversized_integer_literal(self, client):
        body = '{"productCode": "A1", "salesPrice": %s, "purchasePrice": 1}' % ("9" * 5000)
        response = client.post(
            ENDPOINT,
            content=body.encode(),
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_BODY"

    def test_non_ascii_digit_price(self, client, label_payload):
        label_payload["salesPrice"] = "١٠٠"
        response = client.post(ENDPOINT, json=label_payload)

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_FIELD"

    def test_non_object_body(self, client):
        response = client.post(ENDPOINT, json=["ABC123", 1, 2])
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_BODY"

    def test_payload_too_large(self, client, label_payload, monkeypatch):
        monkeypatch.setattr(settings, "MAX_REQUEST_SIZE_KB", 1)
        label_payload["productName"] = "x" * 2048

        response = client.post(ENDPOINT, json=label_payload)

        assert response.status_code == 413
        assert response.json()["code"] == "PAYLOAD_TOO_LARGE"

    @pytest.mark.parametrize("method", ["GET", "PUT", "DELETE", "PATCH"])
    def test_method_not_allowed(self, client, method):
        response = client.request(method, ENDPOINT)

        assert response.status_code == 405
        body = response.json()
        assert body["code"] == "METHOD_NOT_ALLOWED"
        assert body["detail"] == "Method not allowed"
        assert response.headers["allow"] == "POST"

    def test_unknown_path(self, client):
        response = client.get("/api/does-not-exist")
        assert response.status_code == 404
        assert response.json()["code"] == "HTTP_ERROR"


# =============================================================================
# Server Errors
# =============================================================================

class TestRenderingFailures:
    """Tests for 500 responses."""

    def test_barcode_failure(self, client, label_payload):
        error = BarcodeGenerationError("ABC123", "illegal character")
        with patch(
            "core.services.label_service.BarcodeService.render_code128",
            side_effect=error,
        ):
            response = client.post(ENDPOINT, json=label_payload)

        assert response.status_code == 500
        body = response.json()
        assert body["code"] == "RENDERING_ERROR"
        assert body["detail"] == "Failed to generate barcode"
        assert "illegal character" in body["details"]["error"]
        assert body["details"]["cause"] == "BARCODE_GENERATION_ERROR"
        assert response.headers["content-type"].startswith("application/json")

    def test_unencodable_product_code(self, client, label_payload):
        label_payload["productCode"] = "Café☃"
        response = client.post(ENDPOINT, json=label_payload)

        assert response.status_code == 500
        body = response.json()
        assert body["code"] == "RENDERING_ERROR"
        assert body["details"]["cause"] == "BARCODE_GENERATION_ERROR"

    def test_unexpected_failure(self, client, label_payload):
        with patch(
            "app.routers.barcode.LabelService.generate_png",
            side_effect=RuntimeError("disk on fire"),
        ):
            response = client.post(ENDPOINT, json=label_payload)

        assert response.status_code == 500
        body = response.json()
        assert body["code"] == "RENDERING_ERROR"
        assert body["details"]["error"] == "disk on fire"


# =============================================================================
# Service Endpoints
# =============================================================================

class TestServiceEndpoints:
    """Tests for root and health endpoints."""

    def test_root(self, client):
        body = client.get("/").json()
        assert body["name"] == "Barcode Label API"
        assert body["health"] == "/api/v1/health"

    def test_health(self, client):
        body = client.get("/api/v1/health").json()
        assert body["status"] == "healthy"
        assert body["environment"] == "development"

    def test_ready(self, client):
        body = client.get("/api/v1/health/ready").json()
        assert body["status"] == "ready"
        assert body["checks"] == {"fonts": "healthy", "barcode": "healthy"}

    def test_live(self, client):
        body = client.get("/api/v1/health/live").json()
        assert body["status"] == "alive"
