# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets environment variables before any imports
# - Registers the bundled fonts once per session
# - Provides synthetic barcode bitmaps and a TestClient
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("DEFAULT_HASHING_FORMAT", "letter_substitution")
os.environ.setdefault("BRAND_NAME", "ACME TRADING")
os.environ.setdefault("BRAND_TAGLINE", "Wholesale")
os.environ.setdefault("BRAND_CONTACT_LINES", "+1 555 0100,sales@acme.test,acme.test")
os.environ.setdefault("BRAND_COLOR", "#1E3A8A")

import pytest
from PIL import Image

from lib.fonts import register_fonts


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture(scope="session", autouse=True)
def registered_fonts():
    """Register bundled fonts once, as the app lifespan would."""
    register_fonts()


@pytest.fixture
def barcode_bitmap() -> Image.Image:
    """A stand-in barcode: black bars on white, 300x120."""
    image = Image.new("RGB", (300, 120), "white")
    for x in range(20, 280, 6):
        for y in range(10, 90):
            image.putpixel((x, y), (0, 0, 0))
            image.putpixel((x + 1, y), (0, 0, 0))
    return image


@pytest.fixture
def client():
    """TestClient with lifespan (font registration) running."""
    from fastapi.testclient import TestClient

    from app.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def label_payload() -> dict:
    """A valid generate-barcode request body."""
    return {
        "productCode": "ABC123",
        "salesPrice": 100,
        "purchasePrice": "75.50",
        "hashingFormat": "mask",
        "productName": "Blue Widget",
        "billId": "BILL-0001",
    }
