# =============================================================================
# core/models/label.py - Barcode Label Schemas
# =============================================================================
# These models define the contract for generating a price label:
# - BarcodeLabelRequest: JSON body posted by the client
# - LabelSpec: Validated, obfuscated content that ends up on the label
# - LabelLayout: Fixed geometry and colors of the label
# - Branding: Company name, sub-label and contact lines in the header
#
# Label layout (top to bottom):
#   +--------------------------------------+
#   | BRAND NAME                 contact 1 |  header band
#   | tagline                    contact 2 |
#   |            Product name              |  product-name band
#   |  ||| |||| || ||| | ||| ||| || |||    |  barcode (unscaled)
#   |             ABC123                   |
#   |        SFZFT  /  OTT                 |  price band
#   +--------------------------------------+
# =============================================================================

import math
import re
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Product names longer than this are cut and suffixed with an ellipsis
PRODUCT_NAME_MAX_LENGTH = 40
ELLIPSIS = "..."

# Non-negative ASCII decimal: "100", "75.50", "75.", ".5"
_DECIMAL_PATTERN = re.compile(r"^(\d+\.?\d*|\.\d+)$", re.ASCII)


# =============================================================================
# Helpers
# =============================================================================

def canonical_price(value: Any) -> str:
    """
    Convert a price to the decimal text that gets obfuscated.

    Integers keep their digits, floats use the shortest round-trip digits
    in positional notation (integral floats drop the ".0"), and numeric strings are kept exactly as
    sent so "75.50" stays "75.50".

    Raises:
        ValueError: If the value is not a non-negative finite number
    """
    # bool is an int subclass, but true/false is never a price
    if isinstance(value, bool):
        raise ValueError("price must be a number, not a boolean")

    if isinstance(value, int):
        if value < 0:
            raise ValueError("price must not be negative")
        return str(value)

    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError("price must be a finite number")
        if value < 0:
            raise ValueError("price must not be negative")
        if value.is_integer():
            return str(int(value))
        # Positional notation, never exponent form like "1e-07"
        return f"{Decimal(repr(value)):f}"

    if isinstance(value, str):
        text = value.strip()
        if not _DECIMAL_PATTERN.match(text):
            raise ValueError(f"price is not a non-negative decimal number: {value!r}")
        return text

    raise ValueError(f"price must be a number or numeric string, got {type(value).__name__}")


def truncate_product_name(name: str | None) -> str | None:
    """Cut a product name to PRODUCT_NAME_MAX_LENGTH characters plus an ellipsis."""
    if name is None:
        return None
    if len(name) > PRODUCT_NAME_MAX_LENGTH:
        return name[:PRODUCT_NAME_MAX_LENGTH] + ELLIPSIS
    return name


# =============================================================================
# Request Model
# =============================================================================

class BarcodeLabelRequest(BaseModel):
    """
    JSON body for POST /generate-barcode.

    All fields are optional at the schema level so the endpoint can report
    every missing required field at once instead of failing on the first.
    Use `missing_fields()` to check presence.

    Example:
        {
            "productCode": "ABC123",
            "salesPrice": 100,
            "purchasePrice": "75.50",
            "hashingFormat": "mask",
            "productName": "Blue Widget"
        }
    """

    model_config = ConfigDict(
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="ignore",
    )

    product_code: str | None = Field(
        default=None,
        alias="productCode",
        description="Text encoded in the Code128 barcode (required)"
    )

    # Prices are canonicalized to decimal text by the validator below
    sales_price: str | None = Field(
        default=None,
        alias="salesPrice",
        description="Sales price, number or numeric string (required)"
    )

    purchase_price: str | None = Field(
        default=None,
        alias="purchasePrice",
        description="Purchase price, number or numeric string (required)"
    )

    hashing_format: str | None = Field(
        default=None,
        alias="hashingFormat",
        description="Obfuscation format selector (base64, mask, replace, letter_substitution)"
    )

    product_name: str | None = Field(
        default=None,
        alias="productName",
        description="Product name printed above the barcode"
    )

    # Accepted for compatibility with existing clients, not used for rendering
    bill_id: Any = Field(
        default=None,
        alias="billId",
        description="Client bill reference (ignored)"
    )

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------

    @field_validator("sales_price", "purchase_price", mode="before")
    @classmethod
    def validate_price(cls, v: Any) -> str | None:
        """Canonicalize prices; absent and empty values stay None."""
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        return canonical_price(v)

    @field_validator("hashing_format", mode="before")
    @classmethod
    def validate_hashing_format(cls, v: Any) -> str | None:
        """Non-string selectors are treated as absent."""
        return v if isinstance(v, str) else None

    # -------------------------------------------------------------------------
    # Helper Methods
    # -------------------------------------------------------------------------

    def missing_fields(self) -> list[str]:
        """Return the wire names of required fields that are absent or empty."""
        missing = []
        if not self.product_code or not self.product_code.strip():
            missing.append("productCode")
        if self.sales_price is None:
            missing.append("salesPrice")
        if self.purchase_price is None:
            missing.append("purchasePrice")
        return missing


# =============================================================================
# Label Content
# =============================================================================

class LabelSpec(BaseModel):
    """Everything printed on one label, prices already obfuscated."""

    product_code: str = Field(..., min_length=1)
    product_name: str | None = Field(default=None)
    hashed_sales: str
    hashed_purchase: str

    @field_validator("product_name")
    @classmethod
    def validate_product_name(cls, v: str | None) -> str | None:
        return truncate_product_name(v)


class Branding(BaseModel):
    """Header band content."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Company name, drawn bold")
    tagline: str = Field(default="", description="Sub-label under the company name")
    contact_lines: tuple[str, ...] = Field(
        default=(),
        max_length=3,
        description="Right-aligned contact lines (at most three)"
    )
    color: str = Field(default="#1E3A8A", description="Header band fill color")


class LabelLayout(BaseModel):
    """
    Fixed label geometry in pixels.

    The barcode is pasted unscaled, so the canvas width is always the
    barcode width and the height grows only by the three fixed bands.
    """

    model_config = ConfigDict(frozen=True)

    # Band heights
    header_height: int = Field(default=64, ge=1)
    name_height: int = Field(default=34, ge=1)
    price_height: int = Field(default=44, ge=1)

    # Rounded clip and border
    corner_radius: int = Field(default=18, ge=0)
    border_width: int = Field(default=3, ge=1)
    border_inset: int = Field(default=2, ge=0)
    border_color: str = "#1E3A8A"

    # Text
    padding: int = Field(default=14, ge=0)
    price_gap: int = Field(default=10, ge=0)
    brand_font_size: int = Field(default=20, ge=1)
    tagline_font_size: int = Field(default=11, ge=1)
    contact_font_size: int = Field(default=10, ge=1)
    name_font_size: int = Field(default=16, ge=1)
    price_font_size: int = Field(default=18, ge=1)
    header_text_color: str = "#FFFFFF"
    name_color: str = "#111827"
    price_color: str = "#000000"
    background_color: str = "#FFFFFF"

    @property
    def extra_height(self) -> int:
        """Height added on top of the barcode bitmap."""
        return self.header_height + self.name_height + self.price_height

    def canvas_size(self, barcode_width: int, barcode_height: int) -> tuple[int, int]:
        """Output (width, height) for a barcode bitmap of the given size."""
        return barcode_width, barcode_height + self.extra_height
