# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - obfuscation.py: ObfuscationFormat enum (price display formats)
# - label.py: Request body, label content, branding and layout schemas
#
# These models define the "contract" between API and clients.
# =============================================================================

# -----------------------------------------------------------------------------
# Obfuscation Models - How prices are displayed
# -----------------------------------------------------------------------------
from .obfuscation import ObfuscationFormat

# -----------------------------------------------------------------------------
# Label Models - What is printed and where
# -----------------------------------------------------------------------------
from .label import (
    ELLIPSIS,
    PRODUCT_NAME_MAX_LENGTH,
    BarcodeLabelRequest,
    Branding,
    LabelLayout,
    LabelSpec,
    canonical_price,
    truncate_product_name,
)

__all__ = [
    # Obfuscation
    "ObfuscationFormat",
    # Label
    "BarcodeLabelRequest",
    "Branding",
    "LabelLayout",
    "LabelSpec",
    "canonical_price",
    "truncate_product_name",
    "PRODUCT_NAME_MAX_LENGTH",
    "ELLIPSIS",
]
