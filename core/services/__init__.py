# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .barcode_service import BarcodeService, BarcodeGenerationError
from .label_service import LabelRenderer, LabelService, LabelCompositionError

__all__ = [
    "BarcodeService",
    "BarcodeGenerationError",
    "LabelRenderer",
    "LabelService",
    "LabelCompositionError",
]
