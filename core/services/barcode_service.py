# =============================================================================
# core/services/barcode_service.py - Code128 Barcode Rendering
# =============================================================================
# Renders the product code as a Code128 bitmap with python-barcode's
# ImageWriter (Pillow backend). The human-readable text is printed centered
# under the bars.
# =============================================================================

import logging
from typing import Any

import barcode
from barcode.writer import ImageWriter
from PIL import Image

from app.config import settings
from lib.utils import ApplicationError

logger = logging.getLogger(__name__)

SYMBOLOGY = "code128"


class BarcodeGenerationError(ApplicationError):
    """Raised when the barcode library cannot render the given text."""

    def __init__(self, text: str, error: str):
        super().__init__(
            message=f"Failed to generate {SYMBOLOGY} barcode: {error}",
            code="BARCODE_GENERATION_ERROR",
            suggestion="Code128 accepts printable ASCII characters only",
            details={"text": text, "error": error},
        )


class BarcodeService:
    """
    Service for rendering barcode bitmaps.

    Stateless; every call creates its own writer.
    """

    @staticmethod
    def writer_options() -> dict[str, Any]:
        """ImageWriter options built from settings."""
        return {
            "module_width": settings.BARCODE_MODULE_WIDTH_MM,
            "module_height": settings.BARCODE_MODULE_HEIGHT_MM,
            "quiet_zone": settings.BARCODE_QUIET_ZONE_MM,
            "font_size": settings.BARCODE_FONT_SIZE,
            "text_distance": settings.BARCODE_TEXT_DISTANCE_MM,
            "dpi": settings.BARCODE_DPI,
            "write_text": True,
            "center_text": True,
            "background": "white",
            "foreground": "black",
        }

    @staticmethod
    def render_code128(text: str) -> Image.Image:
        """
        Render `text` as a Code128 bitmap.

        Args:
            text: Payload to encode (the product code)

        Returns:
            RGBA Pillow image, bars on white with the text underneath

        Raises:
            BarcodeGenerationError: If the text cannot be encoded or rendered
        """
        try:
            code = barcode.get(SYMBOLOGY, text, writer=ImageWriter())
            image = code.render(writer_options=BarcodeService.writer_options())
        except Exception as e:
            logger.warning(f"Barcode generation failed for {text!r}: {e}")
            raise BarcodeGenerationError(text, str(e)) from e

        logger.debug(f"Rendered {SYMBOLOGY} for {text!r}: {image.width}x{image.height}")
        return image.convert("RGBA")
