# =============================================================================
# core/services/label_service.py - Label Composition
# =============================================================================
# Composes a barcode bitmap with branding, product name and obfuscated
# prices into one PNG label.
#
# LabelRenderer.compose() draws in a fixed order; each step overwrites the
# region beneath it:
#   1. rounded-corner clip (applied as an alpha mask)
#   2. white background
#   3. header band with brand name, tagline and contact lines
#   4. product name, centered
#   5. barcode bitmap, pasted unscaled
#   6. price band: "<sales> / <purchase>"
#   7. rounded border
#
# LabelService ties the barcode collaborator, the obfuscator and the renderer
# together for the HTTP layer.
# =============================================================================

import io
import logging

from PIL import Image, ImageDraw

from app.config import settings
from core.models.label import Branding, LabelLayout, LabelSpec
from core.services.barcode_service import BarcodeService
from lib.fonts import FontWeight, get_font
from lib.utils import ApplicationError

logger = logging.getLogger(__name__)

PRICE_SEPARATOR = "/"


class LabelCompositionError(ApplicationError):
    """Raised when a drawing step fails."""

    def __init__(self, error: str):
        super().__init__(
            message=f"Failed to compose label: {error}",
            code="LABEL_COMPOSITION_ERROR",
            details={"error": error},
        )


def branding_from_settings() -> Branding:
    """Build the header branding from settings."""
    return Branding(
        name=settings.BRAND_NAME,
        tagline=settings.BRAND_TAGLINE,
        contact_lines=tuple(settings.contact_lines_list),
        color=settings.BRAND_COLOR,
    )


# =============================================================================
# Renderer
# =============================================================================

class LabelRenderer:
    """
    Draws labels around a pre-rendered barcode bitmap.

    The output width always equals the barcode width; the height is the
    barcode height plus the header, product-name and price bands.
    """

    def __init__(self, branding: Branding, layout: LabelLayout | None = None):
        self.branding = branding
        self.layout = layout or LabelLayout()

    def compose(
        self,
        barcode_bitmap: Image.Image,
        hashed_sales: str,
        hashed_purchase: str,
        product_name: str | None = None,
    ) -> Image.Image:
        """
        Compose the full label.

        Args:
            barcode_bitmap: Barcode image, pasted at its native size
            hashed_sales: Obfuscated sales price
            hashed_purchase: Obfuscated purchase price
            product_name: Already-truncated product name, or None

        Returns:
            RGBA image with transparent rounded corners

        Raises:
            FontNotRegisteredError: If fonts were never registered
            LabelCompositionError: If any drawing step fails
        """
        try:
            return self._compose(barcode_bitmap, hashed_sales, hashed_purchase, product_name)
        except ApplicationError:
            raise
        except Exception as e:
            logger.error(f"Label composition failed: {e}")
            raise LabelCompositionError(str(e)) from e

    def _compose(
        self,
        barcode_bitmap: Image.Image,
        hashed_sales: str,
        hashed_purchase: str,
        product_name: str | None,
    ) -> Image.Image:
        layout = self.layout
        size = layout.canvas_size(barcode_bitmap.width, barcode_bitmap.height)
        width, height = size

        # Step 1: rounded clip, applied when the layers are flattened below
        clip = Image.new("L", size, 0)
        ImageDraw.Draw(clip).rounded_rectangle(
            (0, 0, width - 1, height - 1),
            radius=layout.corner_radius,
            fill=255,
        )

        # Step 2: white background
        canvas = Image.new("RGBA", size, layout.background_color)
        draw = ImageDraw.Draw(canvas)

        # Steps 3-4
        self._draw_header(draw, width)
        name_top = layout.header_height
        if product_name:
            draw.text(
                (width / 2, name_top + layout.name_height / 2),
                product_name,
                font=get_font(FontWeight.REGULAR, layout.name_font_size),
                fill=layout.name_color,
                anchor="mm",
            )

        # Step 5: barcode directly under the product-name band
        barcode_top = name_top + layout.name_height
        canvas.paste(barcode_bitmap.convert("RGBA"), (0, barcode_top))

        # Steps 6-7
        price_top = barcode_top + barcode_bitmap.height
        self._draw_prices(draw, width, price_top, hashed_sales, hashed_purchase)
        self._draw_border(draw, width, height)

        label = Image.new("RGBA", size, (0, 0, 0, 0))
        label.paste(canvas, (0, 0), clip)
        return label

    def _draw_header(self, draw: ImageDraw.ImageDraw, width: int) -> None:
        layout = self.layout
        branding = self.branding
        band = layout.header_height

        draw.rectangle((0, 0, width - 1, band - 1), fill=branding.color)

        # Brand name and tagline, left-aligned
        draw.text(
            (layout.padding, band * 0.38),
            branding.name,
            font=get_font(FontWeight.BOLD, layout.brand_font_size),
            fill=layout.header_text_color,
            anchor="lm",
        )
        if branding.tagline:
            draw.text(
                (layout.padding, band * 0.74),
                branding.tagline,
                font=get_font(FontWeight.REGULAR, layout.tagline_font_size),
                fill=layout.header_text_color,
                anchor="lm",
            )

        # Contact lines, right-aligned and spread evenly over the band
        lines = branding.contact_lines
        contact_font = get_font(FontWeight.REGULAR, layout.contact_font_size)
        for i, line in enumerate(lines):
            draw.text(
                (width - layout.padding, band * (i + 1) / (len(lines) + 1)),
                line,
                font=contact_font,
                fill=layout.header_text_color,
                anchor="rm",
            )

    def _draw_prices(
        self,
        draw: ImageDraw.ImageDraw,
        width: int,
        top: int,
        hashed_sales: str,
        hashed_purchase: str,
    ) -> None:
        layout = self.layout
        draw.rectangle(
            (0, top, width - 1, top + layout.price_height - 1),
            fill=layout.background_color,
        )

        font = get_font(FontWeight.BOLD, layout.price_font_size)
        center_x = width / 2
        center_y = top + layout.price_height / 2

        # "<sales>" ends left of center, "<purchase>" starts right of it
        draw.text((center_x - layout.price_gap, center_y), hashed_sales,
                  font=font, fill=layout.price_color, anchor="rm")
        draw.text((center_x, center_y), PRICE_SEPARATOR,
                  font=font, fill=layout.price_color, anchor="mm")
        draw.text((center_x + layout.price_gap, center_y), hashed_purchase,
                  font=font, fill=layout.price_color, anchor="lm")

    def _draw_border(self, draw: ImageDraw.ImageDraw, width: int, height: int) -> None:
        layout = self.layout
        inset = layout.border_inset
        draw.rounded_rectangle(
            (inset, inset, width - 1 - inset, height - 1 - inset),
            radius=max(layout.corner_radius - inset, 0),
            outline=layout.border_color,
            width=layout.border_width,
        )


# =============================================================================
# Service
# =============================================================================

def encode_png(image: Image.Image) -> bytes:
    """Encode a Pillow image as PNG bytes."""
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


class LabelService:
    """
    Service for generating finished PNG labels.

    Runs synchronously; callers on the event loop should offload it to a
    worker thread.
    """

    @staticmethod
    def generate_png(spec: LabelSpec, renderer: LabelRenderer | None = None) -> bytes:
        """
        Render barcode, compose the label and encode it as PNG.

        Args:
            spec: Label content with prices already obfuscated
            renderer: Renderer to use (default: branding from settings)

        Returns:
            PNG bytes

        Raises:
            BarcodeGenerationError: If the product code cannot be encoded
            LabelCompositionError: If drawing or encoding fails
            FontNotRegisteredError: If fonts were never registered
        """
        renderer = renderer or LabelRenderer(branding_from_settings())

        barcode_bitmap = BarcodeService.render_code128(spec.product_code)
        label = renderer.compose(
            barcode_bitmap,
            spec.hashed_sales,
            spec.hashed_purchase,
            spec.product_name,
        )

        try:
            png = encode_png(label)
        except OSError as e:
            raise LabelCompositionError(str(e)) from e

        logger.debug(f"Encoded label for {spec.product_code!r}: {len(png)} bytes")
        return png
