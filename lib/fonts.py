# =============================================================================
# lib/fonts.py - Font Registration
# =============================================================================
# Labels are drawn with two font files: a regular sans-serif family and a
# bold display family. They are registered once at process startup and then
# looked up by weight and size while drawing.
#
# Usage:
#   from lib.fonts import register_fonts, get_font, FontWeight
#   register_fonts()                       # at startup, safe to repeat
#   font = get_font(FontWeight.BOLD, 18)   # while drawing
#
# The default files (DejaVu Sans) ship in lib/assets/fonts/.
# =============================================================================

import logging
import threading
from enum import Enum
from functools import lru_cache
from pathlib import Path

from PIL import ImageFont

from lib.utils import ApplicationError

logger = logging.getLogger(__name__)

FONTS_DIR = Path(__file__).resolve().parent / "assets" / "fonts"
DEFAULT_REGULAR_FONT = FONTS_DIR / "DejaVuSans.ttf"
DEFAULT_BOLD_FONT = FONTS_DIR / "DejaVuSans-Bold.ttf"


class FontWeight(str, Enum):
    """Font families available to the label renderer."""
    REGULAR = "regular"
    BOLD = "bold"


# =============================================================================
# Errors
# =============================================================================

class FontRegistrationError(ApplicationError):
    """Raised when a font file is missing or cannot be loaded."""

    def __init__(self, path: Path | str, error: str):
        super().__init__(
            message=f"Failed to register font {path}: {error}",
            code="FONT_REGISTRATION_ERROR",
            suggestion="Check FONT_REGULAR_PATH / FONT_BOLD_PATH point to readable TrueType files",
            details={"path": str(path), "error": error},
        )


class FontNotRegisteredError(ApplicationError):
    """Raised when drawing is attempted before register_fonts() ran."""

    def __init__(self, weight: FontWeight):
        super().__init__(
            message=f"Font '{weight.value}' is not registered",
            code="FONT_NOT_REGISTERED",
            suggestion="Call register_fonts() at startup before rendering labels",
            details={"weight": weight.value},
        )


# =============================================================================
# Registry
# =============================================================================

_registry: dict[FontWeight, Path] = {}
_registry_lock = threading.Lock()


def _check_font_file(path: Path) -> None:
    if not path.is_file():
        raise FontRegistrationError(path, "file not found")
    try:
        ImageFont.truetype(str(path), 12)
    except OSError as e:
        raise FontRegistrationError(path, str(e)) from e


def register_fonts(
    regular_path: Path | str | None = None,
    bold_path: Path | str | None = None,
) -> bool:
    """
    Register the regular and bold font files.

    Only the first call has an effect; later calls are no-ops even when
    given different paths.

    Args:
        regular_path: Regular sans-serif TrueType file (default: bundled)
        bold_path: Bold display TrueType file (default: bundled)

    Returns:
        True if fonts were registered by this call, False if already registered

    Raises:
        FontRegistrationError: If a file is missing or unreadable
    """
    with _registry_lock:
        if _registry:
            return False

        paths = {
            FontWeight.REGULAR: Path(regular_path or DEFAULT_REGULAR_FONT),
            FontWeight.BOLD: Path(bold_path or DEFAULT_BOLD_FONT),
        }
        for path in paths.values():
            _check_font_file(path)

        _registry.update(paths)

    logger.info(
        f"Registered fonts: regular={paths[FontWeight.REGULAR].name}, "
        f"bold={paths[FontWeight.BOLD].name}"
    )
    return True


def fonts_registered() -> bool:
    """Check whether register_fonts() has completed."""
    return bool(_registry)


def reset_fonts() -> None:
    """Forget registered fonts. Intended for tests."""
    with _registry_lock:
        _registry.clear()
    _load_font.cache_clear()


@lru_cache(maxsize=64)
def _load_font(path: str, size: int) -> ImageFont.FreeTypeFont:
    return ImageFont.truetype(path, size)


def get_font(weight: FontWeight, size: int) -> ImageFont.FreeTypeFont:
    """
    Get a loaded font for drawing.

    Raises:
        FontNotRegisteredError: If fonts have not been registered
    """
    path = _registry.get(weight)
    if path is None:
        raise FontNotRegisteredError(weight)
    return _load_font(str(path), size)
