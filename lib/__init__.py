# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - obfuscator.py: Price obfuscation transforms
# - fonts.py: One-time font registration and lookup
# - utils.py: Shared utilities (error base class, header-safe filenames)
# - assets/fonts/: Bundled DejaVu Sans font files
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.utils import ApplicationError, safe_filename_part
from lib.fonts import (
    FontNotRegisteredError,
    FontRegistrationError,
    FontWeight,
    fonts_registered,
    get_font,
    register_fonts,
)
from lib.obfuscator import obfuscate

__all__ = [
    # Utils
    "ApplicationError",
    "safe_filename_part",
    # Fonts
    "FontNotRegisteredError",
    "FontRegistrationError",
    "FontWeight",
    "fonts_registered",
    "get_font",
    "register_fonts",
    # Obfuscation
    "obfuscate",
]
