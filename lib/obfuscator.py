# =============================================================================
# lib/obfuscator.py - Price Obfuscation
# =============================================================================
# Turns a canonical price string into the text printed on a label.
#
# Each ObfuscationFormat maps to one small pure function; obfuscate() is the
# single dispatch point. All transforms are deterministic and total for
# numeric input.
#
# Usage:
#   from lib.obfuscator import obfuscate
#   obfuscate("75.50", ObfuscationFormat.MASK)  # "75***50"
# =============================================================================

import base64
from typing import Callable

from core.models.obfuscation import ObfuscationFormat

MASK = "***"

# Minimum length that keeps the 2-character prefix and suffix visible
MASK_MIN_VISIBLE_LENGTH = 5

REPLACE_TABLE = str.maketrans({"0": "#", "5": "@", "9": "*"})

LETTER_TABLE = str.maketrans({
    "1": "O",
    "2": "W",
    "3": "H",
    "4": "R",
    "5": "F",
    "6": "X",
    "7": "S",
    "8": "E",
    "9": "N",
    "0": "T",
    ".": "Z",
})


# =============================================================================
# Transforms
# =============================================================================

def encode_base64(value: str) -> str:
    """Base64 of the decimal text (not of the numeric value)."""
    return base64.b64encode(value.encode("utf-8")).decode("ascii")


def mask(value: str) -> str:
    """Keep the first and last two characters; short values are fully hidden."""
    if len(value) < MASK_MIN_VISIBLE_LENGTH:
        return MASK
    return value[:2] + MASK + value[-2:]


def replace_digits(value: str) -> str:
    return value.translate(REPLACE_TABLE)


def substitute_letters(value: str) -> str:
    return value.translate(LETTER_TABLE)


_TRANSFORMS: dict[ObfuscationFormat, Callable[[str], str]] = {
    ObfuscationFormat.BASE64: encode_base64,
    ObfuscationFormat.MASK: mask,
    ObfuscationFormat.REPLACE: replace_digits,
    ObfuscationFormat.LETTER_SUBSTITUTION: substitute_letters,
}


# =============================================================================
# Dispatch
# =============================================================================

def obfuscate(value: str, fmt: ObfuscationFormat) -> str:
    """
    Apply the selected obfuscation format to a canonical price string.

    Args:
        value: Canonical decimal text, e.g. "75.50"
        fmt: Format to apply

    Returns:
        Display string for the label

    Example:
        obfuscate("509", ObfuscationFormat.REPLACE)  # "@#*"
        obfuscate("100", ObfuscationFormat.MASK)     # "***"
    """
    return _TRANSFORMS[ObfuscationFormat(fmt)](value)
