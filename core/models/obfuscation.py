# =============================================================================
# core/models/obfuscation.py - Price Obfuscation Formats
# =============================================================================
# Prices printed on a label are never shown in clear text. The client picks
# one of these formats per request via the "hashingFormat" field:
#
#   base64               "75.50" -> "NzUuNTA="
#   mask                 "75.50" -> "75***50"
#   replace              "509"   -> "@#*"
#   letter_substitution  "75.50" -> "SFZFT"
#
# An unknown or missing selector resolves to the configured default.
# =============================================================================

from enum import Enum


class ObfuscationFormat(str, Enum):
    """
    Transform applied to a price before it is drawn on the label.

    - base64: base64 of the decimal text
    - mask: keep the first and last two characters, hide the middle
    - replace: swap 0, 5 and 9 for symbols
    - letter_substitution: map every digit and the decimal point to a letter
    """
    BASE64 = "base64"
    MASK = "mask"
    REPLACE = "replace"
    LETTER_SUBSTITUTION = "letter_substitution"

    @classmethod
    def resolve(
        cls,
        selector: "str | ObfuscationFormat | None",
        default: "ObfuscationFormat",
    ) -> "ObfuscationFormat":
        """
        Map a client selector to a format.

        Matching ignores case and surrounding whitespace. Aliases for
        letter substitution are accepted. Anything unrecognized falls
        back to `default`.

        Example:
            ObfuscationFormat.resolve(" MASK ", ObfuscationFormat.BASE64)
            # ObfuscationFormat.MASK
            ObfuscationFormat.resolve("rot13", ObfuscationFormat.BASE64)
            # ObfuscationFormat.BASE64
        """
        if isinstance(selector, ObfuscationFormat):
            return selector
        if not isinstance(selector, str):
            return default

        key = selector.strip().lower().replace("-", "_")
        return _SELECTOR_ALIASES.get(key, default)


_SELECTOR_ALIASES: dict[str, ObfuscationFormat] = {
    **{fmt.value: fmt for fmt in ObfuscationFormat},
    "letters": ObfuscationFormat.LETTER_SUBSTITUTION,
    "letter": ObfuscationFormat.LETTER_SUBSTITUTION,
    "substitution": ObfuscationFormat.LETTER_SUBSTITUTION,
}
