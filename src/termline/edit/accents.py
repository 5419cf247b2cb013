"""
Accent popup correction.

On macOS, holding a letter key and picking an accented variant from the
popup (hold 'a', select 'à') makes the terminal receive the plain 'a'
followed by the UTF-8 bytes of 'à', with no backspace in between. Dead keys
and compose keys on Windows and Linux send only the final character.

AccentFilter remembers whether the last insertion was a plain ASCII byte and,
when the next character is an accented form of the character left of the
cursor, asks the editor to replace it instead of appending.
"""

from __future__ import annotations

from typing import Optional

from loguru import logger

from termline.core.keys import KeyEvent

# Latin-1 Supplement, U+00C0 - U+00FF. Spaces mark characters without a
# clear ASCII base (Æ × Þ ß æ ÷ þ).
_LATIN1_BASES = (
    "AAAAAA C"   # À-Ç
    "EEEEIIII"   # È-Ï
    "DNOOOOO "   # Ð-×
    "OUUUUY  "   # Ø-ß
    "aaaaaa c"   # à-ç
    "eeeeiiii"   # è-ï
    "dnooooo "   # ð-÷
    "ouuuuy y"   # ø-ÿ
)

# Latin Extended-A, U+0100 - U+017F. Spaces mark ligatures and letters
# without a clear ASCII base (Ĳ ĳ ĸ ŉ Ŋ ŋ Œ œ).
_EXTENDED_A_BASES = (
    "AaAaAaCc"   # Ā-ć
    "CcCcCcDd"   # Ĉ-ď
    "DdEeEeEe"   # Đ-ė
    "EeEeGgGg"   # Ę-ğ
    "GgGgHhHh"   # Ġ-ħ
    "IiIiIiIi"   # Ĩ-į
    "Ii  JjKk"   # İ-ķ
    " LlLlLlL"   # ĸ-Ŀ
    "lLlNnNnN"   # ŀ-Ň
    "n   OoOo"   # ň-ŏ
    "Oo  RrRr"   # Ő-ŗ
    "RrSsSsSs"   # Ř-ş
    "SsTtTtTt"   # Š-ŧ
    "UuUuUuUu"   # Ũ-ů
    "UuUuWwYy"   # Ű-ŷ
    "YZzZzZzs"   # Ÿ-ſ
)

_BASES = {
    **{0xC0 + i: c for i, c in enumerate(_LATIN1_BASES) if c != ' '},
    **{0x100 + i: c for i, c in enumerate(_EXTENDED_A_BASES) if c != ' '},
}


def base_char(code_point: int) -> Optional[str]:
    """
    Map an accented Latin letter to its ASCII base letter.

    Covers Latin-1 Supplement and Latin Extended-A. Returns None for code
    points outside those blocks and for ligatures or symbols inside them.
    """
    return _BASES.get(code_point)


def is_accented_form(char: str, previous: str) -> bool:
    """True if char is an accented variant of previous, ignoring case."""
    base = base_char(ord(char))
    return base is not None and base.lower() == previous.lower()


class AccentFilter:
    """Tracks the one bit of state needed to spot an accent popup replacement."""

    def __init__(self) -> None:
        self.last_inserted_ascii = False

    def reset(self) -> None:
        self.last_inserted_ascii = False

    def process(self, event: KeyEvent, previous: Optional[str]) -> bool:
        """
        Update state for event and report whether the character left of the
        cursor (previous) should be removed before event is inserted.
        """
        if event.is_control:
            self.reset()
            return False

        if not event.multibyte:
            self.last_inserted_ascii = event.is_ascii
            return False

        replace = (
            self.last_inserted_ascii
            and previous is not None
            and is_accented_form(event.char, previous)
        )
        self.reset()
        if replace:
            logger.debug("Accent popup replaced {!r} with {!r}", previous, event.char)
        return replace
