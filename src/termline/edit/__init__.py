"""Key decoding and line editing."""

from termline.edit.decoder import KeyDecoder, continuation_count
from termline.edit.accents import AccentFilter, base_char
from termline.edit.line_editor import LineEditor

__all__ = [
    "KeyDecoder",
    "continuation_count",
    "AccentFilter",
    "base_char",
    "LineEditor",
]
