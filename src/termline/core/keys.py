"""Key event types shared by the terminal driver, decoder and editor."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


class ControlAction(Enum):
    """Logical control actions understood by the line editor."""
    SUBMIT = auto()
    DELETE_BACK = auto()
    DELETE_FORWARD = auto()
    CLEAR_LINE = auto()
    CLEAR_TO_END = auto()
    CURSOR_LEFT = auto()
    CURSOR_RIGHT = auto()
    CURSOR_WORD_LEFT = auto()
    CURSOR_HOME = auto()
    CURSOR_END = auto()
    INTERRUPT = auto()
    OTHER = auto()  # Recognized key with no editing binding (arrows up/down, tab, ...)


@dataclass(frozen=True)
class RawKey:
    """
    One read from the terminal driver.

    Either a control action, or a single raw byte carried as a one-character
    string whose code point is the byte value (0-255). Multi-byte characters
    arrive as several RawKeys and are reassembled by the decoder.
    """
    action: Optional[ControlAction] = None
    char: Optional[str] = None
    raw: bytes = b""

    @property
    def is_control(self) -> bool:
        return self.action is not None

    @classmethod
    def control(cls, action: ControlAction, raw: bytes = b"") -> RawKey:
        return cls(action=action, raw=raw)

    @classmethod
    def byte(cls, value: int) -> RawKey:
        return cls(char=chr(value), raw=bytes([value]))


@dataclass(frozen=True)
class KeyEvent:
    """A logical input event: a decoded character or a control action."""
    action: Optional[ControlAction] = None
    char: Optional[str] = None
    multibyte: bool = False

    @property
    def is_control(self) -> bool:
        return self.action is not None

    @property
    def is_char(self) -> bool:
        return self.char is not None and self.action is None

    @property
    def is_ascii(self) -> bool:
        """True for a single-byte printable ASCII character."""
        if self.char is None or self.multibyte:
            return False
        return 0x20 <= ord(self.char) < 0x7F
