"""Byte-level keyboard reader producing RawKey values."""

from __future__ import annotations

import os
import select
import time
from typing import Optional

from loguru import logger

from termline.core.keys import ControlAction, RawKey

ESC = 0x1b


class RawKeyReader:
    """
    Blocking keyboard reader that delivers one byte (or one control key) per call.

    Uses os.read() on the descriptor so Python's I/O buffering never holds
    back bytes. Printable and high bytes are returned undecoded; assembling
    UTF-8 sequences is the decoder's job.
    """

    # Escape sequence mappings (without the \x1b prefix)
    SEQUENCES: dict[bytes, ControlAction] = {
        # Arrow keys (CSI)
        b'[A': ControlAction.OTHER,
        b'[B': ControlAction.OTHER,
        b'[C': ControlAction.CURSOR_RIGHT,
        b'[D': ControlAction.CURSOR_LEFT,
        # Arrow keys (SS3 - application mode)
        b'OA': ControlAction.OTHER,
        b'OB': ControlAction.OTHER,
        b'OC': ControlAction.CURSOR_RIGHT,
        b'OD': ControlAction.CURSOR_LEFT,
        # Word movement (Ctrl+Left, Alt+Left, Alt+B)
        b'[1;5D': ControlAction.CURSOR_WORD_LEFT,
        b'[1;3D': ControlAction.CURSOR_WORD_LEFT,
        b'b': ControlAction.CURSOR_WORD_LEFT,
        # Navigation
        b'[H': ControlAction.CURSOR_HOME,
        b'[F': ControlAction.CURSOR_END,
        b'OH': ControlAction.CURSOR_HOME,
        b'OF': ControlAction.CURSOR_END,
        b'[1~': ControlAction.CURSOR_HOME,
        b'[4~': ControlAction.CURSOR_END,
        b'[7~': ControlAction.CURSOR_HOME,
        b'[8~': ControlAction.CURSOR_END,
        b'[3~': ControlAction.DELETE_FORWARD,
    }

    SIMPLE_KEYS: dict[int, ControlAction] = {
        0x0d: ControlAction.SUBMIT,           # Enter
        0x0a: ControlAction.SUBMIT,
        0x7f: ControlAction.DELETE_BACK,      # Backspace
        0x08: ControlAction.DELETE_BACK,      # Ctrl+H
        0x04: ControlAction.DELETE_FORWARD,   # Ctrl+D
        0x15: ControlAction.CLEAR_LINE,       # Ctrl+U
        0x0b: ControlAction.CLEAR_TO_END,     # Ctrl+K
        0x02: ControlAction.CURSOR_LEFT,      # Ctrl+B
        0x06: ControlAction.CURSOR_RIGHT,     # Ctrl+F
        0x01: ControlAction.CURSOR_HOME,      # Ctrl+A
        0x05: ControlAction.CURSOR_END,       # Ctrl+E
        0x03: ControlAction.INTERRUPT,        # Ctrl+C
    }

    def __init__(self, fd: int, escape_timeout: float = 0.05) -> None:
        self._fd = fd
        self._escape_timeout = escape_timeout

    def read(self, timeout: Optional[float] = None) -> Optional[RawKey]:
        """
        Read a single raw key.

        Blocks until input arrives when timeout is None, otherwise returns
        None if nothing is available within timeout seconds.
        """
        if timeout is not None and not self._has_input(timeout):
            return None

        value = self.read_byte()

        if value == ESC:
            return self._read_escape_sequence()

        if value in self.SIMPLE_KEYS:
            return RawKey.control(self.SIMPLE_KEYS[value], bytes([value]))

        if value < 0x20:
            # Unbound control character (Tab, Ctrl+G, ...)
            return RawKey.control(ControlAction.OTHER, bytes([value]))

        return RawKey.byte(value)

    def read_byte(self, timeout: Optional[float] = None) -> Optional[int]:
        """Read exactly one byte; None on timeout. Raises EOFError when the input closes."""
        if timeout is not None and not self._has_input(timeout):
            return None
        data = os.read(self._fd, 1)
        if not data:
            raise EOFError("terminal input closed")
        return data[0]

    def _read_escape_sequence(self) -> RawKey:
        """Parse the remainder of an escape sequence after the \\x1b byte."""
        first = self.read_byte(self._escape_timeout)
        if first is None:
            # Just escape, no sequence
            return RawKey.control(ControlAction.OTHER, b'\x1b')

        seq = bytes([first])
        if first == ord('['):
            # CSI: parameters until a final byte in 0x40-0x7e
            deadline = time.monotonic() + self._escape_timeout
            while True:
                remaining = deadline - time.monotonic()
                nxt = self.read_byte(max(remaining, 0.0))
                if nxt is None:
                    break
                seq += bytes([nxt])
                if 0x40 <= nxt <= 0x7e:
                    break
        elif first == ord('O'):
            # SS3: exactly one more byte
            nxt = self.read_byte(self._escape_timeout)
            if nxt is not None:
                seq += bytes([nxt])

        action = self.SEQUENCES.get(seq)
        if action is None:
            logger.debug("Unknown escape sequence {!r}", seq)
            action = ControlAction.OTHER
        return RawKey.control(action, b'\x1b' + seq)

    def _has_input(self, timeout: float) -> bool:
        """Check if input is available within timeout."""
        try:
            ready, _, _ = select.select([self._fd], [], [], timeout)
            return bool(ready)
        except (ValueError, OSError):
            return False
