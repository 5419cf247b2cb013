"""Reassemble logical key events from byte-at-a-time terminal reads."""

from __future__ import annotations

from typing import Callable

from loguru import logger

from termline.core.keys import KeyEvent, RawKey

REPLACEMENT_CHARACTER = '�'


def continuation_count(lead: int) -> int:
    """
    Number of continuation bytes that follow a UTF-8 lead byte.

    Lead byte 0xC0-0xDF -> 1 continuation byte  (2-byte chars)
    Lead byte 0xE0-0xEF -> 2 continuation bytes (3-byte chars)
    Lead byte 0xF0-     -> 3 continuation bytes (4-byte chars)
    """
    if lead < 0xC0:
        return 0
    if lead < 0xE0:
        return 1
    if lead < 0xF0:
        return 2
    return 3


class KeyDecoder:
    """
    Turns raw key reads into KeyEvents.

    The terminal delivers one byte per read, so a two-byte character like
    'é' (0xC3 0xA9) arrives as two reads. When a read carries a UTF-8 lead
    byte the decoder pulls the continuation bytes itself through read_raw.
    """

    def __init__(self, read_raw: Callable[[], RawKey]) -> None:
        self._read_raw = read_raw

    def decode(self) -> KeyEvent:
        """Block for the next logical event."""
        return self.decode_from(self._read_raw())

    def decode_from(self, first: RawKey) -> KeyEvent:
        """Complete an event whose first raw read has already happened."""
        if first.is_control:
            return KeyEvent(action=first.action)

        lead = ord(first.char)
        if lead < 0xC0:
            return KeyEvent(char=first.char)

        data = bytearray([lead])
        for _ in range(continuation_count(lead)):
            nxt = self._read_raw()
            if not nxt.is_control:
                data.append(ord(nxt.char) & 0xFF)

        char = bytes(data).decode('utf-8', errors='replace')
        if len(char) != 1:
            logger.debug("Malformed UTF-8 sequence {!r}, substituting", bytes(data))
            char = REPLACEMENT_CHARACTER
        return KeyEvent(char=char, multibyte=True)
