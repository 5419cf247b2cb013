"""Tests for reassembling key events from byte-at-a-time reads."""

import pytest

from termline.core.keys import ControlAction, RawKey
from termline.edit.decoder import REPLACEMENT_CHARACTER, KeyDecoder, continuation_count

from conftest import ENTER, raw_bytes


def scripted(keys):
    """A read_raw callable serving keys in order, counting reads."""
    it = iter(keys)
    calls = []

    def read():
        calls.append(1)
        return next(it)

    return read, calls


class TestContinuationCount:
    """Lead byte ranges."""

    @pytest.mark.parametrize("lead,expected", [
        (0x41, 0),
        (0xBF, 0),
        (0xC0, 1),
        (0xDF, 1),
        (0xE0, 2),
        (0xEF, 2),
        (0xF0, 3),
        (0xF7, 3),
    ])
    def test_ranges(self, lead, expected) -> None:
        assert continuation_count(lead) == expected


class TestDecode:
    """KeyDecoder.decode."""

    def test_control_passes_through(self) -> None:
        read, _ = scripted([ENTER])
        event = KeyDecoder(read).decode()
        assert event.action is ControlAction.SUBMIT
        assert event.char is None

    def test_single_byte(self) -> None:
        read, calls = scripted(raw_bytes('a'))
        event = KeyDecoder(read).decode()
        assert event.char == 'a'
        assert event.multibyte is False
        assert event.is_ascii is True
        assert len(calls) == 1

    def test_high_single_byte_is_not_ascii(self) -> None:
        read, _ = scripted([RawKey.byte(0xA9)])
        event = KeyDecoder(read).decode()
        assert event.char == '\xa9'
        assert event.is_ascii is False

    @pytest.mark.parametrize("char", ['é', 'ñ', '€', '中', '😀', '𝄞'])
    def test_multibyte_reassembled(self, char) -> None:
        data = raw_bytes(char)
        read, calls = scripted(data)
        event = KeyDecoder(read).decode()
        assert event.char == char
        assert event.multibyte is True
        # Exactly the bytes of one character were consumed
        assert len(calls) == len(data)

    def test_consecutive_characters(self) -> None:
        read, _ = scripted(raw_bytes('é€a'))
        decoder = KeyDecoder(read)
        assert [decoder.decode().char for _ in range(3)] == ['é', '€', 'a']

    def test_control_during_continuation_is_skipped(self) -> None:
        # The control read uses up the continuation slot without adding a byte
        read, calls = scripted([RawKey.byte(0xC3), ENTER])
        event = KeyDecoder(read).decode()
        assert event.char == REPLACEMENT_CHARACTER
        assert len(calls) == 2


class TestMalformed:
    """Invalid sequences never raise and give one substitute character."""

    def test_invalid_continuation(self) -> None:
        read, _ = scripted([RawKey.byte(0xC3), RawKey.byte(0x41)])
        event = KeyDecoder(read).decode()
        assert event.char == REPLACEMENT_CHARACTER
        assert event.multibyte is True

    def test_truncated_three_byte(self) -> None:
        read, _ = scripted([RawKey.byte(0xE2), RawKey.byte(0x82), RawKey.byte(0x41)])
        assert KeyDecoder(read).decode().char == REPLACEMENT_CHARACTER

    def test_invalid_lead_byte(self) -> None:
        read, calls = scripted([RawKey.byte(0xFF)] + raw_bytes('abc'))
        assert KeyDecoder(read).decode().char == REPLACEMENT_CHARACTER
        assert len(calls) == 4

    def test_overlong_encoding(self) -> None:
        read, _ = scripted([RawKey.byte(0xC0), RawKey.byte(0xAF)])
        assert KeyDecoder(read).decode().char == REPLACEMENT_CHARACTER
