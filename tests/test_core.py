"""Tests for key types and ANSI text helpers."""

from termline.core.ansi_text import trailing_column, truncate
from termline.core.keys import ControlAction, KeyEvent, RawKey


class TestRawKey:
    """Tests for RawKey."""

    def test_byte_key(self) -> None:
        key = RawKey.byte(0xC3)
        assert key.char == '\xc3'
        assert key.raw == b'\xc3'
        assert key.is_control is False

    def test_control_key(self) -> None:
        key = RawKey.control(ControlAction.SUBMIT, b'\r')
        assert key.is_control is True
        assert key.char is None


class TestKeyEvent:
    """Tests for KeyEvent flags."""

    def test_printable_ascii(self) -> None:
        assert KeyEvent(char='a').is_ascii is True
        assert KeyEvent(char=' ').is_ascii is True
        assert KeyEvent(char='~').is_ascii is True

    def test_non_printable_is_not_ascii(self) -> None:
        assert KeyEvent(char='\x7f').is_ascii is False
        assert KeyEvent(char='\xa9').is_ascii is False

    def test_multibyte_is_not_ascii(self) -> None:
        assert KeyEvent(char='é', multibyte=True).is_ascii is False

    def test_control_event(self) -> None:
        event = KeyEvent(action=ControlAction.CURSOR_LEFT)
        assert event.is_control is True
        assert event.is_char is False
        assert event.is_ascii is False


class TestAnsiText:
    """Tests for escape-aware measuring."""

    def test_trailing_column_ignores_escapes(self) -> None:
        assert trailing_column('\x1b[1;31mHello\x1b[0m', 2) == 7
        assert trailing_column('\x1b[?25lab\x1b[2K') == 2

    def test_trailing_column_accumulates(self) -> None:
        assert trailing_column('abc', 4) == 7

    def test_trailing_column_after_newline(self) -> None:
        assert trailing_column('abc\nde', 4) == 2
        assert trailing_column('abc\r', 4) == 0

    def test_truncate_keeps_escapes(self) -> None:
        assert truncate('\x1b[32mabcdef', 3) == '\x1b[32mabc\x1b[0m'

    def test_truncate_short_string_unchanged(self) -> None:
        assert truncate('\x1b[32mab\x1b[0m', 5) == '\x1b[32mab\x1b[0m'

    def test_truncate_zero_width(self) -> None:
        assert truncate('abc', 0) == ''
