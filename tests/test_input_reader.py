"""Tests for the byte-level reader, fed through a real pipe."""

import os
from typing import Iterator

import pytest

from termline.core.input import RawKeyReader
from termline.core.keys import ControlAction, RawKey


@pytest.fixture
def pipe() -> Iterator[tuple[int, int]]:
    r, w = os.pipe()
    yield r, w
    os.close(r)
    try:
        os.close(w)
    except OSError:
        pass


def reader_for(pipe: tuple[int, int], data: bytes) -> RawKeyReader:
    r, w = pipe
    os.write(w, data)
    return RawKeyReader(r, escape_timeout=0.02)


class TestSimpleKeys:
    """Single-byte keys."""

    @pytest.mark.parametrize("byte,action", [
        (b'\r', ControlAction.SUBMIT),
        (b'\n', ControlAction.SUBMIT),
        (b'\x7f', ControlAction.DELETE_BACK),
        (b'\x08', ControlAction.DELETE_BACK),
        (b'\x04', ControlAction.DELETE_FORWARD),
        (b'\x15', ControlAction.CLEAR_LINE),
        (b'\x0b', ControlAction.CLEAR_TO_END),
        (b'\x02', ControlAction.CURSOR_LEFT),
        (b'\x06', ControlAction.CURSOR_RIGHT),
        (b'\x01', ControlAction.CURSOR_HOME),
        (b'\x05', ControlAction.CURSOR_END),
        (b'\x03', ControlAction.INTERRUPT),
        (b'\t', ControlAction.OTHER),
    ])
    def test_control_bytes(self, pipe, byte, action) -> None:
        key = reader_for(pipe, byte).read()
        assert key == RawKey.control(action, byte)

    def test_printable_byte(self, pipe) -> None:
        key = reader_for(pipe, b'a').read()
        assert key.char == 'a'
        assert not key.is_control

    def test_utf8_arrives_one_byte_per_read(self, pipe) -> None:
        reader = reader_for(pipe, 'é'.encode('utf-8'))
        first = reader.read()
        second = reader.read()
        assert ord(first.char) == 0xC3
        assert ord(second.char) == 0xA9


class TestEscapeSequences:
    """Multi-byte escape sequences."""

    @pytest.mark.parametrize("seq,action", [
        (b'\x1b[D', ControlAction.CURSOR_LEFT),
        (b'\x1b[C', ControlAction.CURSOR_RIGHT),
        (b'\x1bOD', ControlAction.CURSOR_LEFT),
        (b'\x1b[H', ControlAction.CURSOR_HOME),
        (b'\x1b[F', ControlAction.CURSOR_END),
        (b'\x1b[1~', ControlAction.CURSOR_HOME),
        (b'\x1b[4~', ControlAction.CURSOR_END),
        (b'\x1b[3~', ControlAction.DELETE_FORWARD),
        (b'\x1b[1;5D', ControlAction.CURSOR_WORD_LEFT),
        (b'\x1b[1;3D', ControlAction.CURSOR_WORD_LEFT),
        (b'\x1bb', ControlAction.CURSOR_WORD_LEFT),
        (b'\x1b[A', ControlAction.OTHER),
    ])
    def test_known_sequences(self, pipe, seq, action) -> None:
        key = reader_for(pipe, seq).read()
        assert key.action is action
        assert key.raw == seq

    def test_sequence_followed_by_text(self, pipe) -> None:
        reader = reader_for(pipe, b'\x1b[Dx')
        assert reader.read().action is ControlAction.CURSOR_LEFT
        assert reader.read().char == 'x'

    def test_lone_escape(self, pipe) -> None:
        key = reader_for(pipe, b'\x1b').read()
        assert key.action is ControlAction.OTHER
        assert key.raw == b'\x1b'

    def test_unknown_sequence(self, pipe) -> None:
        key = reader_for(pipe, b'\x1b[99z').read()
        assert key.action is ControlAction.OTHER


class TestTimeouts:
    """Polling and end of input."""

    def test_timeout_returns_none(self, pipe) -> None:
        reader = RawKeyReader(pipe[0], escape_timeout=0.02)
        assert reader.read(timeout=0.01) is None

    def test_eof_raises(self, pipe) -> None:
        r, w = pipe
        os.close(w)
        with pytest.raises(EOFError):
            RawKeyReader(r).read()
