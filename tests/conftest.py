"""Shared fixtures: a scripted terminal standing in for the real driver."""

from __future__ import annotations

import time
from collections import deque
from contextlib import contextmanager
from typing import Iterable, Iterator, Optional

import pytest

from termline.core.keys import ControlAction, RawKey
from termline.core.terminal import clear_terminal, set_terminal


def raw_bytes(text: str) -> list[RawKey]:
    """RawKeys for text as the driver delivers it: one per UTF-8 byte."""
    return [RawKey.byte(b) for b in text.encode("utf-8")]


def ctrl(action: ControlAction) -> RawKey:
    return RawKey.control(action)


ENTER = ctrl(ControlAction.SUBMIT)
CTRL_C = ctrl(ControlAction.INTERRUPT)


class FakeTerminal:
    """
    Terminal driver double.

    Serves RawKeys from a script and records every output primitive in
    calls as (name, *args) tuples.
    """

    def __init__(self, width: int = 80, position: Optional[tuple[int, int]] = (0, 0)) -> None:
        self.keys: deque[RawKey] = deque()
        self.calls: list[tuple] = []
        self.width = width
        self.position = position
        self.output = ""
        self.reads = 0
        self.raw_depth = 0

    def feed(self, *keys: RawKey | Iterable[RawKey]) -> FakeTerminal:
        for key in keys:
            if isinstance(key, RawKey):
                self.keys.append(key)
            else:
                self.keys.extend(key)
        return self

    def type(self, text: str) -> FakeTerminal:
        return self.feed(raw_bytes(text))

    def count(self, name: str) -> int:
        return sum(1 for call in self.calls if call[0] == name)

    # Driver interface

    def read_raw_key(self, timeout: Optional[float] = None) -> Optional[RawKey]:
        if not self.keys:
            if timeout is not None:
                time.sleep(timeout)
                return None
            raise EOFError("key script exhausted")
        self.reads += 1
        return self.keys.popleft()

    @contextmanager
    def raw_mode(self) -> Iterator[None]:
        self.raw_depth += 1
        try:
            yield
        finally:
            self.raw_depth -= 1

    @property
    def window_width(self) -> int:
        return self.width

    def cursor_position(self) -> Optional[tuple[int, int]]:
        return self.position

    def set_cursor_position(self, row: int, col: int) -> None:
        self.calls.append(("move", row, col))

    def write(self, text: str) -> None:
        self.calls.append(("write", text))
        self.output += text

    def write_line(self, text: str = "") -> None:
        self.calls.append(("write_line", text))
        self.output += text + "\n"

    def hide_cursor(self) -> None:
        self.calls.append(("hide_cursor",))

    def show_cursor(self) -> None:
        self.calls.append(("show_cursor",))

    def cursor_up(self) -> None:
        self.calls.append(("cursor_up",))

    def erase_line(self) -> None:
        self.calls.append(("erase_line",))

    def erase_cursor_to_end(self) -> None:
        self.calls.append(("erase_cursor_to_end",))

    def reset_color_attributes(self) -> None:
        self.calls.append(("reset_color_attributes",))


@pytest.fixture(autouse=True)
def terminal() -> Iterator[FakeTerminal]:
    """Install a FakeTerminal as the process-wide terminal for each test."""
    fake = FakeTerminal()
    set_terminal(fake)
    yield fake
    clear_terminal()
