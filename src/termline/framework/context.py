"""
Render context: the bookkeeping between prompt components and the terminal.

A Context counts the lines a render wrote so the next render can erase them
first, which makes a prompt appear to update in place instead of scrolling.
It also owns the interactive line editor loop and the Ctrl+C contract: any
key read that yields an interrupt restores the terminal and exits.
"""

from __future__ import annotations

import io
import sys
from typing import Callable, Optional, Protocol, runtime_checkable

from loguru import logger

from termline.config import get_settings
from termline.core.ansi_text import trailing_column
from termline.core.keys import ControlAction, KeyEvent, RawKey
from termline.core.terminal import Terminal, get_terminal
from termline.edit.decoder import KeyDecoder
from termline.edit.line_editor import LineEditor


@runtime_checkable
class RenderTarget(Protocol):
    """Where a context's text output goes."""

    counts_lines: bool

    def write(self, text: str) -> None:
        ...

    def write_line(self, text: str = "") -> None:
        ...

    def erase_lines(self, n: int) -> None:
        ...


class TerminalTarget:
    """Writes straight to the terminal. Every line occupies a screen row."""

    counts_lines = True

    def __init__(self, terminal: Terminal) -> None:
        self._terminal = terminal

    def write(self, text: str) -> None:
        self._terminal.write(text)

    def write_line(self, text: str = "") -> None:
        self._terminal.write_line(text)

    def erase_lines(self, n: int) -> None:
        for _ in range(n):
            self._terminal.cursor_up()
            self._terminal.erase_line()


class BufferTarget:
    """
    Collects output in a caller-owned buffer and calls on_update after each write.

    Used when several contexts render at once: each one writes its line into
    its own buffer and a single owner redraws all of them together (see
    MultiSpinner). write() appends; write_line() replaces the content.
    """

    counts_lines = False

    def __init__(self, buffer: io.StringIO, on_update: Callable[[], None]) -> None:
        self.buffer = buffer
        self.on_update = on_update

    def write(self, text: str) -> None:
        self.buffer.write(text)
        self.on_update()

    def write_line(self, text: str = "") -> None:
        self.buffer.seek(0)
        self.buffer.truncate()
        self.buffer.write(text)
        self.on_update()

    def erase_lines(self, n: int) -> None:
        if n > 0:
            self.buffer.seek(0)
            self.buffer.truncate()


def _restore(terminal: Terminal) -> None:
    terminal.show_cursor()
    terminal.reset_color_attributes()


class Context:
    """
    Tracks and repaints the screen region owned by one interactive prompt.

    The terminal defaults to the process-wide handle; the target defaults to
    writing on that terminal.
    """

    @staticmethod
    def reset() -> None:
        """Show the cursor and restore default colors. Safe to call any time."""
        _restore(get_terminal())

    def __init__(
        self,
        terminal: Optional[Terminal] = None,
        target: Optional[RenderTarget] = None,
    ) -> None:
        self._terminal = terminal or get_terminal()
        self._target = target or TerminalTarget(self._terminal)
        self._decoder = KeyDecoder(self._read_raw)
        self._render_count = 0
        self._lines_count = 0
        self._column = 0

    @property
    def terminal(self) -> Terminal:
        return self._terminal

    @property
    def target(self) -> RenderTarget:
        return self._target

    # Counters

    @property
    def render_count(self) -> int:
        """How many times this context has rendered."""
        return self._render_count

    def increase_render_count(self) -> None:
        self._render_count += 1

    def reset_render_count(self) -> None:
        self._render_count = 0

    @property
    def lines_count(self) -> int:
        """Lines written to the screen since the last erase."""
        return self._lines_count

    def increase_lines_count(self) -> None:
        self._lines_count += 1

    def reset_lines_count(self) -> None:
        self._lines_count = 0

    @property
    def window_width(self) -> int:
        return self._terminal.window_width

    def show_cursor(self) -> None:
        self._terminal.show_cursor()

    def hide_cursor(self) -> None:
        self._terminal.hide_cursor()

    # Output

    def write(self, text: str) -> None:
        """Write text without a line break. Not counted as a line."""
        self._target.write(text)
        self._column = trailing_column(text, self._column)

    def write_line(self, text: str = "") -> None:
        """Write text and a line break, counting the line for later erasure."""
        if self._target.counts_lines:
            self.increase_lines_count()
        self._target.write_line(text)
        self._column = 0

    def erase_previous_line(self, n: int = 1) -> None:
        """Erase n lines above the cursor and reset the line count."""
        self._target.erase_lines(n)
        self.reset_lines_count()
        self._column = 0

    def wipe(self) -> None:
        """Remove the lines written by the last render."""
        self.erase_previous_line(self._lines_count)

    wipe_last_render = wipe

    # Input

    def read_key(self) -> KeyEvent:
        """Block for the next key event. Ctrl+C exits the process."""
        return self._decoder.decode()

    def poll_key(self, timeout: float) -> Optional[KeyEvent]:
        """Like read_key, but returns None if no key arrives within timeout."""
        with self._terminal.raw_mode():
            first = self._terminal.read_raw_key(timeout)
            if first is None:
                return None
            return self._decoder.decode_from(self._check_interrupt(first))

    def _read_raw(self) -> RawKey:
        with self._terminal.raw_mode():
            return self._check_interrupt(self._terminal.read_raw_key())

    def _check_interrupt(self, key: RawKey) -> RawKey:
        if key.action is ControlAction.INTERRUPT:
            logger.debug("Interrupt received, restoring terminal and exiting")
            self.write_line()
            _restore(self._terminal)
            sys.exit(1)
        return key

    def read_line(self, initial_text: str = "", silent: bool = False) -> str:
        """
        Read a line with inline editing and return it on Enter.

        The line is repainted in full after every key: the cursor is moved
        back to where input started, the row is cleared to the end, the
        buffer is rewritten and the cursor is placed at the edit position.
        Input is capped so the line never wraps onto another row.

        silent suppresses all echo (used for passwords); only the final
        line break is written.
        """
        with self._terminal.raw_mode():
            position = self._terminal.cursor_position()
            row, col = position if position is not None else (0, self._column)
            max_length = self._terminal.window_width - col - get_settings().margin

            editor = LineEditor(initial_text, max_length=max_length)
            if initial_text and not silent:
                self.write(initial_text)

            while True:
                if editor.handle(self.read_key()):
                    break
                if not silent:
                    self._repaint(editor, row, col)

        self.write_line()
        return editor.text

    def _repaint(self, editor: LineEditor, row: int, col: int) -> None:
        terminal = self._terminal
        terminal.hide_cursor()
        terminal.set_cursor_position(row, col)
        terminal.erase_cursor_to_end()
        terminal.write(editor.text)
        terminal.set_cursor_position(row, col + editor.cursor)
        terminal.show_cursor()
        self._column = col + editor.cursor
