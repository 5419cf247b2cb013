"""Low-level terminal operations - the process-wide console handle."""

from __future__ import annotations

import os
import re
import shutil
import sys
from contextlib import contextmanager
from typing import Iterator, Optional, TextIO

from loguru import logger

from termline.config import Settings, get_settings
from termline.core.input import RawKeyReader
from termline.core.keys import RawKey

_CURSOR_REPORT = re.compile(rb'\x1b\[(\d+);(\d+)R')


class Terminal:
    """
    VT100 terminal driver.

    Rows and columns are 0-based throughout; the 1-based escape sequence
    coordinates are converted on the way in and out.
    """

    def __init__(
        self,
        stdin_fd: Optional[int] = None,
        stdout: Optional[TextIO] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._fd = sys.stdin.fileno() if stdin_fd is None else stdin_fd
        self._out = stdout or sys.stdout
        self._reader = RawKeyReader(self._fd, self._settings.escape_timeout)
        self._raw_depth = 0

    # -- input ---------------------------------------------------------------

    def read_raw_key(self, timeout: Optional[float] = None) -> Optional[RawKey]:
        """Read one raw key (blocking unless timeout is given)."""
        return self._reader.read(timeout)

    @property
    def is_tty(self) -> bool:
        try:
            return os.isatty(self._fd)
        except OSError:
            return False

    @contextmanager
    def raw_mode(self) -> Iterator[None]:
        """
        Context manager for unbuffered, unechoed input (Unix only).

        Signals are disabled so Ctrl+C arrives as a key; output processing
        stays on so a newline still returns the carriage. Re-entrant: only
        the outermost call touches termios.
        """
        if self._raw_depth > 0 or not self.is_tty:
            self._raw_depth += 1
            try:
                yield
            finally:
                self._raw_depth -= 1
            return

        try:
            import termios
        except ImportError:
            # Windows or no termios - just yield
            yield
            return

        old_settings = termios.tcgetattr(self._fd)
        new = termios.tcgetattr(self._fd)
        new[3] &= ~(termios.ICANON | termios.ECHO | termios.ISIG | termios.IEXTEN)
        new[1] &= ~(termios.IXON | termios.ICRNL | termios.INLCR | termios.IGNCR)
        new[6][termios.VMIN] = 1
        new[6][termios.VTIME] = 0
        termios.tcsetattr(self._fd, termios.TCSANOW, new)
        logger.debug("Entered raw mode on fd {}", self._fd)
        self._raw_depth += 1
        try:
            yield
        finally:
            self._raw_depth -= 1
            termios.tcsetattr(self._fd, termios.TCSADRAIN, old_settings)
            logger.debug("Restored terminal mode on fd {}", self._fd)

    # -- geometry --------------------------------------------------------------

    @property
    def window_width(self) -> int:
        """Terminal width in columns."""
        return shutil.get_terminal_size((80, 24)).columns

    def cursor_position(self) -> Optional[tuple[int, int]]:
        """
        Ask the terminal where the cursor is.

        Sends a Device Status Report request and parses the ESC[row;colR
        reply. Returns None when input is not a terminal or no reply arrives.
        """
        if not self.is_tty:
            return None

        with self.raw_mode():
            self._emit('\x1b[6n')
            reply = b''
            while not reply.endswith(b'R'):
                value = self._reader.read_byte(self._settings.cursor_query_timeout)
                if value is None:
                    logger.debug("No reply to cursor position query (got {!r})", reply)
                    return None
                reply += bytes([value])
                if len(reply) > 32:
                    break

        match = _CURSOR_REPORT.search(reply)
        if match is None:
            logger.debug("Unparseable cursor position reply {!r}", reply)
            return None
        return int(match.group(1)) - 1, int(match.group(2)) - 1

    def set_cursor_position(self, row: int, col: int) -> None:
        self._emit(f'\x1b[{row + 1};{col + 1}H')

    # -- output ----------------------------------------------------------------

    def write(self, text: str) -> None:
        self._emit(text)

    def write_line(self, text: str = "") -> None:
        self._emit(text + '\n')

    def hide_cursor(self) -> None:
        self._emit('\x1b[?25l')

    def show_cursor(self) -> None:
        self._emit('\x1b[?25h')

    def cursor_up(self) -> None:
        self._emit('\x1b[1A')

    def erase_line(self) -> None:
        """Clear the whole current row and return to its first column."""
        self._emit('\x1b[2K\r')

    def erase_cursor_to_end(self) -> None:
        self._emit('\x1b[K')

    def reset_color_attributes(self) -> None:
        self._emit('\x1b[0m')

    def _emit(self, text: str) -> None:
        self._out.write(text)
        self._out.flush()


# Process-wide handle shared by every render context
_terminal: Optional[Terminal] = None


def get_terminal() -> Terminal:
    """Return the process-wide terminal, creating it on first use."""
    global _terminal
    if _terminal is None:
        _terminal = Terminal()
    return _terminal


def set_terminal(terminal: Terminal) -> None:
    """Replace the process-wide terminal (for testing or embedding)."""
    global _terminal
    _terminal = terminal


def clear_terminal() -> None:
    """Drop the process-wide terminal so the next get_terminal() builds a fresh one."""
    global _terminal
    _terminal = None
