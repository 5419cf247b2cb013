"""Single-line edit buffer driven by KeyEvents."""

from __future__ import annotations

from typing import Optional

from termline.core.keys import ControlAction, KeyEvent
from termline.edit.accents import AccentFilter


class LineEditor:
    """
    Editable text buffer with a cursor.

    The cursor is a code point index in [0, len(text)]. Characters typed
    while the buffer holds max_length code points are dropped, which keeps
    the rendered line on a single terminal row.

    Supported bindings (see RawKeyReader for the keys behind them):
    - Enter: submit
    - Backspace / Ctrl+H: delete before cursor
    - Delete / Ctrl+D: delete at cursor
    - Ctrl+U: clear line
    - Ctrl+K: delete from cursor to end
    - Left / Ctrl+B, Right / Ctrl+F: move by one
    - Ctrl+Left / Alt+B: move to previous word start
    - Home / Ctrl+A, End / Ctrl+E: move to start / end
    """

    def __init__(self, initial_text: str = "", max_length: Optional[int] = None) -> None:
        self._text = initial_text
        self._cursor = len(initial_text)
        self.max_length = max_length
        self.accents = AccentFilter()
        self.submitted = False
        self.interrupted = False

    @property
    def text(self) -> str:
        return self._text

    @property
    def cursor(self) -> int:
        return self._cursor

    def handle(self, event: KeyEvent) -> bool:
        """Apply one event. Returns True once the edit is finished."""
        previous = self._text[self._cursor - 1] if self._cursor > 0 else None
        if self.accents.process(event, previous):
            self.delete_back()

        if event.is_control:
            return self._handle_action(event.action)

        self.insert(event.char)
        return False

    def _handle_action(self, action: ControlAction) -> bool:
        if action is ControlAction.SUBMIT:
            self.submitted = True
            return True
        if action is ControlAction.INTERRUPT:
            self.interrupted = True
            return True

        handlers = {
            ControlAction.DELETE_BACK: self.delete_back,
            ControlAction.DELETE_FORWARD: self.delete_forward,
            ControlAction.CLEAR_LINE: self.clear_line,
            ControlAction.CLEAR_TO_END: self.clear_to_end,
            ControlAction.CURSOR_LEFT: self.move_left,
            ControlAction.CURSOR_RIGHT: self.move_right,
            ControlAction.CURSOR_WORD_LEFT: self.move_word_left,
            ControlAction.CURSOR_HOME: self.move_home,
            ControlAction.CURSOR_END: self.move_end,
        }
        handler = handlers.get(action)
        if handler is not None:
            handler()
        return False

    # Mutations

    def insert(self, char: str) -> bool:
        """Insert at the cursor. Returns False if the buffer is full."""
        if self.max_length is not None and len(self._text) >= self.max_length:
            return False
        self._text = self._text[:self._cursor] + char + self._text[self._cursor:]
        self._cursor += len(char)
        return True

    def delete_back(self) -> None:
        if self._cursor > 0:
            self._text = self._text[:self._cursor - 1] + self._text[self._cursor:]
            self._cursor -= 1

    def delete_forward(self) -> None:
        # Stops one short of the end: the final character is never removed here
        if self._cursor < len(self._text) - 1:
            self._text = self._text[:self._cursor] + self._text[self._cursor + 1:]

    def clear_line(self) -> None:
        self._text = ""
        self._cursor = 0

    def clear_to_end(self) -> None:
        self._text = self._text[:self._cursor]

    # Movement

    def move_left(self) -> None:
        if self._cursor > 0:
            self._cursor -= 1

    def move_right(self) -> None:
        if self._cursor < len(self._text):
            self._cursor += 1

    def move_word_left(self) -> None:
        if self._cursor > 0:
            last_space = self._text.rfind(' ', 0, self._cursor - 1)
            self._cursor = last_space + 1

    def move_home(self) -> None:
        self._cursor = 0

    def move_end(self) -> None:
        self._cursor = len(self._text)
