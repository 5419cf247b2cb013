"""Yes/no prompt answered with a single key."""

from __future__ import annotations

from typing import Optional

from termline.components.prompt import prompt_input, prompt_success
from termline.core.keys import ControlAction
from termline.framework.component import Component
from termline.framework.context import Context


class Confirm(Component[bool]):
    """
    Ask a yes/no question.

    Reads keys directly instead of a line: 'y' or 'n' answers immediately,
    Enter accepts the default when there is one. Every other key is ignored.
    """

    def __init__(
        self,
        prompt: str,
        default: Optional[bool] = None,
        context: Optional[Context] = None,
    ) -> None:
        super().__init__(context)
        self.prompt = prompt
        self.default = default
        self.answer: Optional[bool] = None

    @property
    def hint(self) -> str:
        if self.default is None:
            return "y/n"
        return "Y/n" if self.default else "y/N"

    def dispose(self) -> None:
        if self.answer is not None:
            self.context.write_line(prompt_success(self.prompt, "yes" if self.answer else "no"))

    def interact(self) -> bool:
        self.context.write(prompt_input(self.prompt, self.hint))
        with self.context.terminal.raw_mode():
            while self.answer is None:
                key = self.context.read_key()
                if key.is_char and key.char.lower() in ("y", "n"):
                    self.answer = key.char.lower() == "y"
                elif key.action is ControlAction.SUBMIT and self.default is not None:
                    self.answer = self.default
        self.context.write_line()
        return self.answer
