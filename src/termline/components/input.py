"""Line input prompts."""

from __future__ import annotations

from typing import Callable, Optional

from termline.components.prompt import prompt_error, prompt_input, prompt_success
from termline.errors import ValidationError
from termline.framework.component import Component
from termline.framework.context import Context

Validator = Callable[[str], object]


class Input(Component[str]):
    """
    Ask for one line of text.

    An empty answer falls back to default_value when one is given. If
    validator raises ValidationError, its message is shown above the prompt
    and a fresh line is read.
    """

    def __init__(
        self,
        prompt: str,
        validator: Optional[Validator] = None,
        initial_text: str = "",
        default_value: Optional[str] = None,
        context: Optional[Context] = None,
    ) -> None:
        super().__init__(context)
        self.prompt = prompt
        self.validator = validator
        self.initial_text = initial_text
        self.default_value = default_value
        self.value: Optional[str] = None
        self.error: Optional[str] = None

    def render(self) -> None:
        if self.error is not None:
            self.context.write_line(prompt_error(self.error))

    def dispose(self) -> None:
        if self.value is not None:
            self.context.write_line(prompt_success(self.prompt, self._display(self.value)))

    def interact(self) -> str:
        while True:
            self.context.write(prompt_input(self.prompt, self.default_value))
            line = self._read()
            if not line and self.default_value is not None:
                line = self.default_value

            if self.validator is not None:
                try:
                    self.validator(line)
                except ValidationError as e:
                    self.error = e.message
                    self.set_state()
                    continue

            self.value = line
            return line

    def _read(self) -> str:
        return self.context.read_line(initial_text=self.initial_text)

    def _display(self, value: str) -> str:
        return value


class Password(Input):
    """Input that never echoes what is typed."""

    def __init__(
        self,
        prompt: str,
        validator: Optional[Validator] = None,
        mask: str = "*",
        context: Optional[Context] = None,
    ) -> None:
        super().__init__(prompt, validator=validator, context=context)
        self.mask = mask

    def _read(self) -> str:
        return self.context.read_line(silent=True)

    def _display(self, value: str) -> str:
        return self.mask * len(value)
