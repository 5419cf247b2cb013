"""Prompt component lifecycle built on a render Context."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Generic, Optional, TypeVar

from termline.framework.context import Context

T = TypeVar("T")


class Component(ABC, Generic[T]):
    """
    Base class for interactive prompts.

    run() drives the lifecycle: init, first render, interact, dispose.
    Between those, set_state() erases whatever the last render wrote and
    renders again, so a component only ever describes its current frame.
    """

    def __init__(self, context: Optional[Context] = None) -> None:
        self.context = context or Context()

    def init(self) -> None:
        """Prepare state before the first render."""

    def render(self) -> None:
        """Write the current frame through self.context."""

    def dispose(self) -> None:
        """Write the final frame once interaction is over."""

    @abstractmethod
    def interact(self) -> T:
        """Handle input until a result is available."""

    def set_state(self, fn: Optional[Callable[[], None]] = None) -> None:
        """Apply a state change and redraw."""
        if fn is not None:
            fn()
        self.context.wipe()
        self.render()
        self.context.increase_render_count()

    def run(self) -> T:
        self.init()
        self.render()
        self.context.increase_render_count()
        result = self.interact()
        self.context.wipe()
        self.dispose()
        return result
