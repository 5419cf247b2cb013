"""Animated progress indicators for work running in the background."""

from __future__ import annotations

import io
import threading
from typing import Any, Callable, Optional, TypeVar

from termline.components.prompt import GREEN, RED, RESET
from termline.config import get_settings
from termline.core.ansi_text import truncate
from termline.framework.component import Component
from termline.framework.context import BufferTarget, Context

T = TypeVar("T")

DEFAULT_FRAMES = ("⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏")


class Spinner(Component[T]):
    """
    Show an animated line while task runs on a worker thread.

    The calling thread keeps the terminal: it redraws every interval seconds
    and polls the keyboard in between, so Ctrl+C ends the process even though
    the task itself cannot be cancelled.
    """

    def __init__(
        self,
        prompt: str,
        task: Callable[[], T],
        done_message: Optional[str] = None,
        frames: tuple[str, ...] = DEFAULT_FRAMES,
        interval: Optional[float] = None,
        context: Optional[Context] = None,
    ) -> None:
        super().__init__(context)
        self.prompt = prompt
        self.task = task
        self.done_message = done_message
        self.frames = frames
        self.interval = interval or get_settings().spinner_interval
        self.frame = 0
        self._result: Any = None
        self._error: Optional[BaseException] = None
        self._finished = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def done(self) -> bool:
        return self._finished.is_set()

    def start(self) -> None:
        """Launch the task. Daemon thread: an interrupt must not wait for it."""
        self._thread = threading.Thread(target=self._work, daemon=True)
        self._thread.start()

    def _work(self) -> None:
        try:
            self._result = self.task()
        except BaseException as e:
            self._error = e
        finally:
            self._finished.set()

    def tick(self) -> None:
        """Advance one animation frame."""
        self.frame = (self.frame + 1) % len(self.frames)
        self.set_state()

    def render(self) -> None:
        line = f"{self.frames[self.frame]} {self.prompt}"
        self.context.write_line(truncate(line, self.context.window_width - 1))

    def dispose(self) -> None:
        if self._error is not None:
            self.context.write_line(f"{RED}✘{RESET} {self.prompt}")
        else:
            message = self.done_message or self.prompt
            self.context.write_line(f"{GREEN}✔{RESET} {message}")

    def result(self) -> T:
        if self._error is not None:
            raise self._error
        return self._result

    def interact(self) -> T:
        self.start()
        self.context.hide_cursor()
        try:
            with self.context.terminal.raw_mode():
                while not self.done:
                    # Keys are discarded; polling keeps Ctrl+C live during the animation
                    self.context.poll_key(self.interval)
                    if not self.done:
                        self.tick()
        finally:
            self.context.show_cursor()
        return self._result

    def run(self) -> T:
        """Animate until the task finishes, draw the final line, then return or raise its outcome."""
        super().run()
        return self.result()


class MultiSpinner:
    """
    Several spinners animated as one block.

    Each spinner renders into its own BufferTarget; the buffers share one
    update callback that marks the block dirty. The coordinator redraws the
    whole block (one line per spinner) on its own context once per frame,
    after every spinner has ticked.
    """

    def __init__(self, context: Optional[Context] = None, interval: Optional[float] = None) -> None:
        self.context = context or Context()
        self.interval = interval or get_settings().spinner_interval
        self._entries: list[tuple[Spinner, io.StringIO]] = []
        self._dirty = False

    @property
    def spinners(self) -> list[Spinner]:
        return [spinner for spinner, _ in self._entries]

    def add(
        self,
        prompt: str,
        task: Callable[[], Any],
        done_message: Optional[str] = None,
    ) -> Spinner:
        buffer = io.StringIO()
        context = Context(self.context.terminal, BufferTarget(buffer, self._mark_dirty))
        spinner: Spinner = Spinner(prompt, task, done_message, context=context)
        self._entries.append((spinner, buffer))
        return spinner

    def _mark_dirty(self) -> None:
        self._dirty = True

    def redraw(self) -> None:
        """Replace the block on screen with the current buffer contents."""
        self.context.wipe()
        for _, buffer in self._entries:
            self.context.write_line(buffer.getvalue())
        self._dirty = False

    def run(self) -> list[Any]:
        """Run every task, animate until all finish, return results in order."""
        pending = list(self.spinners)
        for spinner in pending:
            spinner.render()
            spinner.start()
        self.redraw()

        self.context.hide_cursor()
        try:
            with self.context.terminal.raw_mode():
                while pending:
                    self.context.poll_key(self.interval)
                    for spinner in list(pending):
                        if spinner.done:
                            spinner.dispose()
                            pending.remove(spinner)
                        else:
                            spinner.tick()
                    if self._dirty:
                        self.redraw()
        finally:
            self.context.show_cursor()

        return [spinner.result() for spinner in self.spinners]
