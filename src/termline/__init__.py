"""
termline: interactive terminal input

Read edited lines from a raw terminal and redraw prompts in place.

Quick Start:
    >>> import termline
    >>> name = termline.read_line()
    >>> termline.Input("Your name", default_value="anonymous").run()

Features:
    - Inline editing: cursor movement, word jumps, kill to end, clear line
    - Multi-byte UTF-8 input reassembled from byte-at-a-time reads
    - macOS accent popup correction (hold 'a', pick 'à')
    - Render contexts that erase their previous frame before drawing
    - Ctrl+C always restores the cursor and colors before exiting
"""

from loguru import logger

__version__ = "0.1.0"

# Library code stays quiet unless the application opts in
logger.disable("termline")

from termline.core.keys import ControlAction, KeyEvent, RawKey
from termline.core.terminal import Terminal, get_terminal, set_terminal
from termline.edit.line_editor import LineEditor
from termline.errors import TermlineError, ValidationError
from termline.framework.context import BufferTarget, Context, TerminalTarget
from termline.components import Confirm, Input, MultiSpinner, Password, Spinner


def read_line(initial_text: str = "", silent: bool = False) -> str:
    """Read one edited line on the process-wide terminal."""
    return Context().read_line(initial_text=initial_text, silent=silent)


def reset() -> None:
    """Show the cursor and restore default colors."""
    Context.reset()


__all__ = [
    # Version
    "__version__",
    # Keys
    "ControlAction",
    "KeyEvent",
    "RawKey",
    # Terminal
    "Terminal",
    "get_terminal",
    "set_terminal",
    # Editing
    "LineEditor",
    "Context",
    "TerminalTarget",
    "BufferTarget",
    "read_line",
    "reset",
    # Errors
    "TermlineError",
    "ValidationError",
    # Components
    "Confirm",
    "Input",
    "Password",
    "Spinner",
    "MultiSpinner",
]
