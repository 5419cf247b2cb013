"""Terminal driver and key types."""

from termline.core.keys import ControlAction, KeyEvent, RawKey
from termline.core.input import RawKeyReader
from termline.core.terminal import Terminal, get_terminal, set_terminal, clear_terminal

__all__ = [
    "ControlAction",
    "KeyEvent",
    "RawKey",
    "RawKeyReader",
    "Terminal",
    "get_terminal",
    "set_terminal",
    "clear_terminal",
]
