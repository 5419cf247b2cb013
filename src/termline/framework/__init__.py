"""Render contexts and the component lifecycle."""

from termline.framework.context import BufferTarget, Context, RenderTarget, TerminalTarget
from termline.framework.component import Component

__all__ = [
    "BufferTarget",
    "Context",
    "RenderTarget",
    "TerminalTarget",
    "Component",
]
