"""ANSI text utilities - measuring prompt strings that carry escape codes."""

from __future__ import annotations

import re

# Pattern to match CSI escape sequences (colors, cursor movement, erase)
_ANSI_ESCAPE = re.compile(r'\x1b\[[0-9;?]*[A-Za-z~]')


def _strip_ansi(s: str) -> str:
    return _ANSI_ESCAPE.sub('', s)


def trailing_column(s: str, start: int = 0) -> int:
    """
    Column the cursor ends on after writing s from column start.

    Carriage returns and newlines both return to column 0.
    """
    visible = _strip_ansi(s)
    cut = max(visible.rfind('\n'), visible.rfind('\r'))
    if cut == -1:
        return start + len(visible)
    return len(visible) - cut - 1


def truncate(s: str, max_width: int) -> str:
    """
    Truncate an ANSI-escaped string to max visible width.

    Escape sequences are kept; a reset is appended when text was cut so
    colors do not bleed into the next line.
    """
    if max_width <= 0:
        return ""

    result: list[str] = []
    vis_len = 0
    pos = 0
    for match in _ANSI_ESCAPE.finditer(s):
        chunk = s[pos:match.start()]
        room = max_width - vis_len
        if len(chunk) > room:
            result.append(chunk[:room])
            return ''.join(result) + '\x1b[0m'
        result.append(chunk)
        vis_len += len(chunk)
        result.append(match.group())
        pos = match.end()

    tail = s[pos:]
    room = max_width - vis_len
    if len(tail) > room:
        return ''.join(result) + tail[:room] + '\x1b[0m'
    return ''.join(result) + tail
