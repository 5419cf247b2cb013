"""Fixed formatting for prompt lines."""

from __future__ import annotations

from typing import Optional

RESET = '\x1b[0m'
BOLD = '\x1b[1m'
DIM = '\x1b[90m'
CYAN = '\x1b[36m'
GREEN = '\x1b[32m'
RED = '\x1b[31m'
YELLOW = '\x1b[33m'


def prompt_input(message: str, hint: Optional[str] = None) -> str:
    """The line shown while waiting for input (no trailing newline)."""
    text = f"{CYAN}?{RESET} {BOLD}{message}{RESET}"
    if hint:
        text += f" {DIM}({hint}){RESET}"
    return text + f" {DIM}›{RESET} "


def prompt_success(message: str, value: str) -> str:
    """The line left on screen once a prompt is answered."""
    return f"{GREEN}✔{RESET} {BOLD}{message}{RESET} {DIM}·{RESET} {GREEN}{value}{RESET}"


def prompt_error(message: str) -> str:
    return f"{RED}✘ {message}{RESET}"
