"""Runtime settings for terminal input."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from typing import Optional

ENV_PREFIX = "TERMLINE_"


@dataclass(frozen=True)
class Settings:
    """
    Tunables for the terminal driver and prompt components.

    Values can be overridden with TERMLINE_* environment variables,
    e.g. TERMLINE_ESCAPE_TIMEOUT=0.1.
    """

    # Columns kept free at the right edge so the cursor never wraps
    margin: int = 3

    # Seconds to wait for the rest of an escape sequence
    escape_timeout: float = 0.05

    # Seconds to wait for the terminal to answer a cursor position query
    cursor_query_timeout: float = 0.2

    # Seconds between spinner frames
    spinner_interval: float = 0.08

    def __post_init__(self) -> None:
        if self.margin < 0:
            raise ValueError(f"margin must be >= 0, got {self.margin}")
        for name in ("escape_timeout", "cursor_query_timeout", "spinner_interval"):
            value = getattr(self, name)
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")

    @classmethod
    def from_env(cls, environ: Optional[dict[str, str]] = None) -> Settings:
        """Build settings from TERMLINE_* variables, falling back to defaults."""
        env = os.environ if environ is None else environ
        values: dict[str, object] = {}
        for f in fields(cls):
            raw = env.get(ENV_PREFIX + f.name.upper())
            if raw is None:
                continue
            try:
                values[f.name] = int(raw) if f.type == "int" else float(raw)
            except ValueError:
                raise ValueError(f"Invalid value for {ENV_PREFIX}{f.name.upper()}: {raw!r}") from None
        return cls(**values)


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the process-wide settings, loading them from the environment once."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings
