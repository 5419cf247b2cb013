"""Exceptions raised by termline."""


class TermlineError(Exception):
    """Base class for termline errors."""


class ValidationError(TermlineError):
    """Raised by an input validator to reject a line and ask again."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
