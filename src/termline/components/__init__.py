"""Ready-made prompts."""

from termline.components.confirm import Confirm
from termline.components.input import Input, Password
from termline.components.spinner import MultiSpinner, Spinner

__all__ = [
    "Confirm",
    "Input",
    "Password",
    "MultiSpinner",
    "Spinner",
]
