"""Typer CLI application for trying prompts from a shell."""

from __future__ import annotations

import sys
import time
from typing import Annotated, Optional

import typer
from loguru import logger
from rich.console import Console


def _configure_logging(debug: bool) -> None:
    """Library logging is off by default; --debug sends it to stderr."""
    if debug:
        logger.remove()
        logger.add(sys.stderr, level="DEBUG")
        logger.enable("termline")


def create_app() -> typer.Typer:
    """Create and configure the CLI application."""
    app = typer.Typer(
        name="termline",
        help="Interactive terminal prompts with in-place line editing.",
        no_args_is_help=True,
        rich_markup_mode="rich",
    )
    console = Console(stderr=True)

    @app.callback()
    def main(
        debug: Annotated[bool, typer.Option("--debug", help="Log driver and decoder activity to stderr")] = False,
    ) -> None:
        _configure_logging(debug)

    @app.command("input")
    def input_(
        prompt: Annotated[str, typer.Argument(help="Question to show")],
        initial: Annotated[str, typer.Option("--initial", "-i", help="Text pre-filled in the input")] = "",
        default: Annotated[Optional[str], typer.Option("--default", "-d", help="Value used when the answer is empty")] = None,
        min_length: Annotated[int, typer.Option("--min-length", help="Reject answers shorter than this")] = 0,
    ) -> None:
        """Read one line of text and print it to stdout."""
        from termline.components.input import Input
        from termline.errors import ValidationError

        def validate(line: str) -> bool:
            if len(line) < min_length:
                raise ValidationError(f"Answer must be at least {min_length} characters")
            return True

        value = Input(prompt, validator=validate, initial_text=initial, default_value=default).run()
        print(value)

    @app.command()
    def password(
        prompt: Annotated[str, typer.Argument(help="Question to show")] = "Password",
    ) -> None:
        """Read a line without echo and print it to stdout."""
        from termline.components.input import Password

        print(Password(prompt).run())

    @app.command()
    def confirm(
        prompt: Annotated[str, typer.Argument(help="Question to show")],
        default: Annotated[Optional[bool], typer.Option("--default/--no-default", help="Answer used for Enter")] = None,
    ) -> None:
        """Ask a yes/no question; exit status 0 for yes, 1 for no."""
        from termline.components.confirm import Confirm

        if not Confirm(prompt, default=default).run():
            raise typer.Exit(1)

    @app.command()
    def keys() -> None:
        """Print decoded key events until Enter (for diagnosing terminals)."""
        from termline.core.keys import ControlAction
        from termline.framework.context import Context

        context = Context()
        console.print("[dim]Press keys, Enter to stop, Ctrl+C to abort[/]")
        with context.terminal.raw_mode():
            while True:
                event = context.read_key()
                if event.is_control:
                    console.print(f"[bold cyan]{event.action.name}[/]")
                    if event.action is ControlAction.SUBMIT:
                        break
                else:
                    kind = "multibyte" if event.multibyte else ("ascii" if event.is_ascii else "byte")
                    console.print(f"{event.char!r} [dim]U+{ord(event.char):04X} {kind}[/]")

    @app.command()
    def spin(
        seconds: Annotated[float, typer.Option("--seconds", "-s", help="How long each demo task runs")] = 2.0,
        count: Annotated[int, typer.Option("--count", "-n", help="Number of parallel spinners")] = 1,
    ) -> None:
        """Animate spinners over sleeping tasks."""
        from termline.components.spinner import MultiSpinner, Spinner

        if count <= 1:
            Spinner("Working", lambda: time.sleep(seconds), done_message="Done").run()
            return

        multi = MultiSpinner()
        for i in range(count):
            delay = seconds * (i + 1) / count
            multi.add(f"Task {i + 1}", lambda d=delay: time.sleep(d), done_message=f"Task {i + 1} finished")
        multi.run()

    return app
