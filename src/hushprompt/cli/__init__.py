"""CLI package for hushprompt."""

from __future__ import annotations

import logging
import os
import sys
from importlib import metadata
from pathlib import Path

import typer
from rich.markup import escape

from hushprompt.core import (
    ConfigurationError,
    PasswordReadCancelled,
    PasswordReadError,
    TerminalPasswordReader,
    load_settings,
    read_nonempty_password,
)

from .branding import themed_console

app = typer.Typer(help="Read passwords from the terminal with optional masked echo", no_args_is_help=True)

CLI_CONSOLE = themed_console(stderr=True)

EXIT_READ_FAILED = 1
EXIT_USAGE = 2
EXIT_CANCELLED = 130


def styled_echo(message: str = "", *, nl: bool = True) -> None:
    """Print a status message to stderr using the hushprompt themed console."""
    CLI_CONSOLE.print(message, end="" if not nl else "\n")


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() not in {"", "0", "false", "no"}


def _configure_logging(verbose: bool) -> None:
    root_logger = logging.getLogger()
    if verbose:
        if not root_logger.handlers:
            logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
        root_logger.setLevel(logging.DEBUG)
    else:
        if root_logger.handlers:
            root_logger.setLevel(logging.WARNING)
        else:
            logging.basicConfig(level=logging.WARNING, format="%(message)s")


@app.command()
def read(
    prompt: str | None = typer.Option(None, "--prompt", "-p", help="Text shown before reading"),  # noqa: B008
    echo_symbol: str | None = typer.Option(None, "--echo-symbol", "-e", help="Character echoed per typed character"),  # noqa: B008
    no_echo_symbol: bool = typer.Option(False, "--no-echo-symbol", help="Echo nothing while typing"),  # noqa: B008
    mask: bool | None = typer.Option(None, "--mask/--no-mask", help="Read key by key with masked echo"),  # noqa: B008
    require_input: bool | None = typer.Option(  # noqa: B008
        None, "--require-input/--allow-empty", help="Ask again while an interactive user enters nothing"
    ),
    max_attempts: int | None = typer.Option(None, "--max-attempts", min=1, help="Give up after this many empty answers"),  # noqa: B008
    config: Path | None = typer.Option(None, "--config", help="Read settings from this TOML file"),  # noqa: B008
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),  # noqa: B008
) -> None:
    """Read a password and print it to stdout."""
    _configure_logging(verbose or _env_flag("HUSHPROMPT_DEBUG"))
    if no_echo_symbol and echo_symbol is not None:
        styled_echo("[hushprompt.error]❌ Options '--echo-symbol' and '--no-echo-symbol' cannot be combined.[/]")
        raise typer.Exit(code=EXIT_USAGE)
    try:
        settings = load_settings(config)
    except ConfigurationError as exc:
        styled_echo(f"[hushprompt.error]❌ {escape(str(exc))}[/]")
        raise typer.Exit(code=EXIT_USAGE)

    try:
        reader = TerminalPasswordReader.from_settings(settings, stdout=sys.stderr)
        if no_echo_symbol:
            reader.set_echo_symbol(None)
        elif echo_symbol is not None:
            reader.set_echo_symbol(echo_symbol)
    except ValueError as exc:
        styled_echo(f"[hushprompt.error]❌ {escape(str(exc))}[/]")
        raise typer.Exit(code=EXIT_USAGE)

    use_mask = settings.mask if mask is None else mask
    retry = settings.require_input if require_input is None else require_input
    attempts = max_attempts if max_attempts is not None else settings.max_attempts

    try:
        if retry:
            password = read_nonempty_password(
                reader,
                prompt,
                masked=use_mask,
                on_empty=lambda: styled_echo("[hushprompt.warning]You didn't type anything, try again![/]"),
                max_attempts=attempts,
            )
        elif use_mask:
            password = reader.read_password_masked() if prompt is None else reader.read_password_masked_with_prompt(prompt)
        else:
            password = reader.read_password() if prompt is None else reader.read_password_with_prompt(prompt)
    except PasswordReadCancelled:
        styled_echo("[hushprompt.warning]⚠️  Password entry cancelled.[/]")
        raise typer.Exit(code=EXIT_CANCELLED)
    except PasswordReadError as exc:
        styled_echo(f"[hushprompt.error]❌ {escape(str(exc))}[/]")
        raise typer.Exit(code=EXIT_READ_FAILED)

    typer.echo(password)


@app.command()
def interactive() -> None:
    """Report whether stdin is attached to a live terminal."""
    if TerminalPasswordReader().is_interactive():
        typer.echo("interactive")
        return
    typer.echo("redirected")
    raise typer.Exit(code=1)


@app.command()
def version() -> None:
    """Show CLI version."""
    try:
        pkg_version = metadata.version("hushprompt")
    except metadata.PackageNotFoundError:
        pkg_version = "0.0.0"
    typer.echo(f"hushprompt version {pkg_version}")


def main() -> None:
    """Console-script entrypoint."""
    app()


__all__ = ["app", "main"]
