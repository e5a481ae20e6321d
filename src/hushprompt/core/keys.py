"""Key-press helpers built on prompt_toolkit's terminal input layer."""

from __future__ import annotations

import os
import select
import sys
from collections.abc import Iterator

from prompt_toolkit.input import Input
from prompt_toolkit.key_binding import KeyPress
from prompt_toolkit.keys import Keys

if sys.platform == "win32":  # pragma: no cover - exercised on Windows only
    TERMINAL_ERRORS: tuple[type[BaseException], ...] = (OSError,)
else:
    import termios

    TERMINAL_ERRORS = (OSError, termios.error)

# Keys.Enter and Keys.Backspace are aliases of ControlM and ControlH.
ACCEPT_KEYS: frozenset[Keys] = frozenset({Keys.ControlM, Keys.ControlJ})
ERASE_KEYS: frozenset[Keys] = frozenset({Keys.ControlH, Keys.Delete})
INTERRUPT_KEY = Keys.ControlC
END_OF_INPUT_KEY = Keys.ControlD

# prompt_toolkit decodes stdin with "surrogateescape", so invalid UTF-8 bytes
# surface as lone surrogates in this range.
_ESCAPED_BYTE_MIN = "\udc80"
_ESCAPED_BYTE_MAX = "\udcff"


def is_character(key_press: KeyPress) -> bool:
    """Return True when the key press carries a typed character."""
    return not isinstance(key_press.key, Keys)


def is_undecodable(char: str) -> bool:
    """Return True when ``char`` stands for a byte that was not valid UTF-8."""
    return _ESCAPED_BYTE_MIN <= char <= _ESCAPED_BYTE_MAX


def _wait_for_input(terminal_input: Input) -> None:
    if sys.platform == "win32":  # pragma: no cover - exercised on Windows only
        from prompt_toolkit.eventloop.win32 import wait_for_handles

        wait_for_handles([terminal_input.handle])  # type: ignore[attr-defined]
    else:
        select.select([terminal_input.fileno()], [], [])


def check_terminal_attributes(terminal_input: Input) -> None:
    """Raise when a terminal input's attributes cannot be read.

    prompt_toolkit's ``raw_mode()`` skips the mode switch without raising in
    that case, leaving echo enabled. Inputs that are not terminals (pipes) pass.
    """
    if sys.platform == "win32":  # pragma: no cover - exercised on Windows only
        return
    fileno = terminal_input.fileno()
    if os.isatty(fileno):
        termios.tcgetattr(fileno)


def iter_key_batches(terminal_input: Input) -> Iterator[list[KeyPress]]:
    """Yield batches of key presses from ``terminal_input``, blocking until each arrives.

    Iteration stops once the input reports the end of its stream; any partial
    escape sequence still held by the parser is flushed out first.
    """
    while not terminal_input.closed:
        _wait_for_input(terminal_input)
        key_presses = terminal_input.read_keys()
        if key_presses:
            yield key_presses
    flushed = terminal_input.flush_keys()
    if flushed:
        yield flushed


__all__ = [
    "ACCEPT_KEYS",
    "END_OF_INPUT_KEY",
    "ERASE_KEYS",
    "INTERRUPT_KEY",
    "TERMINAL_ERRORS",
    "check_terminal_attributes",
    "is_character",
    "is_undecodable",
    "iter_key_batches",
]
