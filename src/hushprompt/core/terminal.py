"""Terminal-backed password reader."""

from __future__ import annotations

import getpass
import logging
import sys
from collections import deque
from collections.abc import Callable, Iterator
from typing import Any, TextIO

from prompt_toolkit.input import Input, create_input
from prompt_toolkit.key_binding import KeyPress
from prompt_toolkit.utils import get_cwidth

from .config import ReaderSettings
from .errors import PasswordReadCancelled, PasswordReadError, PasswordReaderError
from .keys import (
    ACCEPT_KEYS,
    END_OF_INPUT_KEY,
    ERASE_KEYS,
    INTERRUPT_KEY,
    TERMINAL_ERRORS,
    check_terminal_attributes,
    is_character,
    is_undecodable,
    iter_key_batches,
)

logger = logging.getLogger(__name__)

InputFactory = Callable[[TextIO], Input]


def _validate_symbol(symbol: str | None) -> str | None:
    if symbol is not None and (not isinstance(symbol, str) or len(symbol) != 1):
        raise ValueError(f"Echo symbol must be a single character, got {symbol!r}")
    return symbol


def _strip_terminator(line: str) -> str:
    if not line.endswith("\n"):
        return line
    return line[:-1].removesuffix("\r")


class TerminalPasswordReader:
    """Reads passwords from the controlling terminal or from redirected stdin.

    When stdin is a live terminal, masked reads switch it to raw mode for the
    duration of the call and render ``echo_symbol`` (or nothing) per typed
    character. Redirected input is read one line at a time with no echo.

    ``stdin`` and ``stdout`` default to the process streams, resolved on every
    call. ``input_factory`` builds the prompt_toolkit input used for key-by-key
    reading and exists so tests can substitute a pipe.

    Keys that arrive after Enter in the same batch are kept and consumed by
    the next masked read; a cancelled or failed read discards them.
    """

    def __init__(
        self,
        echo_symbol: str | None = None,
        *,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        input_factory: InputFactory | None = None,
    ) -> None:
        self._echo_symbol = _validate_symbol(echo_symbol)
        self._stdin = stdin
        self._stdout = stdout
        self._input_factory = input_factory or create_input
        self._pending: deque[KeyPress] = deque()

    @classmethod
    def from_settings(cls, settings: ReaderSettings, **kwargs: Any) -> TerminalPasswordReader:
        """Build a reader using the echo symbol from ``settings``."""
        return cls(settings.echo_symbol, **kwargs)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(echo_symbol={self._echo_symbol!r})"

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------
    @property
    def echo_symbol(self) -> str | None:
        return self._echo_symbol

    def set_echo_symbol(self, symbol: str | None) -> None:
        """Set the replacement symbol echoed per character; ``None`` echoes nothing."""
        self._echo_symbol = _validate_symbol(symbol)

    def with_echo_symbol(self, symbol: str | None) -> TerminalPasswordReader:
        """Set the echo symbol and return this reader so calls can be chained."""
        self.set_echo_symbol(symbol)
        return self

    # ------------------------------------------------------------------
    # PasswordReader
    # ------------------------------------------------------------------
    def read_password(self) -> str:
        if not self.is_interactive():
            return self._read_line()
        return self._read_hidden()

    def read_password_with_prompt(self, prompt: str) -> str:
        self._write_prompt(prompt)
        return self.read_password()

    def read_password_masked(self) -> str:
        if not self.is_interactive():
            return self._read_line()
        return self._read_masked()

    def read_password_masked_with_prompt(self, prompt: str) -> str:
        self._write_prompt(prompt)
        return self.read_password_masked()

    # ------------------------------------------------------------------
    # SupportsInteractivity
    # ------------------------------------------------------------------
    def is_interactive(self) -> bool:
        stream = self._stdin if self._stdin is not None else sys.stdin
        if stream is None or stream is not sys.stdin:
            return False
        try:
            return stream.isatty()
        except (OSError, ValueError):
            return False

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _input_stream(self) -> TextIO:
        stream = self._stdin if self._stdin is not None else sys.stdin
        if stream is None:
            raise PasswordReadError("No input stream is available")
        return stream

    def _output_stream(self) -> TextIO:
        stream = self._stdout if self._stdout is not None else sys.stdout
        if stream is None:
            raise PasswordReadError("No output stream is available")
        return stream

    def _write(self, output: TextIO, text: str) -> None:
        try:
            output.write(text)
            output.flush()
        except (OSError, ValueError) as exc:
            raise PasswordReadError(f"Unable to write to output: {exc}") from exc

    def _write_prompt(self, prompt: str) -> None:
        self._write(self._output_stream(), prompt)

    def _read_line(self) -> str:
        logger.debug("Reading password line from redirected input")
        stream = self._input_stream()
        try:
            line = stream.readline()
        except UnicodeDecodeError as exc:
            raise PasswordReadError("Input is not valid text") from exc
        except (OSError, ValueError) as exc:
            raise PasswordReadError(f"Unable to read from input: {exc}") from exc
        return _strip_terminator(line)

    def _read_hidden(self) -> str:
        logger.debug("Reading hidden password from terminal")
        try:
            return getpass.getpass("", stream=self._output_stream())
        except EOFError:
            return ""
        except UnicodeDecodeError as exc:
            raise PasswordReadError("Input is not valid text") from exc
        except OSError as exc:
            raise PasswordReadError(f"Unable to read from terminal: {exc}") from exc

    def _read_masked(self) -> str:
        logger.debug("Reading masked password from terminal (echo=%s)", self._echo_symbol is not None)
        output = self._output_stream()
        try:
            terminal_input = self._input_factory(self._input_stream())
        except (*TERMINAL_ERRORS, ValueError) as exc:
            raise PasswordReadError(f"Unable to open terminal input: {exc}") from exc

        buffer: list[str] = []
        try:
            check_terminal_attributes(terminal_input)
            with terminal_input.raw_mode():
                self._collect_keys(terminal_input, buffer, output)
        except KeyboardInterrupt as exc:
            self._pending.clear()
            self._write(output, "\n")
            raise PasswordReadCancelled("Password entry cancelled") from exc
        except PasswordReaderError:
            self._pending.clear()
            self._write(output, "\n")
            raise
        except TERMINAL_ERRORS as exc:
            self._pending.clear()
            raise PasswordReadError(f"Unable to control terminal input: {exc}") from exc

        self._write(output, "\n")
        return "".join(buffer)

    def _next_key(self, batches: Iterator[list[KeyPress]]) -> KeyPress | None:
        while not self._pending:
            batch = next(batches, None)
            if batch is None:
                return None
            self._pending.extend(batch)
        return self._pending.popleft()

    def _collect_keys(self, terminal_input: Input, buffer: list[str], output: TextIO) -> None:
        batches = iter_key_batches(terminal_input)
        while (key_press := self._next_key(batches)) is not None:
            key = key_press.key
            if key in ACCEPT_KEYS:
                return
            if key == INTERRUPT_KEY:
                logger.debug("Masked password entry interrupted")
                raise PasswordReadCancelled("Password entry cancelled")
            if key == END_OF_INPUT_KEY:
                if not buffer:
                    return
                continue
            if key in ERASE_KEYS:
                self._erase_last(buffer, output)
            elif is_character(key_press):
                self._accept(key, buffer, output)
        logger.debug("Terminal input reached end of stream")

    def _accept(self, char: str, buffer: list[str], output: TextIO) -> None:
        if is_undecodable(char):
            raise PasswordReadError("Input is not valid UTF-8")
        if not char.isprintable():
            return
        buffer.append(char)
        if self._echo_symbol is not None:
            self._write(output, self._echo_symbol)

    def _erase_last(self, buffer: list[str], output: TextIO) -> None:
        if not buffer:
            return
        buffer.pop()
        if self._echo_symbol is not None:
            cells = max(get_cwidth(self._echo_symbol), 1)
            self._write(output, "\b" * cells + " " * cells + "\b" * cells)


__all__ = ["InputFactory", "TerminalPasswordReader"]
