"""Password prompts with optional masked echo."""

from hushprompt.core import (
    InteractivePasswordReader,
    PasswordReadCancelled,
    PasswordReadError,
    PasswordReader,
    PasswordReaderError,
    StubInteractivePasswordReader,
    StubPasswordReader,
    SupportsInteractivity,
    TerminalPasswordReader,
    read_nonempty_password,
)

__all__ = [
    "InteractivePasswordReader",
    "PasswordReadCancelled",
    "PasswordReadError",
    "PasswordReader",
    "PasswordReaderError",
    "StubInteractivePasswordReader",
    "StubPasswordReader",
    "SupportsInteractivity",
    "TerminalPasswordReader",
    "read_nonempty_password",
]
