"""Retry helper for prompting until the user types something."""

from __future__ import annotations

import logging
from collections.abc import Callable

from .errors import PasswordReadError
from .reader import PasswordReader, SupportsInteractivity

logger = logging.getLogger(__name__)


def _read_once(reader: PasswordReader, prompt: str | None, masked: bool) -> str:
    if masked:
        if prompt is None:
            return reader.read_password_masked()
        return reader.read_password_masked_with_prompt(prompt)
    if prompt is None:
        return reader.read_password()
    return reader.read_password_with_prompt(prompt)


def read_nonempty_password(
    reader: PasswordReader,
    prompt: str | None = None,
    *,
    masked: bool = True,
    on_empty: Callable[[], None] | None = None,
    max_attempts: int | None = None,
) -> str:
    """Read a password, asking again while an interactive user submits nothing.

    Readers that are not interactive (or cannot tell) are read exactly once,
    since re-reading redirected input would consume the next line.
    """
    interactive = isinstance(reader, SupportsInteractivity) and reader.is_interactive()
    attempts = 0
    while True:
        password = _read_once(reader, prompt, masked)
        if password or not interactive:
            return password
        attempts += 1
        logger.debug("Empty password submitted (attempt %d)", attempts)
        if max_attempts is not None and attempts >= max_attempts:
            raise PasswordReadError(f"No password entered after {attempts} attempts")
        if on_empty is not None:
            on_empty()


__all__ = ["read_nonempty_password"]
