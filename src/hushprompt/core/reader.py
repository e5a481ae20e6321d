"""Capabilities that password-consuming code depends on."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class PasswordReader(Protocol):
    """Interface for anything that can read a password from the user."""

    def read_password(self) -> str:
        """Read one line of hidden input without a prompt."""
        ...

    def read_password_with_prompt(self, prompt: str) -> str:
        """Write ``prompt`` and read one line of hidden input."""
        ...

    def read_password_masked(self) -> str:
        """Read one line, echoing the configured symbol per character."""
        ...

    def read_password_masked_with_prompt(self, prompt: str) -> str:
        """Write ``prompt`` and read one line with masked echo."""
        ...


@runtime_checkable
class SupportsInteractivity(Protocol):
    """Interface for readers that know whether a person is at the keyboard.

    A reader is not interactive when its input is redirected, e.g. another
    process pipes its output into this one.
    """

    def is_interactive(self) -> bool:
        ...


@runtime_checkable
class InteractivePasswordReader(PasswordReader, SupportsInteractivity, Protocol):
    """A password reader that also reports interactivity."""


__all__ = ["InteractivePasswordReader", "PasswordReader", "SupportsInteractivity"]
