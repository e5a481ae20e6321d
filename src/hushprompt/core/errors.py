"""Password reader errors."""

from __future__ import annotations


class PasswordReaderError(RuntimeError):
    """Base class for failures raised while reading a password."""


class PasswordReadError(PasswordReaderError):
    """Raised when the input stream or terminal cannot be read or controlled."""


class PasswordReadCancelled(PasswordReaderError):
    """Raised when the user interrupts masked password entry."""


__all__ = ["PasswordReaderError", "PasswordReadError", "PasswordReadCancelled"]
