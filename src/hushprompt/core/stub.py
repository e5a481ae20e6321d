from __future__ import annotations

from collections.abc import Iterable

from .errors import PasswordReadError


class StubPasswordReader:
    """Stand-in reader that replays canned passwords without touching a terminal.

    Entries may be strings or exception instances; an exception is raised
    instead of returned when its turn comes.
    """

    def __init__(self, passwords: Iterable[str | BaseException] | str = ()) -> None:
        if isinstance(passwords, str):
            passwords = [passwords]
        self._queue: list[str | BaseException] = list(passwords)
        self.calls: list[str] = []
        self.prompts: list[str] = []

    def queue(self, *values: str | BaseException) -> None:
        self._queue.extend(values)

    @property
    def remaining(self) -> int:
        return len(self._queue)

    def read_password(self) -> str:
        return self._next("read_password")

    def read_password_with_prompt(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self._next("read_password_with_prompt")

    def read_password_masked(self) -> str:
        return self._next("read_password_masked")

    def read_password_masked_with_prompt(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self._next("read_password_masked_with_prompt")

    def _next(self, operation: str) -> str:
        self.calls.append(operation)
        if not self._queue:
            raise PasswordReadError("No canned passwords remaining")
        value = self._queue.pop(0)
        if isinstance(value, BaseException):
            raise value
        return value


class StubInteractivePasswordReader(StubPasswordReader):
    """Stub reader that also answers ``is_interactive`` with a fixed value."""

    def __init__(self, passwords: Iterable[str | BaseException] | str = (), *, interactive: bool = True) -> None:
        super().__init__(passwords)
        self.interactive = interactive

    def is_interactive(self) -> bool:
        return self.interactive


__all__ = ["StubInteractivePasswordReader", "StubPasswordReader"]
