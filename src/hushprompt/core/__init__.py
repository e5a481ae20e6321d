"""Core password reading services for hushprompt."""

from .config import CONFIG_FILENAME, ConfigurationError, ReaderSettings, default_config_dir, load_settings
from .errors import PasswordReadCancelled, PasswordReadError, PasswordReaderError
from .reader import InteractivePasswordReader, PasswordReader, SupportsInteractivity
from .retry import read_nonempty_password
from .stub import StubInteractivePasswordReader, StubPasswordReader
from .terminal import TerminalPasswordReader

__all__ = [
    "CONFIG_FILENAME",
    "ConfigurationError",
    "InteractivePasswordReader",
    "PasswordReadCancelled",
    "PasswordReadError",
    "PasswordReader",
    "PasswordReaderError",
    "ReaderSettings",
    "StubInteractivePasswordReader",
    "StubPasswordReader",
    "SupportsInteractivity",
    "TerminalPasswordReader",
    "default_config_dir",
    "load_settings",
    "read_nonempty_password",
]
