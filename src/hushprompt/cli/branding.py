"""Console styling for hushprompt CLI messages."""

from __future__ import annotations

from rich.console import Console
from rich.theme import Theme

HUSHPROMPT_THEME = Theme(
    {
        "hushprompt.warning": "bold #FBBF24",
        "hushprompt.error": "bold #FB7185",
    }
)


def themed_console(**kwargs: object) -> Console:
    """Return a Console configured with the hushprompt theme."""
    return Console(theme=HUSHPROMPT_THEME, **kwargs)


__all__ = ["HUSHPROMPT_THEME", "themed_console"]
