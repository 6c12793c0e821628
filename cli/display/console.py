"""Shared Rich console and the named styles used by the renderers."""

from rich.console import Console
from rich.theme import Theme

VCS_THEME = Theme(
    {
        "branch": "cyan",
        "hash": "yellow",
        "path": "cyan",
        "status.code": "yellow",
        "diff.addition": "green",
        "diff.deletion": "red",
        "diff.hunk": "cyan",
        "diff.gutter": "dim",
    }
)

console = Console(theme=VCS_THEME, highlight=False)
