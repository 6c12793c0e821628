"""CLI commands package."""

from cli.commands.diff import diff
from cli.commands.identity import identity
from cli.commands.log import log
from cli.commands.numstat import numstat
from cli.commands.status import status

__all__ = [
    "diff",
    "identity",
    "log",
    "numstat",
    "status",
]
