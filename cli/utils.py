"""CLI helpers shared by commands."""

import logging
from contextlib import contextmanager
from typing import Iterator

import typer

from vcscore.exceptions import VcsError

logger = logging.getLogger(__name__)


@contextmanager
def exit_on_vcs_error() -> Iterator[None]:
    """Report engine errors and exit with status 1."""
    try:
        yield
    except VcsError as e:
        logger.error(str(e))
        raise typer.Exit(1)
