"""Show changes to a file."""

import logging
from pathlib import Path

import typer
from typing_extensions import Annotated

from cli.context import get_context
from cli.display.diff_renderer import DiffRenderer
from cli.utils import exit_on_vcs_error
from vcscore.models.diff import DiffMode

logger = logging.getLogger(__name__)


def diff(
    path: Annotated[
        Path,
        typer.Argument(help="File to diff"),
    ],
    staged: Annotated[
        bool,
        typer.Option("--staged", help="Compare the index with HEAD"),
    ] = False,
    head: Annotated[
        bool,
        typer.Option("--head", help="Compare the working tree with HEAD"),
    ] = False,
    no_line_numbers: Annotated[
        bool,
        typer.Option("--no-line-numbers", help="Hide old/new line numbers"),
    ] = False,
) -> None:
    """Show the unified diff of one file.

    By default, compares the working tree with the index.
    """
    if staged and head:
        logger.error("--staged and --head cannot be combined")
        raise typer.Exit(1)

    mode = DiffMode.STAGED if staged else DiffMode.HEAD if head else DiffMode.WORKTREE

    ctx = get_context()
    with exit_on_vcs_error():
        root = ctx.repository_root
        relative = ctx.relative_to_repository(path)
        blob = ctx.client.get_parsed_diff(root, relative.as_posix(), mode)

    DiffRenderer().render_blob(blob, show_line_numbers=not no_line_numbers)
