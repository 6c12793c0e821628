"""Show per-file line counts of a commit."""

import typer
from typing_extensions import Annotated

from cli.context import get_context
from cli.display.table_renderer import TableRenderer
from cli.utils import exit_on_vcs_error


def numstat(
    commit: Annotated[
        str,
        typer.Argument(help="Commit hash or any revision git understands"),
    ] = "HEAD",
) -> None:
    """Show lines added and removed per file in a commit."""
    ctx = get_context()
    with exit_on_vcs_error():
        stats = ctx.client.get_additions_deletions(ctx.repository_root, commit)
    TableRenderer().render_additions_deletions(stats)
