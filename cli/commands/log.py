"""Show commit history."""

import typer
from typing_extensions import Annotated

from cli.context import get_context
from cli.display.table_renderer import TableRenderer
from cli.utils import exit_on_vcs_error


def log(
    limit: Annotated[
        int | None,
        typer.Option("--limit", "-n", min=1, help="Commits per page (default: VCS_LOG_PAGE_SIZE)"),
    ] = None,
    cursor: Annotated[
        str | None,
        typer.Option("--cursor", help="Continue after this commit (printed by the previous page)"),
    ] = None,
) -> None:
    """Show first-parent history, one page at a time.

    Examples:
      log                 # Newest commits
      log -n 10           # Newest 10 commits
      log --cursor abc123 # The page after commit abc123
    """
    ctx = get_context()
    page_size = limit or ctx.config.log_page_size
    with exit_on_vcs_error():
        page = ctx.client.get_recent_commits(ctx.repository_root, cursor, page_size)
    TableRenderer().render_commits(page)
