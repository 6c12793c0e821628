"""Show working tree status."""

from cli.context import get_context
from cli.display.table_renderer import TableRenderer
from cli.utils import exit_on_vcs_error


def status() -> None:
    """Show the current branch and changed files."""
    ctx = get_context()
    with exit_on_vcs_error():
        root = ctx.repository_root
        repo_status = ctx.client.get_status(root)
    TableRenderer().render_status(repo_status, root)
