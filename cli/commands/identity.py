"""Show who commits and how commits are signed."""

from datetime import datetime, timezone

from cli.context import get_context
from cli.display.table_renderer import TableRenderer
from cli.utils import exit_on_vcs_error
from vcscore.exceptions import GitRepositoryNotFoundError


def identity() -> None:
    """Show user name, email, signing configuration and git version."""
    ctx = get_context()
    with exit_on_vcs_error():
        git_identity = ctx.client.get_identity()

        created_at = None
        try:
            timestamp = ctx.client.get_repository_creation_date(ctx.repository_root)
        except GitRepositoryNotFoundError:
            timestamp = 0
        if timestamp > 0:
            created_at = datetime.fromtimestamp(timestamp, tz=timezone.utc)

    TableRenderer().render_identity(git_identity, created_at)
