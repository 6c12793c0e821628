"""Table renderer for status, history and numstat output."""

from datetime import datetime
from pathlib import Path

from rich.markup import escape
from rich.table import Table

from cli.display.console import console
from cli.display.formatters import (
    describe_change,
    format_datetime,
    format_path,
    format_relative_time,
    format_status_code,
)
from vcscore.models.commit import CommitPage
from vcscore.models.diff import AdditionsDeletions
from vcscore.models.identity import GitIdentity
from vcscore.models.status import RepoStatus


class TableRenderer:
    """Render tables for repository state.

    Uses Rich's Table class for consistent, well-formatted output.
    """

    def _table(self) -> Table:
        return Table(show_header=True, header_style="bold", box=None, padding=(0, 2))

    def render_status(self, status: RepoStatus, root: Path) -> None:
        """Render the branch line and the list of changes.

        Args:
            status: Parsed repository status.
            root: Repository root, used to shorten paths.
        """
        branch_line = f"On branch [branch]{escape(status.branch)}[/branch]"
        tracking = []
        if status.ahead:
            tracking.append(f"ahead {status.ahead}")
        if status.behind:
            tracking.append(f"behind {status.behind}")
        if tracking:
            branch_line += f" ({', '.join(tracking)})"
        console.print(branch_line)

        if not status.changes:
            console.print("Nothing to commit, working tree clean")
            return

        console.print()
        table = self._table()
        table.add_column("STATUS", style="status.code")
        table.add_column("CHANGE")
        table.add_column("PATH", style="path")

        for change in status.changes:
            path = escape(format_path(change.path, root))
            if change.orig_path is not None:
                path = f"{escape(format_path(change.orig_path, root))} -> {path}"
            table.add_row(format_status_code(change), describe_change(change), path)

        console.print(table)
        console.print(
            f"\n{len(status.staged)} staged, {len(status.unstaged)} unstaged, "
            f"{len(status.untracked)} untracked"
        )

    def render_commits(self, page: CommitPage) -> None:
        """Render one page of commits, then how to fetch the next page."""
        if not page.commits:
            console.print("No commits found")
            return

        table = self._table()
        table.add_column("HASH", style="hash")
        table.add_column("DATE", style="dim")
        table.add_column("AUTHOR")
        table.add_column("SUBJECT")

        for commit in page.commits:
            subject = escape(commit.subject)
            if commit.is_merge:
                subject += " [dim](merge)[/dim]"
            table.add_row(
                commit.short_hash,
                format_relative_time(commit.authored_at),
                escape(commit.author_name),
                subject,
            )

        console.print(table)
        if page.next_cursor:
            console.print(f"\n[dim]More commits: --cursor {page.next_cursor}[/dim]")

    def render_additions_deletions(self, stats: list[AdditionsDeletions]) -> None:
        if not stats:
            console.print("No text changes")
            return

        table = self._table()
        table.add_column("ADDED", style="green", justify="right")
        table.add_column("REMOVED", style="red", justify="right")
        table.add_column("PATH", style="path")

        for entry in stats:
            table.add_row(f"+{entry.additions}", f"-{entry.deletions}", escape(entry.path))

        console.print(table)
        total_add = sum(entry.additions for entry in stats)
        total_del = sum(entry.deletions for entry in stats)
        console.print(f"\n{len(stats)} files changed, +{total_add} -{total_del}")

    def render_identity(self, identity: GitIdentity, created_at: datetime | None = None) -> None:
        """Render user identity, signing setup and git version.

        Args:
            identity: Identity to show.
            created_at: Date of the repository's first commit, if known.
        """
        table = Table(show_header=False, box=None, padding=(0, 2))
        table.add_column("KEY", style="bold")
        table.add_column("VALUE")

        table.add_row("Name", escape(identity.user_name or "Not Set"))
        table.add_row("Email", escape(identity.email or "Not Set"))
        table.add_row("Signing", escape(str(identity.signing)))
        table.add_row("Git", escape(identity.git_version or "Unknown"))
        if created_at is not None:
            table.add_row("Repository created", format_datetime(created_at))
        console.print(table)

