"""Typer application and command routing."""

from pathlib import Path

import typer
from typing_extensions import Annotated

from cli import setup_logging
from cli.commands import diff, identity, log, numstat, status
from cli.context import CLIContext, set_context

app = typer.Typer(
    name="railroad-vcs",
    help="Inspect a git repository: status, history, diffs and identity.",
    no_args_is_help=True,
    add_completion=False,
)


@app.callback()
def callback(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show informational log messages"),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Only show errors"),
    ] = False,
    repo: Annotated[
        Path | None,
        typer.Option("--repo", "-C", help="Run as if started in this directory"),
    ] = None,
) -> None:
    """Set up logging and the shared context before any command runs."""
    ctx = CLIContext(verbose=verbose, quiet=quiet, repo_path=repo)
    set_context(ctx)
    setup_logging(verbose, quiet, ctx.config)


app.command()(status)
app.command()(log)
app.command()(diff)
app.command()(numstat)
app.command()(identity)
