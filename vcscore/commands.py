"""Factory functions for the git invocations the engine issues.

Every function returns an immutable GitCommand. Functions that take a
repository root run in it; identity lookups run in the current directory
so that they see global configuration.
"""

from pathlib import Path

from vcscore.constants import LOG_PRETTY_FORMAT
from vcscore.models.command import GitCommand
from vcscore.models.commit import CommitRequest
from vcscore.models.diff import DiffMode

QUICK_TIMEOUT = 5.0
STANDARD_TIMEOUT = 10.0
PUSH_TIMEOUT = 15.0
NETWORK_TIMEOUT = 30.0
SHORTLOG_TIMEOUT = 60.0


def _in_repo(repo_root: Path, timeout: float = QUICK_TIMEOUT):
    return GitCommand.builder().working_directory(repo_root).timeout(timeout)


def status_porcelain_v1_z(repo_root: Path) -> GitCommand:
    return _in_repo(repo_root).add_args("status", "--porcelain=v1", "-b", "-z").build()


def rev_parse_is_inside_work_tree(path: Path) -> GitCommand:
    return _in_repo(path).add_args("rev-parse", "--is-inside-work-tree").build()


def rev_parse_show_toplevel(path: Path) -> GitCommand:
    return _in_repo(path).add_args("rev-parse", "--show-toplevel").build()


def stage_files(repo_root: Path, *paths: str) -> GitCommand:
    return _in_repo(repo_root).add_args("add", "--", *paths).build()


def unstage_files(repo_root: Path, *paths: str) -> GitCommand:
    return _in_repo(repo_root).add_args("restore", "--staged", "--", *paths).build()


def commit(repo_root: Path, request: CommitRequest) -> GitCommand:
    """
    Build ``git commit`` for a commit request.

    The description, when not blank, becomes a second paragraph. Selected
    changes restrict the commit to their paths.

    Args:
        repo_root: Repository root
        request: Message, flags and selected changes

    Returns:
        GitCommand
    """
    builder = _in_repo(repo_root, STANDARD_TIMEOUT).add_args("commit", "-m", request.message)

    if request.description and request.description.strip():
        builder.add_args("-m", request.description)
    if request.amend:
        builder.add_args("--amend")
    if request.sign_off:
        builder.add_args("--signoff")

    paths = [str(change.path) for change in request.selected_changes if change.path is not None]
    if paths:
        builder.add_args("--", *paths)

    return builder.build()


def push(repo_root: Path) -> GitCommand:
    return _in_repo(repo_root, PUSH_TIMEOUT).add_args("push", "--progress").build()


def fetch(repo_root: Path) -> GitCommand:
    return _in_repo(repo_root, NETWORK_TIMEOUT).add_args("fetch", "--prune", "--progress").build()


def pull(repo_root: Path) -> GitCommand:
    return _in_repo(repo_root, NETWORK_TIMEOUT).add_args("pull", "--ff-only", "--progress").build()


def remote_get_urls(repo_root: Path) -> GitCommand:
    return _in_repo(repo_root).add_args("remote", "-v").build()


def get_upstream(repo_root: Path) -> GitCommand:
    return (
        _in_repo(repo_root)
        .add_args("rev-parse", "--abbrev-ref", "--symbolic-full-name", "@{u}")
        .build()
    )


def get_config_value(key: str) -> GitCommand:
    """``git config --get <key>`` outside any repository."""
    return GitCommand.builder().timeout(QUICK_TIMEOUT).add_args("config", "--get", key).build()


def get_user_name() -> GitCommand:
    return get_config_value("user.name")


def get_user_email() -> GitCommand:
    return get_config_value("user.email")


def get_commit_gpg_sign() -> GitCommand:
    return get_config_value("commit.gpgsign")


def get_gpg_format() -> GitCommand:
    return get_config_value("gpg.format")


def get_user_signing_key() -> GitCommand:
    return get_config_value("user.signingkey")


def get_gpg_program() -> GitCommand:
    return get_config_value("gpg.program")


def get_git_version() -> GitCommand:
    return GitCommand.builder().timeout(QUICK_TIMEOUT).add_args("--version").build()


def get_recent_commits(repo_root: Path, cursor: str | None, limit: int) -> GitCommand:
    """
    Build the paged first-parent log query.

    Args:
        repo_root: Repository root
        cursor: Hash of the last commit of the previous page, or None for the first page
        limit: Maximum number of commits

    Returns:
        GitCommand whose stdout is RS-separated records of NUL-separated fields
    """
    builder = _in_repo(repo_root, STANDARD_TIMEOUT).add_args(
        "--no-pager",
        "log",
        "--first-parent",
        "-n",
        str(limit),
        "--date=unix",
        f"--pretty=format:{LOG_PRETTY_FORMAT}",
    )

    if cursor and cursor.strip():
        builder.add_args("--skip=1", cursor.strip())

    return builder.build()


def get_unstaged_diff(repo_root: Path, file_path: Path, context_lines: int = 3) -> GitCommand:
    return (
        _in_repo(repo_root, STANDARD_TIMEOUT)
        .add_args(
            "--no-pager",
            "diff",
            "--no-color",
            f"--unified={context_lines}",
            "--",
            str(file_path),
        )
        .build()
    )


def get_diff(repo_root: Path, path: Path | str, mode: DiffMode = DiffMode.WORKTREE) -> GitCommand:
    """Diff one path: worktree vs index, index vs HEAD (STAGED), or worktree vs HEAD (HEAD)."""
    builder = _in_repo(repo_root, STANDARD_TIMEOUT).add_args("--no-pager", "diff", "--no-color")

    if mode == DiffMode.STAGED:
        builder.add_args("--cached")
    elif mode == DiffMode.HEAD:
        builder.add_args("HEAD")

    return builder.add_args("--", str(path)).build()


def get_head_commit_hash(repo_root: Path) -> GitCommand:
    return _in_repo(repo_root).add_args("rev-parse", "HEAD").build()


def get_tags_pointing_to_commit(repo_root: Path, commit_hash: str) -> GitCommand:
    return _in_repo(repo_root).add_args("tag", "--points-at", commit_hash).build()


def get_all_tags_with_commits(repo_root: Path) -> GitCommand:
    return _in_repo(repo_root).add_args("show-ref", "--tags", "-d").build()


def get_all_branches(repo_root: Path) -> GitCommand:
    return (
        _in_repo(repo_root)
        .add_args("branch", "--all", "--no-color", "--format=%(refname:short)")
        .build()
    )


def get_all_authors(repo_root: Path, include_email: bool = False) -> GitCommand:
    builder = _in_repo(repo_root, SHORTLOG_TIMEOUT).add_args(
        "--no-pager", "shortlog", "--summary", "--numbered"
    )
    if include_email:
        builder.add_args("--email")
    return builder.add_args("HEAD").build()


def get_repository_creation_date(repo_root: Path) -> GitCommand:
    return (
        _in_repo(repo_root, STANDARD_TIMEOUT)
        .add_args("--no-pager", "log", "--reverse", "--pretty=format:%at", "--max-parents=0")
        .build()
    )


def get_additions_deletions(repo_root: Path, commit_hash: str) -> GitCommand:
    return (
        _in_repo(repo_root, STANDARD_TIMEOUT)
        .add_args("--no-pager", "show", "--pretty=format:", "--numstat", commit_hash)
        .build()
    )


def get_commit_message(repo_root: Path, commit_hash: str) -> GitCommand:
    return (
        _in_repo(repo_root)
        .add_args("--no-pager", "log", "-n", "1", "--format=%B", commit_hash)
        .build()
    )
