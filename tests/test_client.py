"""Tests for GitClient against a runner double."""

from pathlib import Path

import pytest

from vcscore.client import GitClient
from vcscore.exceptions import GitExecutionError
from vcscore.execution.listeners import OutputListener, ProgressListener
from vcscore.models.commit import CommitRequest
from vcscore.models.diff import DiffMode
from vcscore.models.identity import SigningFormat
from vcscore.models.result import CaptureMode

ROOT = Path("/work/repo")


def log_record(commit_hash, subject, parents=""):
    fields = [commit_hash, commit_hash[:7], subject, "Jane", "jane@example.com", "1700000000", parents]
    return "\x00".join(fields) + "\x1e"


@pytest.fixture
def client(fake_runner):
    return GitClient(fake_runner, diff_context_lines=5)


def test_detect_repository(client, fake_runner):
    """Test the top-level directory is returned for a work tree."""
    fake_runner.respond("rev-parse", "--is-inside-work-tree", stdout=["true"])
    fake_runner.respond("rev-parse", "--show-toplevel", stdout=["/work/repo/sub/.."])

    assert client.detect_repository(Path("/work/repo/sub")) == Path("/work/repo")


def test_detect_repository_outside_work_tree(client, fake_runner):
    """Test 'false' or a failing rev-parse means no repository."""
    assert client.detect_repository(ROOT) is None

    fake_runner.respond("rev-parse", "--is-inside-work-tree", stdout=["false"])
    assert client.detect_repository(ROOT) is None
    assert ("rev-parse", "--show-toplevel") not in fake_runner.commands()


def test_get_status(client, fake_runner):
    """Test status runs with NUL records and is parsed."""
    fake_runner.respond(
        "status",
        stdout=["## main...origin/main [ahead 2]", "M  a.txt", "?? b.txt"],
    )

    status = client.get_status(ROOT)

    assert fake_runner.calls[0][1] == CaptureMode.NULL_RECORDS
    assert status.branch == "main"
    assert status.ahead == 2
    assert [change.path for change in status.changes] == [ROOT / "a.txt", ROOT / "b.txt"]


def test_get_status_failure_raises(client, fake_runner):
    """Test a failing status is an error."""
    fake_runner.respond("status", exit_code=128, stderr=["fatal: not a git repository"])

    with pytest.raises(GitExecutionError, match="status failed: fatal: not a git repository"):
        client.get_status(ROOT)


@pytest.mark.parametrize(
    "flags, message",
    [({"timed_out": True, "exit_code": -3}, "timed out"), ({"cancelled": True, "exit_code": -2}, "cancelled")],
)
def test_required_operation_interrupted(client, fake_runner, flags, message):
    """Test timeouts and cancellations of required operations raise."""
    fake_runner.respond("remote", **flags)

    with pytest.raises(GitExecutionError, match=message):
        client.get_remotes(ROOT)


def test_stage_without_paths_does_nothing(client, fake_runner):
    """Test staging nothing runs no git."""
    client.stage(ROOT)
    client.unstage(ROOT)
    assert fake_runner.calls == []


def test_stage_and_unstage(client, fake_runner):
    """Test staging and unstaging pass the paths."""
    fake_runner.respond("add")
    fake_runner.respond("restore")

    client.stage(ROOT, "a.txt", "b.txt")
    client.unstage(ROOT, "a.txt")

    assert fake_runner.commands() == [
        ("add", "--", "a.txt", "b.txt"),
        ("restore", "--staged", "--", "a.txt"),
    ]


def test_commit_then_push(client, fake_runner):
    """Test push_after_commit pushes with a progress listener."""
    fake_runner.respond("commit")
    fake_runner.respond("push")

    client.commit_changes(ROOT, CommitRequest(message="Add feature"), push_after_commit=True)

    assert [args[0] for args in fake_runner.commands()] == ["commit", "push"]
    assert isinstance(fake_runner.listeners[1], ProgressListener)


def test_failed_commit_does_not_push(client, fake_runner):
    """Test a failing commit raises before pushing."""
    fake_runner.respond("commit", exit_code=1, stderr=["nothing to commit"])

    with pytest.raises(GitExecutionError):
        client.commit_changes(ROOT, CommitRequest(message="m"), push_after_commit=True)
    assert len(fake_runner.calls) == 1


def test_fetch_wraps_listener(client, fake_runner):
    """Test the caller's listener receives raw output through the progress listener."""
    fake_runner.respond("fetch")
    raw = OutputListener()
    events = []

    client.fetch(ROOT, listener=raw, progress_sink=events.append)

    listener = fake_runner.listeners[0]
    assert isinstance(listener, ProgressListener)
    assert listener.raw is raw
    assert listener.current_phase == "Fetch"

    listener.on_stderr("Receiving objects:  50% (5/10)")
    assert events[0].percent == 50


def test_pull_failure_raises(client, fake_runner):
    """Test a failing pull raises."""
    fake_runner.respond("pull", exit_code=1, stderr=["fatal: Not possible to fast-forward"])

    with pytest.raises(GitExecutionError, match="pull failed"):
        client.pull(ROOT)


def test_get_upstream(client, fake_runner):
    """Test upstream lookup and its absence."""
    assert client.get_upstream(ROOT) is None

    fake_runner.respond("rev-parse", "--abbrev-ref", stdout=["origin/main"])
    upstream = client.get_upstream(ROOT)
    assert (upstream.remote, upstream.branch) == ("origin", "main")


def test_get_identity(client, fake_runner):
    """Test identity assembled from config lookups."""
    fake_runner.respond("config", "--get", "user.name", stdout=["Jane Doe"])
    fake_runner.respond("config", "--get", "user.email", stdout=["jane@example.com"])
    fake_runner.respond("config", "--get", "commit.gpgsign", stdout=["true"])
    fake_runner.respond("config", "--get", "gpg.format", stdout=["ssh"])
    fake_runner.respond("--version", stdout=["git version 2.43.0"])

    identity = client.get_identity()

    assert identity.user_name == "Jane Doe"
    assert identity.email == "jane@example.com"
    assert identity.signing.enabled
    assert identity.signing.format == SigningFormat.SSH
    assert identity.signing.signing_key is None
    assert identity.git_version == "git version 2.43.0"


def test_get_identity_unset_values(client):
    """Test missing config values become None."""
    identity = client.get_identity()

    assert identity.user_name is None
    assert identity.email is None
    assert not identity.signing.enabled
    assert str(identity.signing) == "Disabled"


def test_get_recent_commits(client, fake_runner):
    """Test a full page carries a cursor."""
    content = log_record("a" * 40, "Second", "b" * 40) + "\n" + log_record("b" * 40, "First")
    fake_runner.respond("log", "--first-parent", stdout=[content])

    page = client.get_recent_commits(ROOT, limit=2)

    assert fake_runner.calls[0][1] == CaptureMode.TEXT_WHOLE
    assert [commit.subject for commit in page.commits] == ["Second", "First"]
    assert page.commits[0].parent_hashes == ["b" * 40]
    assert page.next_cursor == "b" * 40


def test_get_recent_commits_last_page(client, fake_runner):
    """Test a short page ends the history."""
    fake_runner.respond("log", "--first-parent", stdout=[log_record("a" * 40, "Only")])

    page = client.get_recent_commits(ROOT, cursor="c" * 40, limit=50)

    assert len(page.commits) == 1
    assert page.next_cursor is None
    assert fake_runner.commands()[0][-2:] == ("--skip=1", "c" * 40)


def test_get_recent_commits_failure_raises(client, fake_runner):
    """Test log failures raise (e.g. an empty repository)."""
    fake_runner.respond("log", exit_code=128, stderr=["fatal: your current branch does not have any commits"])

    with pytest.raises(GitExecutionError, match="log failed"):
        client.get_recent_commits(ROOT)


def test_optional_lookups_return_empty(client):
    """Test failing lookups give empty values."""
    assert client.get_commit_message(ROOT, "abc") is None
    assert client.get_head_commit_hash(ROOT) is None
    assert client.get_tags_pointing_to_commit(ROOT, "abc") == []
    assert client.get_tags_by_commit(ROOT) == {}
    assert client.get_all_branches(ROOT) == []
    assert client.get_all_authors(ROOT) == []
    assert client.get_repository_creation_date(ROOT) == 0
    assert client.get_additions_deletions(ROOT, "abc") == []
    assert client.get_diff(ROOT, "a.txt") is None
    assert client.get_parsed_diff(ROOT, "a.txt").is_empty


def test_optional_lookup_timeout_returns_none(client, fake_runner):
    """Test a timed out lookup is not an error."""
    fake_runner.respond("rev-parse", "HEAD", timed_out=True, exit_code=-3)
    assert client.get_head_commit_hash(ROOT) is None


def test_get_commit_message(client, fake_runner):
    """Test the full message is returned."""
    fake_runner.respond("log", "-n", "1", "--format=%B", stdout=["Subject\n\nBody line"])
    assert client.get_commit_message(ROOT, "abc") == "Subject\n\nBody line"


def test_get_repository_creation_date(client, fake_runner):
    """Test the oldest root commit is used."""
    fake_runner.respond("log", "--reverse", stdout=["1600000000\n1700000000\n"])
    assert client.get_repository_creation_date(ROOT) == 1600000000

    fake_runner.respond("log", "--reverse", stdout=["garbage"])
    assert client.get_repository_creation_date(ROOT) == 0


def test_tags_branches_and_authors(client, fake_runner):
    """Test list lookups are parsed."""
    fake_runner.respond("tag", "--points-at", stdout=["v1.0", "", "latest"])
    fake_runner.respond("show-ref", stdout=["abc refs/tags/v1.0"])
    fake_runner.respond("branch", stdout=["main", "origin/main"])
    fake_runner.respond("shortlog", stdout=["     4\tJane Doe <jane@example.com>"])

    assert client.get_tags_pointing_to_commit(ROOT, "abc") == ["v1.0", "latest"]
    assert client.get_tags_by_commit(ROOT) == {"abc": ["v1.0"]}
    assert client.get_all_branches(ROOT) == ["main", "origin/main"]
    assert client.get_all_authors(ROOT, include_email=True)[0].email == "jane@example.com"


def test_get_additions_deletions(client, fake_runner):
    """Test numstat output is parsed and binary entries skipped."""
    fake_runner.respond("show", stdout=["3\t1\tsrc/a.py", "-\t-\tlogo.png", ""])

    stats = client.get_additions_deletions(ROOT, "abc")

    assert [(s.path, s.additions, s.deletions) for s in stats] == [("src/a.py", 3, 1)]


def test_diffs(client, fake_runner):
    """Test diff modes and context lines reach git, and output is parsed."""
    diff = (
        "diff --git a/a.txt b/a.txt\n"
        "index 1111111..2222222 100644\n"
        "--- a/a.txt\n"
        "+++ b/a.txt\n"
        "@@ -1 +1 @@\n"
        "-old\n"
        "+new"
    )
    fake_runner.respond("diff", stdout=[diff])

    blob = client.get_parsed_diff(ROOT, "a.txt", DiffMode.STAGED)
    client.get_parsed_unstaged_diff(ROOT, Path("a.txt"))

    assert blob.files[0].new_path == Path("a.txt")
    assert "--cached" in fake_runner.commands()[0]
    assert "--unified=5" in fake_runner.commands()[1]
