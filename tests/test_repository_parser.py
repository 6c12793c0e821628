"""Tests for remote, tag and shortlog parsing."""

from vcscore.models.remote import GitUpstream, RemoteProtocol
from vcscore.parsing.repository_parser import (
    parse_remote_urls,
    parse_shortlog_authors,
    parse_tags_by_commit,
)


def test_parse_remote_urls_fetch_and_push():
    """Test fetch/push line pairs."""
    remotes = parse_remote_urls(
        [
            "origin\thttps://github.com/user/repo.git (fetch)",
            "origin\tgit@github.com:user/repo.git (push)",
            "mirror\t/srv/git/repo.git (fetch)",
            "mirror\t/srv/git/repo.git (push)",
        ]
    )

    assert len(remotes) == 2
    origin = remotes[0]
    assert origin.name == "origin"
    assert origin.fetch_url == "https://github.com/user/repo.git"
    assert origin.push_url == "git@github.com:user/repo.git"
    assert origin.protocol == RemoteProtocol.HTTPS
    assert remotes[1].protocol == RemoteProtocol.FILE


def test_parse_remote_urls_missing_push_line():
    """Test a remote without a push line pushes to its fetch URL."""
    remotes = parse_remote_urls(["upstream\tssh://git@host/repo.git (fetch)"])

    assert remotes[0].push_url == "ssh://git@host/repo.git"
    assert remotes[0].protocol == RemoteProtocol.SSH


def test_parse_remote_urls_skips_garbage():
    """Test lines without a URL are ignored."""
    assert parse_remote_urls(["lonely", ""]) == []
    assert parse_remote_urls(None) == []


def test_remote_protocol_from_url():
    """Test URL scheme classification."""
    assert RemoteProtocol.from_url("git://host/repo.git") == RemoteProtocol.GIT
    assert RemoteProtocol.from_url("file:///srv/repo") == RemoteProtocol.FILE
    assert RemoteProtocol.from_url("repo") == RemoteProtocol.UNKNOWN


def test_upstream_from_ref():
    """Test splitting an upstream ref."""
    assert GitUpstream.from_ref("origin/feature/x") == GitUpstream(
        remote="origin", branch="feature/x"
    )
    assert GitUpstream.from_ref("main") == GitUpstream(remote="origin", branch="main")


def test_parse_tags_by_commit_peeled_entries():
    """Test annotated tags resolve to the commit they point at."""
    tags = parse_tags_by_commit(
        [
            "1111111111111111111111111111111111111111 refs/tags/v1.0",
            "2222222222222222222222222222222222222222 refs/tags/v2.0",
            "3333333333333333333333333333333333333333 refs/tags/v2.0^{}",
            "3333333333333333333333333333333333333333 refs/tags/latest",
        ]
    )

    assert tags == {
        "1111111111111111111111111111111111111111": ["v1.0"],
        "3333333333333333333333333333333333333333": ["v2.0", "latest"],
    }


def test_parse_tags_by_commit_ignores_other_refs():
    """Test non-tag lines are skipped."""
    assert parse_tags_by_commit(["abc refs/heads/main", "", "nonsense"]) == {}


def test_parse_shortlog_authors_with_email():
    """Test shortlog lines with emails."""
    authors = parse_shortlog_authors(
        ["    12\tJane Doe <jane@example.com>", "     3\tJohn Roe <john@example.com>"],
        include_email=True,
    )

    assert [(a.commit_count, a.name, a.email) for a in authors] == [
        (12, "Jane Doe", "jane@example.com"),
        (3, "John Roe", "john@example.com"),
    ]


def test_parse_shortlog_authors_without_email():
    """Test shortlog lines without emails."""
    authors = parse_shortlog_authors(["     5\tJane Doe", "", "not a count"], include_email=False)

    assert len(authors) == 1
    assert authors[0].name == "Jane Doe"
    assert authors[0].email is None
