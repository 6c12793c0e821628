"""Parsers for remotes, tags and shortlog authors."""

import logging
import re

from vcscore.models.commit import GitAuthor
from vcscore.models.remote import GitRemote, RemoteProtocol

logger = logging.getLogger(__name__)

# "   12\tJane Doe <jane@example.com>"
_AUTHOR_LINE = re.compile(
    r"^\s*(?P<count>\d+)\s+(?P<name>.*?)(?:\s+<(?P<email>[^>]*)>)?\s*$"
)


def _parse_remote(line: str, push_line: str | None) -> GitRemote | None:
    parts = line.split()
    if len(parts) < 2:
        return None

    name, fetch_url = parts[0], parts[1]
    push_url = fetch_url
    if push_line is not None:
        push_parts = push_line.split()
        if len(push_parts) >= 2:
            push_url = push_parts[1]

    return GitRemote(
        name=name,
        fetch_url=fetch_url,
        push_url=push_url,
        protocol=RemoteProtocol.from_url(fetch_url),
    )


def parse_remote_urls(lines: list[str] | None) -> list[GitRemote]:
    """
    Parse ``git remote -v`` output.

    Each remote normally contributes a ``(fetch)`` line followed by a
    ``(push)`` line; a missing push line means push uses the fetch URL.

    Args:
        lines: Output lines

    Returns:
        List of GitRemote
    """
    remaining = list(lines or [])
    remotes = []
    index = 0
    while index < len(remaining):
        line = remaining[index]
        index += 1

        push_line = None
        if index < len(remaining) and remaining[index].endswith("(push)"):
            push_line = remaining[index]
            index += 1

        remote = _parse_remote(line, push_line)
        if remote is not None:
            remotes.append(remote)
    return remotes


def parse_tags_by_commit(lines: list[str]) -> dict[str, list[str]]:
    """
    Group tags by the commit they point at.

    Input is ``git show-ref --tags -d`` output; peeled ``^{}`` entries give
    the commit of an annotated tag and override the tag object hash.

    Args:
        lines: Output lines, each ``<hash> refs/tags/<name>[^{}]``

    Returns:
        Mapping of commit hash to tag names, in first-seen order
    """
    tag_to_commit: dict[str, str] = {}
    for line in lines:
        parts = line.strip().split(maxsplit=1)
        if len(parts) != 2 or not parts[1].startswith("refs/tags/"):
            if line.strip():
                logger.warning(f"Unrecognized show-ref line: {line}")
            continue

        commit_hash, ref = parts
        name = ref[len("refs/tags/"):]
        if name.endswith("^{}"):
            tag_to_commit[name[:-3]] = commit_hash
        else:
            tag_to_commit.setdefault(name, commit_hash)

    tags_by_commit: dict[str, list[str]] = {}
    for tag, commit_hash in tag_to_commit.items():
        tags_by_commit.setdefault(commit_hash, []).append(tag)
    return tags_by_commit


def parse_shortlog_authors(lines: list[str], include_email: bool) -> list[GitAuthor]:
    """
    Parse ``git shortlog --summary --numbered [--email]`` output.

    Args:
        lines: Output lines
        include_email: Whether emails were requested (otherwise email is None)

    Returns:
        List of GitAuthor in output order
    """
    authors = []
    for line in lines:
        line = line.strip()
        if not line:
            continue

        match = _AUTHOR_LINE.match(line)
        if not match:
            logger.warning(f"Failed to parse git shortlog line: {line}")
            continue

        email = match.group("email") if include_email else None
        authors.append(
            GitAuthor(
                commit_count=int(match.group("count")),
                name=match.group("name"),
                email=email,
            )
        )
    return authors
