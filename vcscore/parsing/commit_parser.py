"""Parse RS/NUL-delimited ``git log`` output into commits."""

import logging

from vcscore.constants import (
    FIELD_SEPARATOR,
    MIN_COMMIT_FIELDS,
    RECORD_SEPARATOR,
    SHORT_HASH_LENGTH,
)
from vcscore.models.commit import CommitPage, GitCommit

logger = logging.getLogger(__name__)


def _parse_commit(fields: list[str]) -> GitCommit:
    """
    Build a commit from one record's fields.

    Field order: hash, short hash, subject, author name, author email,
    author epoch seconds, space-separated parents, then optionally
    committer name, committer email and committer epoch seconds.

    Raises:
        ValueError: If the hash is blank or the author timestamp is not an integer
    """
    commit_hash = fields[0].strip()
    if not commit_hash:
        raise ValueError("Commit hash cannot be blank")

    short_hash = fields[1].strip() or commit_hash[:SHORT_HASH_LENGTH]
    author_timestamp = int(fields[5].strip())
    parents = fields[6].split()

    committer_name = committer_email = None
    committer_timestamp = 0
    if len(fields) >= 10:
        committer_name = fields[7]
        committer_email = fields[8]
        try:
            committer_timestamp = int(fields[9].strip())
        except ValueError:
            logger.warning(f"Invalid committer timestamp for {commit_hash}: {fields[9]!r}")

    return GitCommit(
        hash=commit_hash,
        short_hash=short_hash,
        subject=fields[2],
        author_name=fields[3],
        author_email=fields[4],
        author_timestamp=author_timestamp,
        committer_name=committer_name,
        committer_email=committer_email,
        committer_timestamp=committer_timestamp,
        parent_hashes=parents,
    )


def parse_commits(content: str | None, limit: int) -> CommitPage:
    """
    Parse a page of log records.

    Malformed records are logged and skipped. A next-page cursor (the hash of
    the last commit) is only returned when exactly ``limit`` commits were
    parsed, i.e. when the page may have been cut short by the limit.

    Args:
        content: Whole-buffer stdout of the log command
        limit: Page size that was requested from git

    Returns:
        CommitPage
    """
    if content is None or not content.strip():
        return CommitPage(commits=[], next_cursor=None)

    commits = []
    for record in content.split(RECORD_SEPARATOR):
        # Records after the first start with the newline git puts between entries
        record = record.strip()
        if not record:
            continue

        fields = record.split(FIELD_SEPARATOR)
        if len(fields) < MIN_COMMIT_FIELDS:
            logger.warning(f"Malformed git commit entry: {record!r}")
            continue

        try:
            commits.append(_parse_commit(fields))
        except ValueError as e:
            logger.warning(f"Failed to parse git commit entry {record!r}: {e}")

    next_cursor = commits[-1].hash if commits and len(commits) == limit else None
    return CommitPage(commits=commits, next_cursor=next_cursor)


def extract_body(message: str) -> str:
    """Drop the subject line from a full commit message."""
    _, _, rest = message.partition("\n")
    return rest.strip()


