"""Parsers for git output formats."""

from vcscore.parsing.commit_parser import extract_body, parse_commits
from vcscore.parsing.diff_parser import DiffParser, parse_diff
from vcscore.parsing.numstat_parser import (
    parse_additions_deletions,
    parse_additions_deletions_lines,
)
from vcscore.parsing.progress_parser import parse_progress
from vcscore.parsing.repository_parser import (
    parse_remote_urls,
    parse_shortlog_authors,
    parse_tags_by_commit,
)
from vcscore.parsing.status_parser import (
    parse_branch_header,
    parse_porcelain_record,
    parse_porcelain_v1_z,
)

__all__ = [
    "DiffParser",
    "extract_body",
    "parse_additions_deletions",
    "parse_additions_deletions_lines",
    "parse_branch_header",
    "parse_commits",
    "parse_diff",
    "parse_porcelain_record",
    "parse_porcelain_v1_z",
    "parse_progress",
    "parse_remote_urls",
    "parse_shortlog_authors",
    "parse_tags_by_commit",
]
