"""Parse ``--numstat`` summary lines."""

import logging

from vcscore.exceptions import GitParseError
from vcscore.models.diff import AdditionsDeletions

logger = logging.getLogger(__name__)


def _parse_count(value: str, line: str) -> int:
    try:
        return int(value)
    except ValueError as e:
        raise GitParseError(f"Invalid count {value!r} in numstat line: {line!r}") from e


def parse_additions_deletions(line: str | None) -> AdditionsDeletions:
    """
    Parse one ``<additions> <deletions> <path>`` line.

    The path is everything from the third token on, so it may contain spaces.

    Args:
        line: A numstat line (tab or space separated)

    Returns:
        AdditionsDeletions

    Raises:
        GitParseError: If the line is empty, has fewer than three tokens, or
            either count is not an integer (binary entries use ``-``)
    """
    if not line or not line.strip():
        raise GitParseError("Numstat line cannot be empty")

    parts = line.split(None, 2)
    if len(parts) < 3:
        raise GitParseError(f"Invalid numstat line: {line!r}")

    additions = _parse_count(parts[0], line)
    deletions = _parse_count(parts[1], line)
    return AdditionsDeletions(path=parts[2].strip(), additions=additions, deletions=deletions)


def parse_additions_deletions_lines(lines: list[str] | None) -> list[AdditionsDeletions]:
    """Parse many numstat lines, logging and skipping the ones that fail."""
    results = []
    for line in lines or []:
        if not line.strip():
            continue
        try:
            results.append(parse_additions_deletions(line))
        except GitParseError as e:
            logger.warning(f"Skipping numstat line: {e}")
    return results
