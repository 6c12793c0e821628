"""Parse progress lines written by fetch, pull and push."""

import re

from vcscore.models.progress import (
    ProgressEvent,
    ProgressMessage,
    ProgressPercentage,
    ProgressPhase,
)

# "Receiving objects:  42% (1234/5678), 1.23 MiB | 4.56 MiB/s"
_PERCENT_LINE = re.compile(r"^(?P<phase>[A-Za-z ][A-Za-z ]+?):\s*(?P<pct>\d{1,3})%.*$")

# "Enumerating objects: 123, done."
_PHASE_PREFIX = re.compile(r"^(?P<phase>[A-Za-z ][A-Za-z ]+?):\s*.*$")

# "remote: Total 123 (delta 45), reused 0 (delta 0), pack-reused 0"
_REMOTE_PREFIX = re.compile(r"^remote:\s*(?P<msg>.*)$")

_MESSAGE_PREFIXES = ("From ", "* ", " + ", " = ")


def _normalize_phase(phase: str | None) -> str:
    if phase is None or not phase.strip():
        return "(unknown)"
    return re.sub(r"\s+", " ", phase.strip())


def parse_progress(line: str | None, current_phase: str | None = None) -> ProgressEvent | None:
    """
    Classify one line of git progress output.

    Args:
        line: Raw output line
        current_phase: Phase in effect before this line (kept for callers
            that track phases; classification does not depend on it)

    Returns:
        A progress event, or None for blank input
    """
    if line is None:
        return None

    # Leading-space prefixes (" + ", " = ") are checked before stripping
    if line.startswith(_MESSAGE_PREFIXES):
        return ProgressMessage(line.strip())

    normalized = line.strip()
    if not normalized:
        return None

    if normalized.startswith(_MESSAGE_PREFIXES):
        return ProgressMessage(normalized)

    remote = _REMOTE_PREFIX.match(normalized)
    if remote:
        message = remote.group("msg").strip()
        nested = parse_progress(message, current_phase)
        return nested if nested is not None else ProgressMessage(message)

    percent = _PERCENT_LINE.match(normalized)
    if percent:
        value = max(0, min(100, int(percent.group("pct"))))
        return ProgressPercentage(_normalize_phase(percent.group("phase")), value)

    phase = _PHASE_PREFIX.match(normalized)
    if phase:
        return ProgressPhase(_normalize_phase(phase.group("phase")))

    return ProgressMessage(normalized)
