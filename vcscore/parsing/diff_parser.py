"""Parse unified diff text into files, hunks and lines."""

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path

from vcscore.constants import DEV_NULL, NO_NEWLINE_MARKER
from vcscore.models.diff import DiffBlob, DiffFile, DiffHunk, DiffHunkLine, LineType

logger = logging.getLogger(__name__)

# diff --git a/src/Foo.java b/src/Foo.java  (either path may be C-quoted)
_DIFF_GIT_HEADER = re.compile(
    r'^diff --git (?P<old>"(?:[^"\\]|\\.)*"|a/.*?) (?P<new>"(?:[^"\\]|\\.)*"|b/.*)$'
)

_QUOTED_ESCAPES = {"a": 7, "b": 8, "t": 9, "n": 10, "v": 11, "f": 12, "r": 13, '"': 34, "\\": 92}
_OCTAL = re.compile(r"[0-7]{1,3}")

# @@ -33,7 +33,8 @@ class Foo:
_HUNK_HEADER = re.compile(
    r"^@@ -(?P<old_start>\d+)(?:,(?P<old_count>\d+))? "
    r"\+(?P<new_start>\d+)(?:,(?P<new_count>\d+))? @@(?P<section>.*)$"
)

_LINE_TYPES = {" ": LineType.CONTEXT, "+": LineType.ADDITION, "-": LineType.DELETION}


def _normalize(path: str) -> Path:
    return Path(os.path.normpath(path))


def _strip_prefix(path: str, prefix: str) -> str:
    return path[len(prefix):] if path.startswith(prefix) else path


def unquote_path(path: str) -> str:
    """Undo git's C-style quoting of a path.

    Paths with special or non-ASCII characters come wrapped in double
    quotes, with backslash escapes and UTF-8 bytes as ``\\ooo`` octal.
    Unquoted paths are returned unchanged.
    """
    if len(path) < 2 or not (path.startswith('"') and path.endswith('"')):
        return path

    body = path[1:-1]
    raw = bytearray()
    i = 0
    while i < len(body):
        char = body[i]
        if char != "\\" or i + 1 == len(body):
            raw.extend(char.encode("utf-8"))
            i += 1
            continue
        octal = _OCTAL.match(body, i + 1)
        if octal:
            raw.append(int(octal.group(), 8) & 0xFF)
            i = octal.end()
        else:
            escaped = body[i + 1]
            if escaped in _QUOTED_ESCAPES:
                raw.append(_QUOTED_ESCAPES[escaped])
            else:
                raw.extend(body[i:i + 2].encode("utf-8"))
            i += 2
    return raw.decode("utf-8", errors="replace")


def _header_path(path: str, prefix: str) -> Path:
    return _normalize(_strip_prefix(unquote_path(path), prefix))


@dataclass
class _HunkBuilder:
    old_start: int
    old_count: int
    new_start: int
    new_count: int
    section_header: str | None
    old_line: int
    new_line: int
    lines: list[DiffHunkLine] = field(default_factory=list)

    def build(self) -> DiffHunk:
        return DiffHunk(
            old_start=self.old_start,
            old_count=self.old_count,
            new_start=self.new_start,
            new_count=self.new_count,
            section_header=self.section_header,
            lines=self.lines,
        )


@dataclass
class _FileBuilder:
    old_path: Path | None
    new_path: Path | None
    is_binary: bool = False
    headers: list[str] = field(default_factory=list)
    hunks: list[DiffHunk] = field(default_factory=list)

    def build(self) -> DiffFile:
        return DiffFile(
            old_path=self.old_path,
            new_path=self.new_path,
            is_binary=self.is_binary,
            headers=self.headers,
            hunks=self.hunks,
        )


class DiffParser:
    """Single-pass parser over unified diff output.

    States: between files (no current file), between hunks (file open,
    no hunk) and inside a hunk. Lines inside a hunk that are not context,
    addition, deletion or the no-newline marker are logged and skipped.
    """

    def __init__(self):
        self._files: list[DiffFile] = []
        self._file: _FileBuilder | None = None
        self._hunk: _HunkBuilder | None = None

    def parse(self, raw_diff: str) -> DiffBlob:
        lines = re.split(r"\r?\n", raw_diff)
        if lines and lines[-1] == "":
            lines.pop()

        for line in lines:
            self._feed(line)

        self._close_file()
        files, self._files = self._files, []
        return DiffBlob(files=files)

    def _feed(self, line: str) -> None:
        if line.startswith("diff --git"):
            self._close_file()
            self._open_file(line)
        elif self._file is None:
            logger.debug(f"Ignoring line outside of a file diff: {line}")
        elif line.startswith("@@ "):
            self._open_hunk(line)
        elif self._hunk is not None:
            self._feed_hunk_line(line)
        else:
            self._feed_header_line(line)

    def _open_file(self, line: str) -> None:
        match = _DIFF_GIT_HEADER.match(line)
        if match:
            old_path = _header_path(match.group("old"), "a/")
            new_path = _header_path(match.group("new"), "b/")
        else:
            logger.warning(f"Could not read paths from diff header: {line}")
            old_path = new_path = None
        self._file = _FileBuilder(old_path=old_path, new_path=new_path)

    def _close_hunk(self) -> None:
        if self._hunk is not None and self._file is not None:
            self._file.hunks.append(self._hunk.build())
        self._hunk = None

    def _close_file(self) -> None:
        self._close_hunk()
        if self._file is not None:
            self._files.append(self._file.build())
        self._file = None

    def _feed_header_line(self, line: str) -> None:
        current = self._file
        if line.startswith("Binary files "):
            current.is_binary = True
        elif line.startswith("--- "):
            path = line[4:].strip()
            current.old_path = None if path == DEV_NULL else _header_path(path, "a/")
        elif line.startswith("+++ "):
            path = line[4:].strip()
            current.new_path = None if path == DEV_NULL else _header_path(path, "b/")
        else:
            # Pure adds/deletes without ---/+++ lines (e.g. binary files)
            if line.startswith("new file mode"):
                current.old_path = None
            elif line.startswith("deleted file mode"):
                current.new_path = None
            current.headers.append(line)

    def _open_hunk(self, line: str) -> None:
        self._close_hunk()

        match = _HUNK_HEADER.match(line)
        if not match:
            logger.warning(f"Malformed hunk header: {line}")
            return

        old_start = int(match.group("old_start"))
        new_start = int(match.group("new_start"))
        old_count = int(match.group("old_count")) if match.group("old_count") is not None else 1
        new_count = int(match.group("new_count")) if match.group("new_count") is not None else 1
        section = match.group("section").strip() or None

        self._hunk = _HunkBuilder(
            old_start=old_start,
            old_count=old_count,
            new_start=new_start,
            new_count=new_count,
            section_header=section,
            old_line=old_start,
            new_line=new_start,
        )

    def _feed_hunk_line(self, line: str) -> None:
        hunk = self._hunk
        line_type = _LINE_TYPES.get(line[:1])

        if line_type is not None:
            old_number = new_number = None
            if line_type == LineType.CONTEXT:
                old_number, new_number = hunk.old_line, hunk.new_line
                hunk.old_line += 1
                hunk.new_line += 1
            elif line_type == LineType.ADDITION:
                new_number = hunk.new_line
                hunk.new_line += 1
            else:
                old_number = hunk.old_line
                hunk.old_line += 1

            hunk.lines.append(
                DiffHunkLine(
                    type=line_type,
                    old_line_number=old_number,
                    new_line_number=new_number,
                    content=line[1:],
                )
            )
        elif line.startswith(NO_NEWLINE_MARKER):
            if hunk.lines:
                last = hunk.lines.pop()
                hunk.lines.append(last.model_copy(update={"no_newline_at_end": True}))
            else:
                logger.warning("No lines in hunk to apply 'No newline at end of file' to")
        else:
            logger.warning(f"Unrecognized line in diff hunk: {line}")


def parse_diff(raw_diff: str) -> DiffBlob:
    """
    Parse unified diff text.

    Args:
        raw_diff: Output of ``git diff`` (whole-buffer capture)

    Returns:
        DiffBlob with one DiffFile per ``diff --git`` section
    """
    return DiffParser().parse(raw_diff)
