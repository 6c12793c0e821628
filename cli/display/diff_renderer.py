"""Diff renderer for parsed unified diffs."""

from rich.text import Text

from cli.display.console import console
from vcscore.models.diff import DiffBlob, DiffFile, DiffHunk, LineType

_LINE_STYLES = {
    LineType.ADDITION: ("+", "diff.addition"),
    LineType.DELETION: ("-", "diff.deletion"),
    LineType.CONTEXT: (" ", ""),
}


class DiffRenderer:
    """Render diff output.

    Displays each file header, then its hunks with color-coded lines and
    old/new line numbers in the gutter.
    """

    def render_blob(self, blob: DiffBlob, show_line_numbers: bool = True) -> bool:
        """Render every file of a parsed diff.

        Args:
            blob: Parsed diff.
            show_line_numbers: If True, prefix lines with old/new line numbers.

        Returns:
            True if there were differences, False otherwise.
        """
        if blob.is_empty:
            console.print("No differences.")
            return False

        for diff_file in blob.files:
            self.render_file(diff_file, show_line_numbers)
        return True

    def render_file(self, diff_file: DiffFile, show_line_numbers: bool = True) -> None:
        console.print(Text(self.format_file_header(diff_file), style="bold"))

        if diff_file.is_binary:
            console.print(Text("Binary file differs", style="dim"))
            console.print()
            return

        for hunk in diff_file.hunks:
            self.render_hunk(hunk, show_line_numbers)
        console.print()

    def format_file_header(self, diff_file: DiffFile) -> str:
        """Format a one-line header such as "modified: src/app.py".

        Args:
            diff_file: File to describe.

        Returns:
            Header text.
        """
        if diff_file.is_new_file:
            return f"new file: {diff_file.new_path}"
        if diff_file.is_deleted_file:
            return f"deleted: {diff_file.old_path}"
        if diff_file.old_path != diff_file.new_path:
            return f"renamed: {diff_file.old_path} -> {diff_file.new_path}"
        return f"modified: {diff_file.new_path}"

    def render_hunk(self, hunk: DiffHunk, show_line_numbers: bool = True) -> None:
        header = f"@@ -{hunk.old_start},{hunk.old_count} +{hunk.new_start},{hunk.new_count} @@"
        if hunk.section_header:
            header += f" {hunk.section_header}"
        console.print(Text(header, style="diff.hunk"))

        for line in hunk.lines:
            marker, style = _LINE_STYLES[line.type]
            text = Text()
            if show_line_numbers:
                old = "" if line.old_line_number is None else str(line.old_line_number)
                new = "" if line.new_line_number is None else str(line.new_line_number)
                text.append(f"{old:>5} {new:>5} ", style="diff.gutter")
            text.append(f"{marker}{line.content}", style=style)
            console.print(text)
            if line.no_newline_at_end:
                console.print(Text("\\ No newline at end of file", style="dim"))
