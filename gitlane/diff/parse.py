"""Unified-diff line classification and summary statistics."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class DiffLineType(Enum):
    ADDITION = "addition"
    DELETION = "deletion"
    CONTEXT = "context"
    HEADER = "header"
    META = "meta"
    HUNK_HEADER = "hunk_header"


@dataclass(frozen=True)
class DiffLine:
    text: str
    line_type: DiffLineType
    line_number: int | None = None


@dataclass(frozen=True)
class DiffStats:
    additions: int = 0
    deletions: int = 0
    files_changed: int = 1
    net_change: int = 0
    current_file: str = ""

    def format_summary(self) -> str:
        if self.files_changed > 1:
            return (
                f"{self.files_changed} file(s) changed, "
                f"{self.additions} insertion(+), {self.deletions} deletion(-)"
            )
        return f"{self.additions} insertion(+), {self.deletions} deletion(-)"

    def format_file_info(self) -> str:
        return f"Viewing: {self.current_file}" if self.current_file else ""


_FILE_HEADER_PREFIXES: tuple[str, ...] = ("diff --git", "+++", "---")
_META_PREFIXES: tuple[str, ...] = (
    "index ",
    "new file mode",
    "deleted file mode",
    "old mode",
    "new mode",
    "similarity index",
    "dissimilarity index",
    "rename from",
    "rename to",
    "copy from",
    "copy to",
    "Binary files",
)


def classify_diff_line(line: str) -> DiffLineType:
    """Classify one raw diff line; anything unrecognized is context."""
    if not line:
        return DiffLineType.CONTEXT
    if line.startswith(_FILE_HEADER_PREFIXES):
        return DiffLineType.HEADER
    if line.startswith(_META_PREFIXES):
        return DiffLineType.META
    if line.startswith("@@"):
        return DiffLineType.HUNK_HEADER
    if line.startswith("+"):
        return DiffLineType.ADDITION
    if line.startswith("-"):
        return DiffLineType.DELETION
    return DiffLineType.CONTEXT


def parse_diff(diff_text: str) -> list[DiffLine]:
    """Split diff text into classified lines with display line numbers.

    The display counter starts at 1 and advances for every line except
    deletions, which carry no number.
    """
    lines: list[DiffLine] = []
    line_number = 1
    for raw in diff_text.splitlines():
        line_type = classify_diff_line(raw)
        if line_type is DiffLineType.DELETION:
            lines.append(DiffLine(raw, line_type, None))
            continue
        lines.append(DiffLine(raw, line_type, line_number))
        line_number += 1
    return lines


def count_stats(lines: list[DiffLine]) -> DiffStats:
    additions = 0
    deletions = 0
    files_changed = 0
    current_file = ""
    for line in lines:
        if line.line_type is DiffLineType.ADDITION:
            additions += 1
        elif line.line_type is DiffLineType.DELETION:
            deletions += 1
        elif line.line_type is DiffLineType.HEADER and line.text.startswith("+++"):
            files_changed += 1
            if line.text.startswith("+++ b/"):
                current_file = line.text[len("+++ b/"):]
    return DiffStats(
        additions=additions,
        deletions=deletions,
        files_changed=max(1, files_changed),
        net_change=max(0, additions - deletions),
        current_file=current_file,
    )


def file_for_line(lines: list[DiffLine], index: int) -> str:
    """Return the ``b/`` path of the file section containing ``lines[index]``."""
    for pos in range(min(index, len(lines) - 1), -1, -1):
        text = lines[pos].text
        if text.startswith("+++ b/"):
            return text[len("+++ b/"):]
        if text.startswith("diff --git "):
            _, _, target = text.rpartition(" b/")
            return target
    return ""
