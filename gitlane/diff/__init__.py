"""Diff classification, statistics and highlighting."""

from .highlight import LexState, SyntaxSpan, highlight_line
from .languages import LanguageTable, language_for_path
from .parse import (
    DiffLine,
    DiffLineType,
    DiffStats,
    classify_diff_line,
    count_stats,
    file_for_line,
    parse_diff,
)
from .rendering import render_diff_row

__all__ = [
    "DiffLine",
    "DiffLineType",
    "DiffStats",
    "LanguageTable",
    "LexState",
    "SyntaxSpan",
    "classify_diff_line",
    "count_stats",
    "file_for_line",
    "highlight_line",
    "language_for_path",
    "parse_diff",
    "render_diff_row",
]
