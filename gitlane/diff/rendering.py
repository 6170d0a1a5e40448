"""ANSI rendering of parsed diff lines."""

from __future__ import annotations

from pygments.token import Comment, Keyword, Number, String, _TokenType

from ..ui_theme import UITheme
from .highlight import highlight_line
from .languages import language_for_path
from .parse import DiffLine, DiffLineType

GUTTER_WIDTH = 4
GUTTER_SEPARATOR = " │ "


def _line_color(line_type: DiffLineType, theme: UITheme) -> str:
    return {
        DiffLineType.ADDITION: theme.diff_addition,
        DiffLineType.DELETION: theme.diff_deletion,
        DiffLineType.CONTEXT: theme.diff_context,
        DiffLineType.HEADER: theme.diff_header,
        DiffLineType.META: theme.diff_meta,
        DiffLineType.HUNK_HEADER: theme.diff_hunk_header,
    }[line_type]


def _token_color(token: _TokenType, theme: UITheme, fallback: str) -> str:
    # Keyword.Type is a subtype of Keyword, so it is checked first.
    if token in Keyword.Type:
        return theme.syntax_type
    if token in Keyword:
        return theme.syntax_keyword
    if token in String:
        return theme.syntax_string
    if token in Number:
        return theme.syntax_number
    if token in Comment:
        return theme.syntax_comment
    return fallback


def format_gutter(line: DiffLine, theme: UITheme) -> str:
    number = "" if line.line_number is None else str(line.line_number)
    return f"{theme.diff_line_number}{number:>{GUTTER_WIDTH}}{GUTTER_SEPARATOR}{theme.reset}"


def render_diff_row(line: DiffLine, theme: UITheme, path: str = "") -> str:
    """Render one diff line with its line-number gutter.

    Code lines (additions, deletions, context) keep their leading marker in the
    line color and get syntax colors for the body when ``path`` names a known
    language. Headers and metadata are colored as a whole.
    """
    color = _line_color(line.line_type, theme)
    gutter = format_gutter(line, theme)
    if line.line_type not in {DiffLineType.ADDITION, DiffLineType.DELETION, DiffLineType.CONTEXT}:
        return f"{gutter}{color}{line.text}{theme.reset}"

    marker = ""
    body = line.text
    if body[:1] in {"+", "-", " "}:
        marker, body = body[:1], body[1:]

    out = [gutter, f"{color}{marker}{theme.reset}" if marker else ""]
    for span in highlight_line(body, language_for_path(path)):
        span_color = _token_color(span.token, theme, color)
        out.append(f"{span_color}{span.text}{theme.reset}" if span_color else span.text)
    return "".join(out)
