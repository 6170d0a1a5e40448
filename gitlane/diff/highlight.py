"""Single-line heuristic syntax highlighting for diff bodies.

A small three-state scanner splits one line into spans tagged with Pygments
token types. Nothing carries over between lines, so a block comment opened on
one line does not color the next.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pygments.token import Comment, Keyword, Number, String, Text, _TokenType

from .languages import LanguageTable

_NUMBER_CHARS = frozenset("0123456789abcdefABCDEF._xXoObB")


class LexState(Enum):
    CODE = "code"
    STRING = "string"
    BLOCK_COMMENT = "block_comment"


@dataclass(frozen=True)
class SyntaxSpan:
    text: str
    token: _TokenType


def _is_number(word: str) -> bool:
    return bool(word) and word[0].isdigit() and all(ch in _NUMBER_CHARS for ch in word)


def classify_word(word: str, language: LanguageTable) -> _TokenType:
    if word in language.keywords:
        return Keyword
    if word in language.types:
        return Keyword.Type
    if _is_number(word):
        return Number
    return Text


def _append(spans: list[SyntaxSpan], text: str, token: _TokenType) -> None:
    if not text:
        return
    if spans and spans[-1].token is token:
        spans[-1] = SyntaxSpan(spans[-1].text + text, token)
        return
    spans.append(SyntaxSpan(text, token))


def _is_word_char(ch: str, word: str) -> bool:
    if ch.isalnum() or ch == "_":
        return True
    if ch == "." and word[:1].isdigit():
        return True
    # Preprocessor directives such as ``#include`` are matched as one word.
    return ch == "#" and not word


def highlight_line(text: str, language: LanguageTable | None) -> list[SyntaxSpan]:
    """Split ``text`` into styled spans for ``language``.

    ``None`` yields a single unstyled span. Unterminated strings and block
    comments run to the end of the line.
    """
    if language is None:
        return [SyntaxSpan(text, Text)]

    spans: list[SyntaxSpan] = []
    state = LexState.CODE
    word = ""
    current = ""
    quote = ""
    block_start, block_end = language.block_comment or ("", "")

    def flush_word() -> None:
        nonlocal word
        if word:
            _append(spans, word, classify_word(word, language))
            word = ""

    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if state is LexState.STRING:
            current += ch
            if ch == "\\" and i + 1 < n:
                current += text[i + 1]
                i += 2
                continue
            if ch == quote:
                _append(spans, current, String)
                current = ""
                state = LexState.CODE
            i += 1
            continue

        if state is LexState.BLOCK_COMMENT:
            if text.startswith(block_end, i):
                current += block_end
                _append(spans, current, Comment)
                current = ""
                state = LexState.CODE
                i += len(block_end)
                continue
            current += ch
            i += 1
            continue

        if any(text.startswith(marker, i) for marker in language.line_comments):
            flush_word()
            _append(spans, text[i:], Comment)
            return spans
        if block_start and text.startswith(block_start, i):
            flush_word()
            state = LexState.BLOCK_COMMENT
            current = block_start
            i += len(block_start)
            continue
        if ch in language.quotes:
            flush_word()
            state = LexState.STRING
            quote = ch
            current = ch
            i += 1
            continue
        if _is_word_char(ch, word):
            word += ch
        else:
            flush_word()
            _append(spans, ch, Text)
        i += 1

    flush_word()
    if state is LexState.STRING:
        _append(spans, current, String)
    elif state is LexState.BLOCK_COMMENT:
        _append(spans, current, Comment)
    return spans
