"""Keyword/type tables for the heuristic diff highlighter.

Languages are resolved from a file name through Pygments' lexer registry,
with a small extension table for names Pygments does not know.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import PurePosixPath

from pygments.lexers import find_lexer_class_for_filename


@dataclass(frozen=True)
class LanguageTable:
    name: str
    keywords: frozenset[str]
    types: frozenset[str]
    line_comments: tuple[str, ...] = ()
    block_comment: tuple[str, str] | None = None
    quotes: str = "\"'"


PYTHON = LanguageTable(
    name="python",
    keywords=frozenset(
        "False None True and as assert async await break class continue def del elif else "
        "except finally for from global if import in is lambda match case nonlocal not or "
        "pass raise return try while with yield self".split()
    ),
    types=frozenset("int float str bytes bool list dict set tuple object type Exception".split()),
    line_comments=("#",),
)

RUST = LanguageTable(
    name="rust",
    keywords=frozenset(
        "as async await break const continue crate dyn else enum extern false fn for if impl "
        "in let loop match mod move mut pub ref return self Self static struct super trait "
        "true type unsafe use where while".split()
    ),
    types=frozenset(
        "i8 i16 i32 i64 i128 isize u8 u16 u32 u64 u128 usize f32 f64 bool char str String "
        "Vec Option Result Box HashMap HashSet".split()
    ),
    line_comments=("//",),
    block_comment=("/*", "*/"),
    quotes="\"",
)

JAVASCRIPT = LanguageTable(
    name="javascript",
    keywords=frozenset(
        "async await break case catch class const continue debugger default delete do else "
        "export extends false finally for function if import in instanceof let new null "
        "return super switch this throw true try typeof undefined var void while with yield "
        "interface implements enum readonly as from of".split()
    ),
    types=frozenset(
        "string number boolean any unknown never void object Array Promise Map Set Record".split()
    ),
    line_comments=("//",),
    block_comment=("/*", "*/"),
    quotes="\"'`",
)

GO = LanguageTable(
    name="go",
    keywords=frozenset(
        "break case chan const continue default defer else fallthrough for func go goto if "
        "import interface map package range return select struct switch type var nil true "
        "false".split()
    ),
    types=frozenset(
        "bool byte complex64 complex128 error float32 float64 int int8 int16 int32 int64 rune "
        "string uint uint8 uint16 uint32 uint64 uintptr any".split()
    ),
    line_comments=("//",),
    block_comment=("/*", "*/"),
    quotes="\"'`",
)

C_FAMILY = LanguageTable(
    name="c",
    keywords=frozenset(
        "auto break case catch class const constexpr continue default delete do else enum "
        "explicit extern false for friend goto if inline namespace new nullptr operator "
        "private protected public register return sizeof static struct switch template this "
        "throw true try typedef typename union using virtual volatile while #include #define".split()
    ),
    types=frozenset(
        "void char short int long float double signed unsigned bool size_t int8_t int16_t "
        "int32_t int64_t uint8_t uint16_t uint32_t uint64_t std string vector".split()
    ),
    line_comments=("//",),
    block_comment=("/*", "*/"),
)

JAVA = LanguageTable(
    name="java",
    keywords=frozenset(
        "abstract assert break case catch class continue default do else enum extends final "
        "finally for if implements import instanceof interface native new null package private "
        "protected public return static super switch synchronized this throw throws true false "
        "try var void volatile while".split()
    ),
    types=frozenset("boolean byte char short int long float double String Object List Map".split()),
    line_comments=("//",),
    block_comment=("/*", "*/"),
)

SHELL = LanguageTable(
    name="shell",
    keywords=frozenset(
        "if then else elif fi for while until do done case esac in function return local "
        "export readonly set unset shift exit echo".split()
    ),
    types=frozenset(),
    line_comments=("#",),
)

_LEXER_LANGUAGES: dict[str, LanguageTable] = {
    "Python": PYTHON,
    "Python 2.x": PYTHON,
    "Rust": RUST,
    "JavaScript": JAVASCRIPT,
    "TypeScript": JAVASCRIPT,
    "TSX": JAVASCRIPT,
    "JSX": JAVASCRIPT,
    "Go": GO,
    "C": C_FAMILY,
    "C++": C_FAMILY,
    "Java": JAVA,
    "Bash": SHELL,
}

_EXTENSION_LANGUAGES: dict[str, LanguageTable] = {
    ".py": PYTHON,
    ".pyi": PYTHON,
    ".rs": RUST,
    ".js": JAVASCRIPT,
    ".mjs": JAVASCRIPT,
    ".cjs": JAVASCRIPT,
    ".jsx": JAVASCRIPT,
    ".ts": JAVASCRIPT,
    ".tsx": JAVASCRIPT,
    ".go": GO,
    ".c": C_FAMILY,
    ".h": C_FAMILY,
    ".cc": C_FAMILY,
    ".cpp": C_FAMILY,
    ".hpp": C_FAMILY,
    ".java": JAVA,
    ".sh": SHELL,
    ".bash": SHELL,
}


@lru_cache(maxsize=256)
def language_for_path(path: str) -> LanguageTable | None:
    """Return the language table for ``path`` or ``None`` when unsupported."""
    if not path:
        return None
    name = PurePosixPath(path).name
    lexer_cls = find_lexer_class_for_filename(name)
    if lexer_cls is not None:
        table = _LEXER_LANGUAGES.get(lexer_cls.name)
        if table is not None:
            return table
    return _EXTENSION_LANGUAGES.get(PurePosixPath(name).suffix.lower())
