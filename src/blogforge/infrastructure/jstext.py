"""Lexical helpers for JavaScript/TypeScript source text.

These are not a parser. They strip comments, match braces while skipping
string literals, and mask nested blocks so that pattern searches only see
the top level of an object literal. Used by the config loader (module-style
config files) and the user schema extractor.
"""

from __future__ import annotations

import re

_QUOTES = frozenset({'"', "'", "`"})

_COMMENT_RE = re.compile(
    r"""("(?:\\.|[^"\\\n])*"|'(?:\\.|[^'\\\n])*'|`(?:\\.|[^`\\])*`)|(//[^\n]*|/\*.*?\*/)""",
    re.DOTALL,
)


def strip_comments(text: str) -> str:
    """Replace ``//`` and ``/* */`` comments with spaces.

    String literals are left untouched, so ``"https://..."`` survives.
    Replacement preserves offsets and line breaks.
    """

    def _blank(match: re.Match[str]) -> str:
        if match.group(2) is None:
            return match.group(0)
        return re.sub(r"[^\n]", " ", match.group(2))

    return _COMMENT_RE.sub(_blank, text)


def _skip_string(text: str, start: int) -> int:
    """Return the index just past the string literal opening at *start*."""
    quote = text[start]
    i = start + 1
    while i < len(text):
        ch = text[i]
        if ch == "\\":
            i += 2
            continue
        if ch == quote:
            return i + 1
        i += 1
    return len(text)


def find_block_end(text: str, open_idx: int) -> int:
    """Return the index of the brace closing the one at *open_idx*.

    Returns -1 when the block is unterminated.
    """
    if open_idx < 0 or open_idx >= len(text) or text[open_idx] != "{":
        return -1
    depth = 0
    i = open_idx
    while i < len(text):
        ch = text[i]
        if ch in _QUOTES:
            i = _skip_string(text, i)
            continue
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i
        i += 1
    return -1


def mask_nested(text: str) -> str:
    """Blank out the contents of every ``{...}`` block nested in *text*.

    The braces themselves are kept and offsets are preserved, so a match
    found in the masked text can be used to index the original.
    """
    out = list(text)
    depth = 0
    i = 0
    while i < len(text):
        ch = text[i]
        if ch in _QUOTES:
            end = _skip_string(text, i)
            if depth > 0:
                for j in range(i, end):
                    if out[j] != "\n":
                        out[j] = " "
            i = end
            continue
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth = max(depth - 1, 0)
        elif depth > 0 and ch != "\n":
            out[i] = " "
        i += 1
    return "".join(out)
