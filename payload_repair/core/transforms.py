"""Narrow text-to-text repairs for common JSON syntax defects.

Each function takes the payload text and returns a new string.  None of
them raise, and each one leaves already-valid JSON with the same meaning:
the regex fixes only look at text *outside* double-quoted string literals,
and the literal-level fixes only rewrite sequences that valid JSON cannot
contain.
"""

from __future__ import annotations

import re
from collections.abc import Callable

_TRAILING_COMMA = re.compile(r",(\s*[}\]])")
_UNQUOTED_KEY = re.compile(r"([{,]\s*)([A-Za-z_$][A-Za-z0-9_$]*)\s*:")
_LEGACY_KEY_VALUE = re.compile(r'(?<!\\)("[\w$]+"\s*:\s*")(.*?)("\s*[,}])')
_UNESCAPED_QUOTE = re.compile(r'(?<!\\)"')
_HEX4 = re.compile(r"[0-9a-fA-F]{4}")

_VALID_ESCAPES = frozenset('"\\/bfnrt')
_CONTROL_ESCAPES = {"\n": "\\n", "\r": "\\r", "\t": "\\t", "\b": "\\b", "\f": "\\f"}


# ── Literal-aware helpers ───────────────────────────────────────────────


def _literal_end(text: str, start: int, quote: str) -> int:
    """Index just past the literal opened at *start*, or -1 if unterminated."""
    i = start + 1
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == "\\":
            i += 2
            continue
        if ch == quote:
            return i + 1
        i += 1
    return -1


def split_string_literals(text: str) -> list[tuple[bool, str]]:
    """Split *text* into ``(is_literal, chunk)`` pieces on double-quoted strings.

    An unterminated literal runs to the end of the text.
    """
    pieces: list[tuple[bool, str]] = []
    start = 0
    i = text.find('"')
    while i != -1:
        if i > start:
            pieces.append((False, text[start:i]))
        end = _literal_end(text, i, '"')
        if end == -1:
            pieces.append((True, text[i:]))
            return pieces
        pieces.append((True, text[i:end]))
        start = end
        i = text.find('"', start)
    if start < len(text):
        pieces.append((False, text[start:]))
    return pieces


def _map_outside_literals(text: str, fn: Callable[[str], str]) -> str:
    return "".join(chunk if is_literal else fn(chunk) for is_literal, chunk in split_string_literals(text))


def _map_inside_literals(text: str, fn: Callable[[str], str]) -> str:
    return "".join(fn(chunk) if is_literal else chunk for is_literal, chunk in split_string_literals(text))


# ── Transforms ──────────────────────────────────────────────────────────


def remove_trailing_commas(text: str) -> str:
    """``{"a": 1,}`` -> ``{"a": 1}`` and ``[1, 2,]`` -> ``[1, 2]``."""
    return _map_outside_literals(text, lambda chunk: _TRAILING_COMMA.sub(r"\1", chunk))


def quote_property_names(text: str) -> str:
    """``{key: 1, other: 2}`` -> ``{"key": 1, "other": 2}``."""
    return _map_outside_literals(text, lambda chunk: _UNQUOTED_KEY.sub(r'\1"\2":', chunk))


def _single_to_double(literal: str) -> str:
    """Rewrite the single-quoted literal ``'...'`` as a double-quoted one."""
    body = literal[1:-1]
    out: list[str] = ['"']
    i = 0
    while i < len(body):
        ch = body[i]
        if ch == "\\" and i + 1 < len(body):
            nxt = body[i + 1]
            # \' has no meaning in JSON
            out.append("'" if nxt == "'" else ch + nxt)
            i += 2
            continue
        out.append('\\"' if ch == '"' else ch)
        i += 1
    out.append('"')
    return "".join(out)


def convert_single_quotes(text: str) -> str:
    """``{'a': 'b'}`` -> ``{"a": "b"}``.

    Apostrophes inside double-quoted strings are left alone, as is any
    single quote without a matching partner.
    """
    out: list[str] = []
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch not in "\"'":
            out.append(ch)
            i += 1
            continue
        end = _literal_end(text, i, ch)
        if end == -1:
            if ch == '"':
                out.append(text[i:])
                break
            out.append(ch)
            i += 1
            continue
        literal = text[i:end]
        out.append(literal if ch == '"' else _single_to_double(literal))
        i = end
    return "".join(out)


def _normalize_literal(literal: str) -> str:
    out: list[str] = []
    i = 0
    n = len(literal)
    while i < n:
        ch = literal[i]
        if ch == "\\":
            nxt = literal[i + 1] if i + 1 < n else ""
            if nxt in _VALID_ESCAPES:
                out.append(ch + nxt)
                i += 2
                continue
            if nxt == "u" and _HEX4.fullmatch(literal, i + 2, i + 6):
                out.append(literal[i : i + 6])
                i += 6
                continue
            # Stray backslash, e.g. a Windows path
            out.append("\\\\")
            i += 1
            continue
        if ch in _CONTROL_ESCAPES:
            out.append(_CONTROL_ESCAPES[ch])
        elif ord(ch) < 0x20:
            out.append(f"\\u{ord(ch):04x}")
        else:
            out.append(ch)
        i += 1
    return "".join(out)


def normalize_escapes(text: str) -> str:
    """Canonicalise escape sequences inside string literals.

    Raw newlines, carriage returns, and tabs become ``\\n``, ``\\r`` and
    ``\\t``; other control characters become ``\\u00XX``.  A backslash that
    does not start a valid JSON escape is doubled.  Valid escapes pass
    through untouched.
    """
    return _map_inside_literals(text, _normalize_literal)


def legacy_quote_fix(text: str) -> str:
    """Regex fallback: escape quotes inside ``"key": "value"`` pairs.

    The value is taken to run up to the first quote followed by ``,`` or
    ``}``.  Lower precision than the scanner; kept for the cases its
    peek-ahead gets wrong, such as values spanning odd whitespace.
    """

    def _fix(match: re.Match[str]) -> str:
        prefix, content, suffix = match.groups()
        if '"' not in content:
            return match.group(0)
        return prefix + _UNESCAPED_QUOTE.sub(r'\\"', content) + suffix

    return _LEGACY_KEY_VALUE.sub(_fix, text)
