"""Character-level scanner that escapes stray quotes inside string values.

The most common defect in relayed payloads is a free-text value holding a
literal inch or foot mark, or quoted speech, without escaping it::

    {"DESCRIPTION": "Reducer IG/AG 1/4"-1"}

A regex cannot tell the embedded quote from the closing one, so the text is
walked one character at a time with a small state machine:

``OUTSIDE``
    Structural text.  A ``"`` opens a string, which is a *property name* when
    the last significant character before it is ``{`` (or ``,`` while inside
    an object) and a *value* otherwise.  Open brackets are tracked on a small
    stack for that test only; structure is left to the strict decoder.
``IN_PROPERTY_NAME``
    The first unescaped ``"`` closes the name.  Names are assumed to be free
    of embedded quotes.
``IN_VALUE_STRING``
    An unescaped ``"`` is ambiguous.  The scanner peeks past whitespace: if
    the next significant character can follow a finished value (``,``,
    ``}``, ``]`` or end of text) the quote is the delimiter, otherwise it is
    emitted as ``\\"`` and the string continues.

Inside either string state a backslash copies itself and exactly one
following character verbatim, so existing escapes are never touched.

Known limitation: a value that really does end in a quote immediately
followed by ``,`` or ``}`` (``"say "hi", ok"``) is split at that quote.  The
strict decoder re-validates the output, so this only ever costs a repair,
never a silently wrong parse of valid input.
"""

from __future__ import annotations

import enum


class ScanState(enum.Enum):
    OUTSIDE = "outside"
    IN_PROPERTY_NAME = "in_property_name"
    IN_VALUE_STRING = "in_value_string"


# Characters that may legally follow a completed value string
_VALUE_TERMINATORS = frozenset(",}]")


def _starts_property_name(last_significant: str, containers: list[str]) -> bool:
    """A quote after ``{``, or after ``,`` inside an object, opens a key."""
    if last_significant == "{":
        return True
    return last_significant == "," and (not containers or containers[-1] == "{")


def _next_significant(text: str, start: int) -> str:
    """Return the first non-whitespace character at or after *start* ('' at end)."""
    n = len(text)
    i = start
    while i < n and text[i].isspace():
        i += 1
    return text[i] if i < n else ""


def escape_embedded_quotes(text: str) -> str:
    """Rewrite *text*, escaping unescaped ``"`` characters inside value strings.

    Property names, structural tokens, and existing escape sequences are
    copied unchanged.  Always returns a string; it is up to the strict
    decoder to decide whether the result is usable.
    """
    out: list[str] = []
    state = ScanState.OUTSIDE
    escaped = False
    last_significant = ""
    # Open containers, innermost last; only used to tell keys from array items
    containers: list[str] = []

    for i, ch in enumerate(text):
        if state is ScanState.OUTSIDE:
            if ch == '"':
                state = (
                    ScanState.IN_PROPERTY_NAME
                    if _starts_property_name(last_significant, containers)
                    else ScanState.IN_VALUE_STRING
                )
            elif ch in "{[":
                containers.append(ch)
            elif ch in "}]" and containers:
                containers.pop()
            out.append(ch)
            if not ch.isspace():
                last_significant = ch
            continue

        # Inside a string
        if escaped:
            out.append(ch)
            escaped = False
            continue
        if ch == "\\":
            out.append(ch)
            escaped = True
            continue
        if ch != '"':
            out.append(ch)
            continue

        if state is ScanState.IN_PROPERTY_NAME:
            out.append(ch)
            state = ScanState.OUTSIDE
            last_significant = ch
            continue

        following = _next_significant(text, i + 1)
        if following == "" or following in _VALUE_TERMINATORS:
            out.append(ch)
            state = ScanState.OUTSIDE
            last_significant = ch
        else:
            out.append('\\"')

    return "".join(out)
