"""Strict, standards-conformant JSON decoding.

``json.loads`` is lenient in one respect: it accepts the JavaScript
constants ``NaN``, ``Infinity`` and ``-Infinity``.  Those are not JSON, so
they are rejected here.  Raw control characters inside strings are already
rejected by the default ``strict=True``.
"""

from __future__ import annotations

import json
from typing import Any


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant: {name}")


def _parse_int(literal: str) -> int | float:
    # int() refuses literals past sys.get_int_max_str_digits(); those are
    # still valid JSON numbers, so read them the way a float parser would.
    try:
        return int(literal)
    except ValueError:
        return float(literal)


def strict_decode(text: str) -> tuple[bool, Any]:
    """Return ``(True, value)`` if *text* is valid JSON, else ``(False, None)``.

    Never raises.  No diagnostic is reported on failure.
    """
    try:
        return True, json.loads(text, parse_constant=_reject_constant, parse_int=_parse_int)
    except (ValueError, TypeError, RecursionError):
        # JSONDecodeError is a ValueError subclass
        return False, None
