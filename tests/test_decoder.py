"""Tests for payload_repair.core.decoder: the strict fast path."""

from __future__ import annotations

import json
import math

import pytest

from payload_repair.core.decoder import strict_decode


class TestStrictDecode:
    """strict_decode() accepts exactly standard JSON and never raises."""

    def test_matches_json_loads(self, valid_document):
        assert strict_decode(valid_document) == (True, json.loads(valid_document))

    def test_null_is_a_value(self):
        """A parsed ``null`` is still a success."""
        assert strict_decode("null") == (True, None)

    @pytest.mark.parametrize("text", ["NaN", "Infinity", "-Infinity", '{"a": NaN}', "[Infinity]"])
    def test_rejects_non_standard_constants(self, text):
        assert strict_decode(text) == (False, None)

    @pytest.mark.parametrize(
        "text",
        ["", "   ", "{", "{{{", '{"a":1,}', "{a:1}", "{'a':'b'}", "\x00\xff�", '"tab\there"'],
    )
    def test_rejects_malformed(self, text):
        assert strict_decode(text) == (False, None)

    def test_deep_nesting_does_not_raise(self):
        text = "[" * 100_000 + "]" * 100_000
        ok, _ = strict_decode(text)
        assert ok in (True, False)

    def test_integer_past_digit_limit(self):
        """Integers too long for int() still decode, as floats."""
        ok, value = strict_decode('{"n": ' + "1" * 5000 + "}")
        assert ok is True
        assert isinstance(value["n"], float)
        assert math.isinf(value["n"])

    def test_long_integer_within_limit_stays_int(self):
        ok, value = strict_decode("[" + "9" * 400 + "]")
        assert ok is True
        assert value == [int("9" * 400)]

    def test_non_string_input(self):
        assert strict_decode(None) == (False, None)  # type: ignore[arg-type]
