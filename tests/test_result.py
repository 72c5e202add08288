"""Tests for payload_repair.core.result: outcome values."""

from __future__ import annotations

import pytest

from payload_repair.core.result import (
    DIAGNOSTIC,
    Failure,
    RepairKind,
    Success,
    UnrepairableJSONError,
    parsed_directly,
    repaired_by_combination,
    repaired_by_single,
    unrepairable,
)


class TestSuccess:
    def test_parsed_directly(self):
        outcome = parsed_directly({"a": 1})
        assert outcome.ok is True
        assert outcome.repaired is False
        assert outcome.strategies == ()
        assert outcome.unwrap() == {"a": 1}

    def test_single(self):
        outcome = repaired_by_single([1], "remove_trailing_commas")
        assert outcome.kind is RepairKind.REPAIRED_BY_SINGLE_STRATEGY
        assert outcome.repaired is True
        assert outcome.strategies == ("remove_trailing_commas",)

    def test_combination(self):
        outcome = repaired_by_combination(None, ("a", "b"))
        assert outcome.kind is RepairKind.REPAIRED_BY_COMBINATION
        assert outcome.value is None
        assert outcome.ok is True

    def test_frozen(self):
        with pytest.raises(AttributeError):
            parsed_directly(1).value = 2  # type: ignore[misc]


class TestFailure:
    def test_fixed_diagnostic(self):
        assert unrepairable() == Failure(DIAGNOSTIC)
        assert unrepairable().diagnostic == "Unable to repair JSON after trying all strategies"

    def test_flags(self):
        outcome = unrepairable()
        assert outcome.ok is False
        assert outcome.repaired is False

    def test_unwrap_raises_value_error(self):
        with pytest.raises(UnrepairableJSONError, match="Unable to repair JSON"):
            unrepairable().unwrap()
        assert issubclass(UnrepairableJSONError, ValueError)

    def test_not_equal_to_success(self):
        assert unrepairable() != Success(None)
