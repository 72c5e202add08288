"""Outcome types returned by the repair engine.

A call always produces exactly one of:

* :class:`Success` carrying the parsed value, *how* it was obtained
  (:class:`RepairKind`), and the names of the strategies applied;
* :class:`Failure` carrying the fixed :data:`DIAGNOSTIC` string.

The diagnostic never varies.  Which strategies were tried, and why each
one failed, stays inside the engine.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any

DIAGNOSTIC = "Unable to repair JSON after trying all strategies"


class RepairKind(enum.Enum):
    PARSED_DIRECTLY = "parsed_directly"
    REPAIRED_BY_SINGLE_STRATEGY = "repaired_by_single_strategy"
    REPAIRED_BY_COMBINATION = "repaired_by_combination"


class UnrepairableJSONError(ValueError):
    """Raised by :meth:`Failure.unwrap` for callers that prefer exceptions."""


@dataclass(frozen=True)
class Success:
    value: Any
    kind: RepairKind = RepairKind.PARSED_DIRECTLY
    strategies: tuple[str, ...] = ()

    ok = True

    @property
    def repaired(self) -> bool:
        return self.kind is not RepairKind.PARSED_DIRECTLY

    def unwrap(self) -> Any:
        return self.value


@dataclass(frozen=True)
class Failure:
    diagnostic: str = DIAGNOSTIC

    ok = False
    repaired = False

    def unwrap(self) -> Any:
        raise UnrepairableJSONError(self.diagnostic)


RepairOutcome = Success | Failure


def parsed_directly(value: Any) -> Success:
    return Success(value, RepairKind.PARSED_DIRECTLY)


def repaired_by_single(value: Any, strategy: str) -> Success:
    return Success(value, RepairKind.REPAIRED_BY_SINGLE_STRATEGY, (strategy,))


def repaired_by_combination(value: Any, strategies: tuple[str, ...]) -> Success:
    return Success(value, RepairKind.REPAIRED_BY_COMBINATION, strategies)


def unrepairable() -> Failure:
    return Failure(DIAGNOSTIC)
