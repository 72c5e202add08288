"""Malformed-JSON recovery for untrusted request bodies.

Usage:
    from payload_repair import repair_and_parse

    outcome = repair_and_parse('{"DESCRIPTION": "Reducer 1/4"-1"}')
    if outcome.ok:
        data = outcome.value
"""

from payload_repair.core.pipeline import STRATEGIES, RepairStrategy, repair_and_parse
from payload_repair.core.result import (
    DIAGNOSTIC,
    Failure,
    RepairKind,
    RepairOutcome,
    Success,
    UnrepairableJSONError,
)

__all__ = [
    "DIAGNOSTIC",
    "STRATEGIES",
    "Failure",
    "RepairKind",
    "RepairOutcome",
    "RepairStrategy",
    "Success",
    "UnrepairableJSONError",
    "repair_and_parse",
]
