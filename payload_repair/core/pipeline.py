"""Repair pipeline: strict fast path, then a two-phase strategy search.

Order of attempts for a payload that does not parse as-is:

    Phase A  each strategy alone, applied to the original text
    Phase B  cumulative prefixes 1..k of the same list, applied in order

The strict decoder is re-run after every candidate.  The first candidate
that decodes wins.  The list is fixed so the same input always takes the
same path.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from payload_repair.core.decoder import strict_decode
from payload_repair.core.log import get_logger
from payload_repair.core.result import (
    RepairOutcome,
    parsed_directly,
    repaired_by_combination,
    repaired_by_single,
    unrepairable,
)
from payload_repair.core.scanner import escape_embedded_quotes
from payload_repair.core.transforms import (
    convert_single_quotes,
    legacy_quote_fix,
    normalize_escapes,
    quote_property_names,
    remove_trailing_commas,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class RepairStrategy:
    """A named, pure ``str -> str`` repair."""

    name: str
    apply: Callable[[str], str]

    def __call__(self, text: str) -> str:
        return self.apply(text)


# Narrow, high-precision fixes first so blunter ones cannot shadow them.
STRATEGIES: tuple[RepairStrategy, ...] = (
    RepairStrategy("escape_embedded_quotes", escape_embedded_quotes),
    RepairStrategy("remove_trailing_commas", remove_trailing_commas),
    RepairStrategy("quote_property_names", quote_property_names),
    RepairStrategy("convert_single_quotes", convert_single_quotes),
    RepairStrategy("normalize_escapes", normalize_escapes),
    RepairStrategy("legacy_quote_fix", legacy_quote_fix),
)


def _attempt(strategy: RepairStrategy, text: str, phase: str) -> str | None:
    """Apply *strategy*; ``None`` if it misbehaved."""
    try:
        result = strategy(text)
    except Exception as exc:
        logger.debug(
            f"Strategy {strategy.name} raised {type(exc).__name__}",
            extra={"strategy": strategy.name, "phase": phase, "error": type(exc).__name__},
        )
        return None
    return result if isinstance(result, str) else None


def run_pipeline(raw: str, strategies: Sequence[RepairStrategy] = STRATEGIES) -> RepairOutcome:
    """Decode *raw*, repairing it if needed.  Never raises."""
    ok, value = strict_decode(raw)
    if ok:
        return parsed_directly(value)

    # Phase A: one strategy at a time against the original text
    for strategy in strategies:
        candidate = _attempt(strategy, raw, "single")
        if candidate is None:
            continue
        ok, value = strict_decode(candidate)
        if ok:
            logger.debug(
                f"Repaired with {strategy.name}",
                extra={"strategy": strategy.name, "phase": "single", "outcome": "repaired"},
            )
            return repaired_by_single(value, strategy.name)

    # Phase B: growing prefixes of the list, each starting from the original
    text: str | None = raw
    applied: list[str] = []
    for strategy in strategies:
        text = _attempt(strategy, text, "combination")
        if text is None:
            break
        applied.append(strategy.name)
        ok, value = strict_decode(text)
        if ok:
            names = tuple(applied)
            logger.debug(
                f"Repaired with combination {' + '.join(names)}",
                extra={"strategy": ",".join(names), "phase": "combination", "outcome": "repaired"},
            )
            return repaired_by_combination(value, names)

    logger.info("Payload could not be repaired", extra={"outcome": "unrepairable", "payload_bytes": len(raw)})
    return unrepairable()


def repair_and_parse(raw: Any) -> RepairOutcome:
    """Parse *raw* as JSON, repairing common syntax defects if needed.

    Accepts ``str`` or UTF-8 ``bytes``.  Returns :class:`Success` or
    :class:`Failure`; never raises, whatever the input.

    Usage::

        outcome = repair_and_parse('{"a": 1,}')
        if outcome.ok:
            handle(outcome.value)
    """
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = bytes(raw).decode("utf-8")
        except UnicodeDecodeError:
            logger.info("Payload is not valid UTF-8", extra={"outcome": "unrepairable"})
            return unrepairable()
    if not isinstance(raw, str):
        return unrepairable()
    return run_pipeline(raw)
