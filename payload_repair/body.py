"""Map a raw request body onto a parsed value or an error payload.

This is the glue a web layer calls in place of its stock JSON body parser:

* bodies whose content type is not JSON are left for other handlers;
* an empty body parses as ``{}`` (whitespace alone is not empty);
* oversized bodies are rejected before any repair work is done;
* everything else goes through :func:`repair_and_parse`.

No HTTP I/O happens here.  The caller decides status codes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from payload_repair.config import get_settings
from payload_repair.core.log import get_logger, timed
from payload_repair.core.pipeline import repair_and_parse
from payload_repair.core.result import RepairOutcome

logger = get_logger(__name__)

INVALID_JSON_BODY: dict[str, Any] = {"message": "Invalid JSON payload", "success": False}
TOO_LARGE_BODY: dict[str, Any] = {"message": "Payload too large", "success": False}


class PayloadTooLargeError(ValueError):
    """Body exceeds the configured size limit."""

    def __init__(self, size: int, limit: int):
        super().__init__(f"Body of {size} bytes exceeds the {limit}-byte limit")
        self.size = size
        self.limit = limit


@dataclass(frozen=True)
class BodyParseResult:
    handled: bool
    ok: bool = False
    data: Any = None
    error_body: dict[str, Any] | None = None
    outcome: RepairOutcome | None = None


def is_json_content_type(content_type: str | None) -> bool:
    """``True`` if *content_type* contains any configured JSON type.

    Containment, not equality: ``application/json-patch+json`` and
    ``application/json; charset=utf-8`` both count.
    """
    if not content_type:
        return False
    lowered = content_type.lower()
    return any(json_type in lowered for json_type in get_settings().json_content_types)


def check_body_size(body: str | bytes, max_bytes: int | None = None) -> None:
    """Raise :class:`PayloadTooLargeError` if *body* is over the limit."""
    limit = max_bytes if max_bytes is not None else get_settings().max_body_bytes
    size = len(body.encode("utf-8")) if isinstance(body, str) else len(body)
    if size > limit:
        raise PayloadTooLargeError(size, limit)


def parse_request_body(
    body: str | bytes | None,
    content_type: str | None,
    *,
    max_bytes: int | None = None,
) -> BodyParseResult:
    """Parse a request body, repairing malformed JSON where possible."""
    if not is_json_content_type(content_type):
        return BodyParseResult(handled=False)

    if not body:
        return BodyParseResult(handled=True, ok=True, data={})

    try:
        check_body_size(body, max_bytes)
    except PayloadTooLargeError as exc:
        logger.warning(str(exc), extra={"payload_bytes": exc.size, "outcome": "rejected"})
        return BodyParseResult(handled=True, error_body=dict(TOO_LARGE_BODY))

    with timed("repair_and_parse", logger=logger, payload_bytes=len(body)):
        outcome = repair_and_parse(body)

    if not outcome.ok:
        return BodyParseResult(handled=True, error_body=dict(INVALID_JSON_BODY), outcome=outcome)

    if outcome.repaired:
        logger.info(
            "Accepted repaired JSON body",
            extra={"strategy": ",".join(outcome.strategies), "outcome": outcome.kind.value},
        )
    return BodyParseResult(handled=True, ok=True, data=outcome.value, outcome=outcome)
