"""Logging helpers for the repair engine.

``setup_logging()``  configures a :class:`RotatingFileHandler` on the package
logger.

``get_logger(name)``  returns a logger scoped under ``payload_repair``.

``StructuredFormatter`` outputs JSON log lines for machine-readable logs.

``request_context`` / ``timed`` provide observability helpers for tracing
and performance measurement.

Only metadata is ever logged (strategy names, phases, sizes).  Payload text
is untrusted and never written to the log.
"""

from __future__ import annotations

import contextlib
import contextvars
import json
import logging
import time
import uuid
from collections.abc import Generator
from logging.handlers import RotatingFileHandler
from typing import Any

from payload_repair.config import get_settings

ROOT_LOGGER_NAME = "payload_repair"

# Per-thread / per-task correlation ID
_request_id: contextvars.ContextVar[str] = contextvars.ContextVar("payload_repair_request_id", default="")

_EXTRA_FIELDS = ("strategy", "phase", "outcome", "duration_ms", "payload_bytes", "step", "error")


# ── Structured JSON Formatter ───────────────────────────────────────────


class StructuredFormatter(logging.Formatter):
    """Emit each log record as a single JSON line.

    Fields: timestamp, level, logger, message, request_id, and any extras
    passed via the ``extra`` kwarg on the logging call.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        rid = _request_id.get()
        if rid:
            log_entry["request_id"] = rid

        for key in _EXTRA_FIELDS:
            val = getattr(record, key, None)
            if val is not None:
                log_entry[key] = val

        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = str(record.exc_info[1])

        return json.dumps(log_entry, ensure_ascii=False, default=str)


# ── Setup ───────────────────────────────────────────────────────────────


def setup_logging(*, json_format: bool = True) -> logging.Handler:
    """Attach a rotating file handler to the package logger.

    Args:
        json_format: If True (default), use StructuredFormatter (JSON lines).
                     If False, use the classic human-readable format.

    Returns the installed handler.
    """
    cfg = get_settings()
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for h in logger.handlers[:]:
        logger.removeHandler(h)
        h.close()

    handler = RotatingFileHandler(
        cfg.log_file,
        mode="a",
        encoding="utf-8",
        maxBytes=cfg.log_max_bytes,
        backupCount=cfg.log_backup_count,
    )

    if json_format:
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))

    logger.addHandler(handler)
    logger.setLevel(cfg.log_level)
    return handler


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger under the package namespace."""
    if not name or name == ROOT_LOGGER_NAME:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


# ── Observability helpers ───────────────────────────────────────────────


def set_request_id(rid: str | None = None) -> str:
    """Set a correlation ID for the current request.  Returns the ID."""
    value = rid or uuid.uuid4().hex[:12]
    _request_id.set(value)
    return value


def get_request_id() -> str:
    """Return the current request correlation ID (empty if unset)."""
    return _request_id.get()


def clear_request_id() -> None:
    """Clear the current request ID."""
    _request_id.set("")


@contextlib.contextmanager
def request_context(rid: str | None = None) -> Generator[str, None, None]:
    """Context manager that sets and restores a request correlation ID.

    Usage::

        with request_context() as rid:
            outcome = repair_and_parse(body)
            # all log lines within will include request_id
    """
    token = _request_id.set(rid or uuid.uuid4().hex[:12])
    try:
        yield _request_id.get()
    finally:
        _request_id.reset(token)


@contextlib.contextmanager
def timed(operation: str, logger: logging.Logger | None = None, **extra: Any) -> Generator[None, None, None]:
    """Context manager that logs the duration of an operation at DEBUG.

    Usage::

        with timed("repair_and_parse", payload_bytes=len(body)):
            outcome = run_pipeline(body)
    """
    log = logger or get_logger("timing")
    start = time.perf_counter()
    try:
        yield
    except Exception:
        elapsed = (time.perf_counter() - start) * 1000
        log.error(
            f"[FAILED] {operation} after {elapsed:.0f}ms",
            extra={"duration_ms": round(elapsed, 3), "step": operation, **extra},
        )
        raise
    else:
        elapsed = (time.perf_counter() - start) * 1000
        log.debug(
            f"[DONE] {operation} in {elapsed:.2f}ms",
            extra={"duration_ms": round(elapsed, 3), "step": operation, **extra},
        )
