"""Shared fixtures for payload-repair tests."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

# Ensure project root is on path
ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

# ── Environment isolation ───────────────────────────────────────────────


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    """Isolate every test from real env vars and filesystem side effects."""
    for var in (
        "PAYLOAD_REPAIR_MAX_BODY_BYTES",
        "PAYLOAD_REPAIR_JSON_CONTENT_TYPES",
        "PAYLOAD_REPAIR_LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("PAYLOAD_REPAIR_LOG_FILE", str(tmp_path / "payload_repair.log"))

    # Clear the cached settings singleton so each test picks up monkeypatched env
    from payload_repair.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# ── Reusable fixtures ──────────────────────────────────────────────────

VALID_DOCUMENTS = [
    "{}",
    "[]",
    '"plain string"',
    "42",
    "-0.5e10",
    "true",
    "null",
    '{"a": 1}',
    '{"a":"b","c":[1,2,3]}',
    '["x"]',
    '["a", "b", "c"]',
    '{"a": ["x", "y"], "b": {"c": "d"}}',
    '{"desc": "1/4\\"-1\\""}',
    '{"quote": "she said \\"hi\\", then left"}',
    '{"path": "C:\\\\temp\\\\file.txt"}',
    '{"url": "http:\\/\\/example.com"}',
    '{"text": "line1\\nline2\\ttab\\r"}',
    '{"unicode": "\\u00e9t\\u00e9", "raw": "été"}',
    '{"apostrophe": "it\'s fine"}',
    '{"tricky": ",}", "also": ",]", "key_like": "{a: 1}"}',
    '{"x": "a, b: c", "y": "{k: v}"}',
    '{"nested": {"deep": {"deeper": [{"k": "v"}, null, false]}}}',
    '{\n  "pretty": true,\n  "items": [\n    1,\n    2\n  ]\n}',
    '  {"padded": "yes"}  ',
    '{"ends_in_backslash": "\\\\"}',
    '{"empty": "", "zero": 0}',
    '[{"a": "\\"quoted\\""}, {"b": "x"}]',
]


@pytest.fixture(params=VALID_DOCUMENTS)
def valid_document(request):
    """Each entry is valid JSON; the fixture checks that up front."""
    json.loads(request.param)
    return request.param
