"""JSON log output must stay machine-parseable."""

from __future__ import annotations

import json
import logging
import sys

from app.core.logging import _ContainerFormatter, _JsonFormatter


def _record(msg: str = "test message", **extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="app.services.registry_service",
        level=logging.INFO,
        pathname="registry_service.py",
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_produces_valid_json() -> None:
    parsed = json.loads(_JsonFormatter().format(_record("Issued credential")))
    assert parsed["level"] == "INFO"
    assert parsed["logger"] == "app.services.registry_service"
    assert parsed["message"] == "Issued credential"
    assert "timestamp" in parsed


def test_json_formatter_includes_request_fields() -> None:
    record = _record(request_id="abc-123", method="POST", path="/v1/credentials")
    parsed = json.loads(_JsonFormatter().format(record))
    assert parsed["request_id"] == "abc-123"
    assert parsed["method"] == "POST"
    assert parsed["path"] == "/v1/credentials"


def test_json_formatter_includes_registry_fields() -> None:
    record = _record(credential_id="0xabc", event="CredentialRevoked")
    parsed = json.loads(_JsonFormatter().format(record))
    assert parsed["credential_id"] == "0xabc"
    assert parsed["event"] == "CredentialRevoked"


def test_json_formatter_omits_missing_fields() -> None:
    parsed = json.loads(_JsonFormatter().format(_record()))
    assert "credential_id" not in parsed
    assert "user_id" not in parsed


def test_json_formatter_includes_exception_info() -> None:
    try:
        raise ValueError("test error")
    except ValueError:
        record = _record("Something failed")
        record.exc_info = sys.exc_info()
        output = _JsonFormatter().format(record)

    parsed = json.loads(output)
    assert "ValueError: test error" in parsed["exception"]


def test_container_formatter_is_not_json() -> None:
    output = _ContainerFormatter().format(_record("server started"))
    assert "INFO" in output
    assert "server started" in output
    try:
        json.loads(output)
        raise AssertionError("Container format should not be valid JSON")
    except json.JSONDecodeError:
        pass
