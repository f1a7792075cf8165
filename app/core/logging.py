"""Logging configuration for credential-registry.

WHAT THE REGISTRY LOGS
------------------------
Every state change writes one INFO line (issued, revoked, institution
authorized, administrator transferred).  A denied access check or a
rejected duplicate writes a WARNING line naming the caller.  A failing event
subscriber writes an ERROR line with its traceback.  Reading the log for
one credential id therefore tells its whole story:

  INFO     Issued credential_id=0x3f... issuer=did:web:uni.example
  WARNING  Access denied: user=mallory action=revoke credential_id=0x3f...
  INFO     Revoked credential_id=0x3f... by=did:web:uni.example

Logs answer "what happened to THIS credential".  Counting how often
something happens is a job for app/core/metrics.py, not for grepping
log lines.

WHY TWO FORMATTERS
--------------------
  _ContainerFormatter: one readable line per record, for a developer
    watching a terminal.  WARNING and above carry [file:line] so a
    rejection can be traced back to the check that raised it.

  _JsonFormatter: one JSON object per line, for an aggregator.
    Request context (request_id, method, path, status_code, ...) and
    registry context (credential_id, event) become top-level keys, so
    a dashboard query is a field match instead of a regex:

      event == "CredentialRevoked" AND request_id == "req-abc"

LOG_JSON=true switches to the JSON formatter (see app/core/config.py).
"""

from __future__ import annotations

import json
import logging
import sys


class _ContainerFormatter(logging.Formatter):
    """Single-line formatter for container stdout.

    WARNING and above get a trailing [filename:lineno]; tracebacks are
    included when exc_info is set.
    """

    _BASE_FMT = "%(asctime)s %(levelname)-8s %(name)s  %(message)s"
    _LOC_SUFFIX = "  [%(filename)s:%(lineno)d]"

    def __init__(self) -> None:
        super().__init__(datefmt="%Y-%m-%dT%H:%M:%S%z")

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        base = super().formatTime(record, datefmt)
        ms = int(record.msecs)
        # Insert .NNN before the timezone offset (last 5 chars: +0000)
        return f"{base[:-5]}.{ms:03d}{base[-5:]}"

    def format(self, record: logging.LogRecord) -> str:
        if record.levelno >= logging.WARNING:
            self._style._fmt = self._BASE_FMT + self._LOC_SUFFIX
        else:
            self._style._fmt = self._BASE_FMT
        return super().format(record)


class _JsonFormatter(logging.Formatter):
    """JSON Lines formatter."""

    _CONTEXT_FIELDS = (
        "request_id",
        "method",
        "path",
        "user_id",
        "status_code",
        "duration_ms",
        "credential_id",
        "event",
    )

    def __init__(self) -> None:
        super().__init__(datefmt="%Y-%m-%dT%H:%M:%S%z")

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, object] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key in self._CONTEXT_FIELDS:
            value = getattr(record, key, None)
            if value is not None:
                log_entry[key] = value

        if record.exc_info and record.exc_info[0] is not None:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


def setup_logging(level_name: str, *, json_format: bool = False) -> None:
    """Configure the root logger to write to stdout.

    Args:
        level_name: debug/info/warning/error; unknown names fall back to info.
        json_format: emit JSON lines instead of the container format.
    """
    level = getattr(logging, level_name.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(_JsonFormatter() if json_format else _ContainerFormatter())

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(handler)

    # Keep third-party loggers from flooding at DEBUG
    for name in ("uvicorn", "uvicorn.access", "uvicorn.error", "httpcore", "httpx"):
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
