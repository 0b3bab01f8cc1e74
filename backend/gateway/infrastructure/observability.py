"""Structured Logging — JSON/text formatters, secret redaction and gateway log setup.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Gateway extras (route, path, upstream, operation, error_code, status_code,
      duration_ms) surfaced in both formats when present
    - Bearer tokens and configured secret values never reach a handler
    - Third-party client loggers (zeep, httpx, azure) log at WARNING and above:
      their DEBUG/INFO output echoes SOAP envelopes and request headers

Design Decisions:
    - stdlib logging with a hand-rolled JSON formatter, no logging library
    - setup_logging called once on startup via lifespan and replaces any
      previously installed root handlers (uvicorn reload re-runs it)
"""

import logging
import json
import re
from collections.abc import Iterable
from datetime import datetime, timezone

EXTRA_FIELDS = (
    "route", "path", "upstream", "operation", "error_code",
    "status_code", "duration_ms",
)

QUIET_LOGGERS = ("zeep", "httpx", "httpcore", "azure")

REDACTED = "***"
_BEARER = re.compile(r"(Bearer\s+)[^\s\"',]+", re.IGNORECASE)


def record_extras(record: logging.LogRecord) -> dict:
    """Gateway extra fields set on a record, in a stable order."""
    return {
        key: record.__dict__[key]
        for key in EXTRA_FIELDS
        if record.__dict__.get(key) is not None
    }


class RedactSecretsFilter(logging.Filter):
    """Masks bearer tokens and known secret values in the rendered message."""

    def __init__(self, secrets: Iterable[str] = ()):
        super().__init__()
        self.secrets = tuple(s for s in secrets if s)

    def redact(self, text: str) -> str:
        text = _BEARER.sub(rf"\g<1>{REDACTED}", text)
        for secret in self.secrets:
            text = text.replace(secret, REDACTED)
        return text

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = self.redact(message)
        if redacted != message:
            record.msg, record.args = redacted, None
        return True


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(
                record.created, timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **record_extras(record),
        }
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable lines with gateway extras appended as key=value."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s - %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extras = record_extras(record)
        if not extras:
            return line
        fields = " ".join(f"{k}={v}" for k, v in extras.items())
        head, sep, tail = line.partition("\n")
        return f"{head} [{fields}]{sep}{tail}"


def setup_logging(
    level: str = "INFO", fmt: str = "json", secrets: Iterable[str] = (),
) -> logging.Handler:
    """Configure root logging for the gateway and return the installed handler."""
    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter() if fmt == "json" else TextFormatter())
    handler.addFilter(RedactSecretsFilter(secrets))
    logging.root.handlers[:] = [handler]
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return handler
