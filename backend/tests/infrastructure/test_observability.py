"""Structured Logging — formatters, redaction and root setup."""

import json
import logging

import pytest

from gateway.infrastructure.observability import (
    JSONFormatter,
    RedactSecretsFilter,
    TextFormatter,
    setup_logging,
)


def _record(msg: str, *args, **extra) -> logging.LogRecord:
    return logging.makeLogRecord({
        "name": "gateway.test", "levelname": "INFO", "levelno": logging.INFO,
        "msg": msg, "args": args or None, **extra,
    })


@pytest.fixture
def restore_root_logging():
    handlers, level = logging.root.handlers[:], logging.root.level
    yield
    logging.root.handlers[:] = handlers
    logging.root.setLevel(level)


def test_json_formatter_includes_gateway_extras():
    record = _record(
        "SOAP call succeeded", upstream="sms_soap", operation="SendSMS",
        duration_ms=42, unrelated="x",
    )
    log = json.loads(JSONFormatter().format(record))
    assert log["message"] == "SOAP call succeeded"
    assert log["level"] == "INFO"
    assert log["upstream"] == "sms_soap"
    assert log["operation"] == "SendSMS"
    assert log["duration_ms"] == 42
    assert "unrelated" not in log


def test_text_formatter_appends_extras():
    line = TextFormatter().format(_record("HTTP 404", status_code=404, path="/x"))
    assert line.endswith("HTTP 404 [path=/x status_code=404]")


def test_text_formatter_without_extras_is_plain():
    assert TextFormatter().format(_record("started")).endswith("- started")


def test_redaction_masks_bearer_and_secret_values():
    f = RedactSecretsFilter(secrets=["rop-pass", ""])
    record = _record("forwarding Authorization: Bearer abc.def.ghi with %s", "rop-pass")
    assert f.filter(record)
    assert record.getMessage() == "forwarding Authorization: Bearer *** with ***"


def test_redaction_leaves_clean_messages_untouched():
    record = _record("lookup %s", "SearchCompany")
    RedactSecretsFilter(secrets=["rop-pass"]).filter(record)
    assert record.args == ("SearchCompany",)


def test_setup_logging_replaces_handlers_and_quiets_clients(restore_root_logging):
    setup_logging("INFO", "json")
    handler = setup_logging("debug", "text", secrets=["s3cret"])
    assert logging.root.handlers == [handler]
    assert logging.root.level == logging.DEBUG
    assert isinstance(handler.formatter, TextFormatter)
    assert logging.getLogger("zeep").level == logging.WARNING
    assert logging.getLogger("azure").level == logging.WARNING
