from __future__ import annotations

import logging

from devmentor.core.logging import (
    DomainDefaultFilter,
    SecretRedactionFilter,
    SuppressHealthCheckFilter,
    get_domain_logger,
    redact_secrets,
)


def test_redacts_known_secret_shapes():
    text = redact_secrets(
        "x-goog-api-key: abc123 api_key=def456 Authorization: Bearer tok789 "
        "url=https://host/models/m:generateContent?key=ghi012&alt=json"
    )
    for secret in ("abc123", "def456", "tok789", "ghi012"):
        assert secret not in text
    assert "alt=json" in text
    assert text.count("[REDACTED]") == 4


def test_redaction_filter_rewrites_formatted_message():
    record = logging.LogRecord("t", logging.INFO, __file__, 1, "calling %s", ("?key=secret",), None)
    assert SecretRedactionFilter().filter(record)
    assert record.getMessage() == "calling ?key=[REDACTED]"


def test_domain_logger_tags_records(caplog):
    logger = get_domain_logger("devmentor.tests", "sandbox")
    with caplog.at_level(logging.INFO, logger="devmentor.tests"):
        logger.info("ran snippet")
    assert caplog.records[-1].domain == "sandbox"

    plain = logging.LogRecord("t", logging.INFO, __file__, 1, "msg", (), None)
    DomainDefaultFilter().filter(plain)
    assert plain.domain == "app"


def test_health_probe_access_lines_are_dropped():
    probe = logging.LogRecord("uvicorn.access", logging.INFO, __file__, 1, '"GET /health HTTP/1.1" 200', (), None)
    other = logging.LogRecord("uvicorn.access", logging.INFO, __file__, 1, '"POST /sandbox/run HTTP/1.1" 200', (), None)
    assert SuppressHealthCheckFilter().filter(probe) is False
    assert SuppressHealthCheckFilter().filter(other) is True
