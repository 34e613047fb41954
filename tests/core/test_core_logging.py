"""Tests for the logging helpers with correlation and session ids."""

import json
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, cast

from skill_engine.core.logging import (
    LOG_FILE_PATH,
    LOG_SCHEMA_VERSION,
    CorrelationIdFilter,
    VersionedJsonFormatter,
    bind_correlation_id,
    get_application_id,
    get_correlation_id,
    get_logger,
    get_session_id,
    reset_correlation_id,
    session_context,
)
from skill_engine.services.skill import Skill


def _make_record(msg: str = "hello") -> logging.LogRecord:
    return logging.LogRecord(
        name="skill_engine.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg=msg,
        args=None,
        exc_info=None,
    )


def _engine_handlers() -> list[logging.Handler]:
    return [
        handler
        for handler in logging.getLogger().handlers
        if isinstance(handler.formatter, VersionedJsonFormatter)
    ]


def test_correlation_filter_attaches_context():
    """Filter should attach the bound ids onto log records."""
    cid_token = bind_correlation_id("abc123")
    try:
        with session_context("session-1", "amzn1.ask.skill.one"):
            record = _make_record()
            assert CorrelationIdFilter().filter(record) is True
        record_any = cast(Any, record)
        assert record_any.__dict__["correlation_id"] == "abc123"
        assert record_any.__dict__["session_id"] == "session-1"
        assert record_any.__dict__["application_id"] == "amzn1.ask.skill.one"
    finally:
        reset_correlation_id(cid_token)


def test_correlation_filter_uses_placeholder_when_unbound():
    """Unbound context variables render as a dash."""
    record = _make_record()
    CorrelationIdFilter().filter(record)
    record_any = cast(Any, record)
    assert record_any.__dict__["correlation_id"] == "-"
    assert record_any.__dict__["session_id"] == "-"
    assert record_any.__dict__["application_id"] == "-"


def test_session_context_nests_and_restores():
    """Inner session bindings win and the outer ones come back on exit."""
    with session_context("outer", "app-a"):
        with session_context("inner", None):
            assert get_session_id() == "inner"
            assert get_application_id() is None
        assert get_session_id() == "outer"
        assert get_application_id() == "app-a"
    assert get_session_id() is None
    assert get_application_id() is None
    assert get_correlation_id() is None


def test_formatter_renames_fields_and_stamps_schema_version():
    """Emitted JSON uses the short field names and carries the schema version."""
    handler = _engine_handlers()[0]
    with session_context("session-9", "amzn1.ask.skill.nine"):
        record = _make_record("Handling request: LaunchRequest")
        handler.filter(record)
    payload = json.loads(handler.format(record))

    assert payload["message"] == "Handling request: LaunchRequest"
    assert payload["session"] == "session-9"
    assert payload["app"] == "amzn1.ask.skill.nine"
    assert payload["cid"] == "-"
    assert payload["level"] == "INFO"
    assert payload["schema_version"] == LOG_SCHEMA_VERSION


def test_dispatch_binds_session_only_while_handling(request_factory):
    """Handlers see the request's session bound; it is cleared afterwards."""
    seen: list[tuple] = []
    skill = Skill("logging")

    @skill.intent("Peek")
    def peek(slots, attrs, request):
        seen.append((get_session_id(), get_application_id()))
        return "ok"

    skill.handle(request_factory(intent="Peek"), lambda response: None)

    assert seen == [("amzn1.echo-api.session.test", "amzn1.ask.skill.test")]
    assert get_session_id() is None


def test_get_logger_installs_shared_handlers_once():
    """Module loggers rely on one shared stream and file handler pair."""
    first = get_logger("skill_engine.tests.logging.first")
    second = get_logger("skill_engine.tests.logging.second")

    assert not first.handlers
    assert not second.handlers

    handlers = _engine_handlers()
    rotating = [handler for handler in handlers if isinstance(handler, RotatingFileHandler)]
    assert len(rotating) == 1
    assert Path(rotating[0].baseFilename) == LOG_FILE_PATH
    assert all(
        any(isinstance(flt, CorrelationIdFilter) for flt in handler.filters) for handler in handlers
    )
