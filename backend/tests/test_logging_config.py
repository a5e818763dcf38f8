"""
ETTU Backend — Logging Configuration Tests
============================================

What we test:
    ✅ JSON formatter output: core keys, request ID, extras, exceptions
    ✅ Request ID filter reads the current request's ID
    ✅ setup_logging honours LOG_LEVEL and LOG_FILE
"""

import json
import logging
import sys

import pytest

from ettu.config import load_settings
from ettu.logging_config import JsonFormatter, RequestIdFilter, build_formatter, setup_logging
from ettu.middleware.request_id import request_id_var


def _record(msg="hello %s", args=("world",), exc_info=None, **extra):
    record = logging.LogRecord("ettu.test", logging.INFO, __file__, 10, msg, args, exc_info)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)


class TestJsonFormatter:

    def test_core_fields(self):
        payload = json.loads(JsonFormatter().format(_record()))

        assert payload["level"] == "INFO"
        assert payload["logger"] == "ettu.test"
        assert payload["message"] == "hello world"
        assert "timestamp" in payload
        assert "request_id" not in payload

    def test_request_id_and_extras_are_included(self):
        record = _record(request_id="a1b2c3d4", method="GET", status=200)

        payload = json.loads(JsonFormatter().format(record))

        assert payload["request_id"] == "a1b2c3d4"
        assert payload["method"] == "GET"
        assert payload["status"] == 200

    def test_exception_is_rendered(self):
        try:
            raise RuntimeError("kaput")
        except RuntimeError:
            record = _record(exc_info=sys.exc_info())

        payload = json.loads(JsonFormatter().format(record))

        assert "RuntimeError: kaput" in payload["exc_info"]

    def test_build_formatter_selects_by_name(self):
        assert isinstance(build_formatter("json"), JsonFormatter)
        assert not isinstance(build_formatter("text"), JsonFormatter)


class TestRequestIdFilter:

    def test_stamps_current_request_id(self):
        token = request_id_var.set("deadbeef")
        try:
            record = _record()
            assert RequestIdFilter().filter(record) is True
        finally:
            request_id_var.reset(token)

        assert record.request_id == "deadbeef"

    def test_outside_a_request_id_is_empty(self):
        record = _record()
        RequestIdFilter().filter(record)

        assert record.request_id == ""


class TestSetupLogging:

    def test_sets_root_level(self, restore_root_logger):
        setup_logging(load_settings(_env_file=None, log_level="ERROR"))

        assert restore_root_logger.level == logging.ERROR

    def test_writes_to_log_file(self, restore_root_logger, tmp_path):
        log_file = tmp_path / "ettu.log"
        setup_logging(load_settings(_env_file=None, log_level="INFO", log_format="json", log_file=str(log_file)))

        logging.getLogger("ettu.test").info("written to file")
        for handler in restore_root_logger.handlers:
            handler.flush()

        line = log_file.read_text(encoding="utf-8").strip().splitlines()[-1]
        assert json.loads(line)["message"] == "written to file"
