"""Tests for the stdlib logging bridge."""

import logging
import sys
from datetime import datetime
from unittest import mock

import pytest

from src.errors import RenameError
from src.handler import SinkHandler
from src.sink import RotatingFileSink
from src.writer import LogFlag


@pytest.fixture()
def app_logger(request):
    logger = logging.getLogger(f"tests.handler.{request.node.name}")
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    yield logger
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()


def _attach(logger, sink, fmt="%(levelname)s %(message)s"):
    handler = SinkHandler(sink)
    handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)
    return handler


def _read(path):
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


class TestSinkHandler:
    def test_formatted_records_reach_file(self, app_logger, log_path, clock):
        sink = RotatingFileSink(log_path, prefix="svc ", flags=LogFlag(0),
                                rotate="day", time_func=clock)
        _attach(app_logger, sink)
        app_logger.info("user %s logged in", "alice")
        app_logger.warning("disk at %d%%", 91)
        assert _read(log_path) == "svc INFO user alice logged in\nsvc WARNING disk at 91%\n"

    def test_level_filtering_stays_with_logging(self, app_logger, log_path, clock):
        sink = RotatingFileSink(log_path, flags=LogFlag(0), time_func=clock)
        handler = _attach(app_logger, sink)
        handler.setLevel(logging.WARNING)
        app_logger.info("quiet")
        app_logger.error("loud")
        assert _read(log_path) == "ERROR loud\n"

    def test_caller_is_logging_call_site(self, app_logger, log_path, clock):
        sink = RotatingFileSink(log_path, flags=LogFlag.SHORT_FILE, time_func=clock)
        _attach(app_logger, sink, fmt="%(message)s")
        line = sys._getframe().f_lineno; app_logger.info("here")  # noqa: E702
        assert _read(log_path) == f"test_handler.py:{line}: here\n"

    def test_rotates_through_logging(self, app_logger, log_path, clock):
        sink = RotatingFileSink(log_path, flags=LogFlag(0), rotate="day", time_func=clock)
        _attach(app_logger, sink, fmt="%(message)s")
        app_logger.info("monday")
        clock.now = datetime(2024, 1, 16, 0, 0, 1)
        app_logger.info("tuesday")
        assert _read(log_path + ".20240115") == "monday\n"
        assert _read(log_path) == "tuesday\n"

    def test_sink_errors_go_to_handle_error(self, app_logger, log_path, clock):
        sink = RotatingFileSink(log_path, rotate="day", time_func=clock)
        handler = _attach(app_logger, sink)
        with mock.patch.object(sink, "log", side_effect=RenameError("nope", log_path)), \
                mock.patch.object(handler, "handleError") as handle_error:
            app_logger.error("lost")
        handle_error.assert_called_once()
        assert handle_error.call_args[0][0].getMessage() == "lost"

    def test_close_closes_sink(self, log_path, clock):
        sink = RotatingFileSink(log_path, time_func=clock)
        handler = SinkHandler(sink)
        handler.close()
        assert sink._file.closed
