"""
ReserBot Backend — Logging Helpers Tests
==========================================

What:  Access-log level selection and the request-ID log filter.
"""

import logging

import pytest

from reserbot.middleware.logging import access_log_level
from reserbot.middleware.request_id import RequestIDLogFilter, request_id_var


@pytest.mark.parametrize(
    "status,level",
    [
        (200, logging.INFO),
        (201, logging.INFO),
        (400, logging.WARNING),
        (404, logging.INFO),
        (500, logging.ERROR),
        (503, logging.ERROR),
    ],
)
def test_access_log_level(status, level):
    assert access_log_level(status) == level


def make_record() -> logging.LogRecord:
    return logging.LogRecord("reserbot", logging.INFO, __file__, 1, "msg", None, None)


def test_log_filter_outside_request():
    record = make_record()
    assert RequestIDLogFilter().filter(record) is True
    assert record.request_id == "-"


def test_log_filter_inside_request():
    token = request_id_var.set("abc123")
    try:
        record = make_record()
        RequestIDLogFilter().filter(record)
        assert record.request_id == "abc123"
    finally:
        request_id_var.reset(token)
