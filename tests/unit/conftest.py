"""Shared fixtures for unit tests."""

import io
import logging

import pytest

from strict_http.pipeline.line_reader import LineReader


@pytest.fixture(autouse=True)
def enable_log_propagation():
    """Ensure logs propagate to root so caplog can catch them."""
    logger = logging.getLogger("strict_http")
    old_propagate = logger.propagate
    logger.propagate = True
    yield
    logger.propagate = old_propagate


@pytest.fixture(name="make_reader")
def make_reader_fixture():
    """Build a LineReader over an in-memory byte stream."""

    def _make_reader(data: bytes, max_line_bytes: int = 0) -> LineReader:
        return LineReader(io.BytesIO(data), max_line_bytes)

    return _make_reader
