"""Shared pytest fixtures for integration tests."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

import pytest

from tests.utils.server import ServerProcessInfo, running_server

LIMITED_OPTIONS = {
    "--max-connections": "1",
    "--max-line-bytes": "64",
    "--max-body-bytes": "16",
}


@pytest.fixture(name="server_process")
def _server_process(tmp_path: Path) -> Iterator[ServerProcessInfo]:
    """A server with default limits, logging JSON at DEBUG to a temp file."""
    with running_server(tmp_path) as info:
        yield info


@pytest.fixture(name="limited_server_process")
def _limited_server_process(tmp_path: Path) -> Iterator[ServerProcessInfo]:
    """A server with one connection slot and small line and body limits."""
    with running_server(tmp_path, LIMITED_OPTIONS, settle=0.2) as info:
        yield info


@pytest.fixture()
def base_url(server_process: ServerProcessInfo) -> str:
    return server_process["base_url"]
