"""Pytest configuration and fixtures."""

import io
import logging
import textwrap
from pathlib import Path

import pytest

from hostcheck.diagnostics import DiagnosticChannel, HostDiagnostics


@pytest.fixture(autouse=True)
def cleanup_loggers():
    """Clean up hostcheck loggers after each test to prevent name collisions."""
    yield

    loggers_to_remove = [
        name
        for name in logging.Logger.manager.loggerDict.keys()
        if name.startswith("hostcheck")
    ]

    for name in loggers_to_remove:
        logger = logging.getLogger(name)
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()
        del logging.Logger.manager.loggerDict[name]


@pytest.fixture
def stream():
    return io.StringIO()


@pytest.fixture
def channel(stream):
    return DiagnosticChannel(stream=stream)


@pytest.fixture
def diagnostics(channel):
    return HostDiagnostics(channel=channel)


@pytest.fixture
def write_script(tmp_path):
    """Write a test module into tmp_path/scripts and return its directory."""

    def _write(name: str, content: str) -> Path:
        scripts = tmp_path / "scripts"
        scripts.mkdir(exist_ok=True)
        (scripts / f"{name}.py").write_text(textwrap.dedent(content))
        return scripts

    return _write
