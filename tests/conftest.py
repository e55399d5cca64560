"""
Shared test fixtures and configuration.
"""

import io
from pathlib import Path
from unittest.mock import patch

import pytest

from pacbridge.adapters.mock import MockExecutor
from pacbridge.core import context
from pacbridge.core.config.loader import Config
from pacbridge.core.terminal import Terminal

_PROXY_VARS = ("http_proxy", "https_proxy", "ftp_proxy", "no_proxy")


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path: Path):
    """No proxies, no user config file, no log env, no shared terminal, never root."""
    for name in _PROXY_VARS:
        monkeypatch.delenv(name, raising=False)
    for name in ("PACBRIDGE_LOG_LEVEL", "PACBRIDGE_LOG_FILE", "PACBRIDGE_LOG_FILE_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("PACBRIDGE_CONFIG", str(tmp_path / "absent.yml"))
    monkeypatch.setattr(context, "_terminal", None)
    with patch("pacbridge.core.engine.strategy.is_root", return_value=False):
        yield


@pytest.fixture
def executor() -> MockExecutor:
    return MockExecutor()


@pytest.fixture
def make_terminal():
    """Factory: a Terminal reading ``answers`` and writing to a StringIO."""

    def _make(answers: str = "") -> Terminal:
        return Terminal(stdin=io.StringIO(answers), stdout=io.StringIO())

    return _make


@pytest.fixture
def terminal(make_terminal) -> Terminal:
    return make_terminal()


@pytest.fixture
def make_pm(executor, terminal):
    """Factory: build a manager class against the mock executor."""

    def _make(cls, term: Terminal | None = None, **cfg):
        return cls(Config(**cfg), executor, term if term is not None else terminal)

    return _make
