"""Shared fixtures for unit tests."""

import pytest

from echoai.config import reset_config

from .fakes import FakeUpstream


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Keep settings and config files of the developer machine out of tests."""
    monkeypatch.setenv("ECHOAI_CONFIG_PATH", str(tmp_path / "config.yaml"))
    monkeypatch.delenv("ECHOAI_DEFAULT_PROVIDER", raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def upstream():
    """Upstream service that accepts any key and streams "Hello world"."""
    return FakeUpstream()
