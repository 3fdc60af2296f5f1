"""Shared pytest fixtures for lf-simple tests."""

import pytest

from lfsimple.core.config import PluginConfig
from lfsimple.core.controller import SessionController
from tests.helpers import FakeHost


@pytest.fixture
def host(tmp_path):
    """Fake editor whose working directory is a fresh temp dir."""
    workdir = tmp_path / "work"
    workdir.mkdir()
    return FakeHost(cwd=str(workdir))


@pytest.fixture
def selection_file(tmp_path):
    """Path of the selection handoff file (not created)."""
    return tmp_path / "cache" / "lf_selection"


@pytest.fixture
def config(selection_file):
    """Default floating config with the selection file in tmp_path."""
    selection_file.parent.mkdir(parents=True, exist_ok=True)
    return PluginConfig(selection_file=str(selection_file))


@pytest.fixture
def controller(host, config):
    """Session controller over the fake host."""
    return SessionController(host, config)


@pytest.fixture
def mock_config_path(tmp_path, monkeypatch):
    """Point ~/.lf-simple/config.json at tmp_path for test isolation."""
    config_path = tmp_path / ".lf-simple" / "config.json"
    monkeypatch.setenv("LF_SIMPLE_CONFIG", str(config_path))
    return config_path


@pytest.fixture
def mock_nvim_dirs(tmp_path, monkeypatch):
    """Isolate Neovim's config and cache directories."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "xdg-cache"))
    monkeypatch.delenv("NVIM_APPNAME", raising=False)
    return tmp_path / "config" / "nvim"
