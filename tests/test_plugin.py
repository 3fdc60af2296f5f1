"""Tests for the Neovim remote plugin."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from lfsimple.core.config import PluginConfig
from lfsimple.core.host import LOG_ERROR
from lfsimple.nvim.plugin import LfSimplePlugin


@pytest.fixture
def nvim(tmp_path):
    """Mock Neovim with a single empty window."""
    nvim = MagicMock()
    nvim.vars = {}
    nvim.options = {"columns": 100, "lines": 30}
    nvim.buffers = []
    nvim.funcs.stdpath.return_value = str(tmp_path / "cache")
    nvim.funcs.getcwd.return_value = str(tmp_path)
    nvim.funcs.executable.return_value = 1
    nvim.funcs.jobstart.return_value = 9
    nvim.api.get_current_win.return_value = SimpleNamespace(handle=1000)
    nvim.api.create_buf.return_value = SimpleNamespace(handle=5)
    nvim.api.open_win.return_value = SimpleNamespace(handle=1001)
    return nvim


@pytest.fixture
def plugin(nvim, mock_config_path, monkeypatch):
    monkeypatch.setattr("lfsimple.nvim.plugin.setup_logging", lambda *_a, **_k: None)
    return LfSimplePlugin(nvim)


def test_is_remote_plugin():
    """Test the class is registered as a pynvim plugin."""
    assert getattr(LfSimplePlugin, "_nvim_plugin", False)


def test_controller_config(plugin, nvim, tmp_path):
    """Test the controller picks up g:lf_simple and the cache dir."""
    nvim.vars["lf_simple"] = {"floating": False}

    config = plugin.controller.config

    assert config.floating is False
    assert config.selection_file == str(tmp_path / "cache" / "lf_selection")


def test_controller_bad_config(plugin, nvim):
    """Test invalid options fall back to defaults with an error."""
    nvim.vars["lf_simple"] = {"bogus": True}

    config = plugin.controller.config

    assert config.floating is True
    message, level, _ = nvim.api.notify.call_args.args
    assert "Unknown option: bogus" in message
    assert level == LOG_ERROR


def test_lf_command_starts_job(plugin, nvim, tmp_path):
    """Test :Lf spawns lf in the given directory."""
    target = tmp_path / "proj"
    target.mkdir()

    plugin.lf_command([str(target)])

    argv, opts = nvim.funcs.jobstart.call_args.args
    assert argv == [
        "lf",
        "-selection-path",
        str(tmp_path / "cache" / "lf_selection"),
        str(target),
    ]
    assert opts["cwd"] == str(target)
    assert plugin.controller.state == "active"


def test_job_exit_tears_down(plugin, nvim, tmp_path):
    """Test LfSimpleExit closes the session."""
    nvim.api.win_is_valid.return_value = True
    nvim.api.buf_is_valid.return_value = True

    plugin.lf_command([])
    plugin.on_job_exit([9, 0, "exit"])

    assert plugin.controller.state == "idle"
    nvim.api.win_close.assert_called_once_with(1001, True)
    nvim.api.buf_delete.assert_called_once_with(5, {"force": True})


def test_lf_command_without_args(plugin):
    """Test :Lf with no argument starts in the cwd."""
    controller = MagicMock()
    plugin._controller = controller

    plugin.lf_command([])

    controller.start.assert_called_once_with(None)


def test_setup_replaces_netrw(plugin, nvim):
    """Test LfSimpleSetup applies options and disables netrw when asked."""
    plugin.setup([{"replace_netrw": True, "window": {"border": "single"}}])

    assert plugin.controller.config.replace_netrw is True
    assert plugin.controller.config.window.border == "single"
    assert nvim.vars["loaded_netrw"] == 1
    assert nvim.vars["loaded_netrwPlugin"] == 1


def test_setup_updates_existing_controller(plugin, nvim):
    """Test setup after first use swaps the config in place."""
    controller = plugin.controller

    plugin.setup([{"floating": False}])

    assert plugin.controller is controller
    assert controller.config.floating is False
    assert "loaded_netrw" not in nvim.vars


def test_setup_rejects_non_dict(plugin, nvim):
    plugin.setup(["nope"])

    message, level, _ = nvim.api.notify.call_args.args
    assert "expects a dict" in message
    assert level == LOG_ERROR


def test_directory_buffer_replaced(plugin, nvim, tmp_path):
    """Test entering a directory buffer opens lf there instead."""
    controller = SimpleNamespace(
        config=PluginConfig(replace_netrw=True), start=MagicMock()
    )
    plugin._controller = controller

    plugin.on_buf_enter(["3", f"{tmp_path}/"])

    nvim.api.buf_delete.assert_called_once_with(3, {"force": True})
    controller.start.assert_called_once_with(str(tmp_path))


def test_directory_buffer_kept_when_disabled(plugin, nvim, tmp_path):
    """Test directory buffers are left alone unless replace_netrw is set."""
    controller = SimpleNamespace(config=PluginConfig(), start=MagicMock())
    plugin._controller = controller

    plugin.on_buf_new_file(["3", str(tmp_path)])

    nvim.api.buf_delete.assert_not_called()
    controller.start.assert_not_called()


def test_file_buffer_ignored(plugin, nvim, tmp_path):
    """Test ordinary files never trigger lf."""
    controller = SimpleNamespace(
        config=PluginConfig(replace_netrw=True), start=MagicMock()
    )
    plugin._controller = controller
    target = tmp_path / "a.txt"
    target.write_text("a")

    plugin.on_buf_enter(["3", str(target)])

    controller.start.assert_not_called()


def test_unnamed_buffer_ignored(plugin, nvim):
    """Test entering an unnamed buffer never triggers lf."""
    controller = SimpleNamespace(
        config=PluginConfig(replace_netrw=True), start=MagicMock()
    )
    plugin._controller = controller

    plugin.on_buf_enter(["1", ""])

    nvim.api.buf_delete.assert_not_called()
    controller.start.assert_not_called()


def test_key_dispatch(plugin):
    """Test LfSimpleKey runs the mapped action."""
    pressed = []
    plugin.host.map_key(5, "n", "<Esc>", lambda: pressed.append(True))

    plugin.on_key([1])

    assert pressed == [True]
