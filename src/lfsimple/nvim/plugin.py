"""Neovim remote plugin for lf-simple.

Registers:
- :Lf [dir]              open lf (in dir, or the current directory)
- LfSimpleSetup({opts})  merge options over g:lf_simple and the config file
- BufEnter/BufNewFile    replace directory buffers with lf (replace_netrw)
- LfSimpleExit/LfSimpleKey, called back by the terminal job and mappings

Run :UpdateRemotePlugins after installing (lf-simple setup does this).
"""

import os

import pynvim
from loguru import logger

from lfsimple.core.config import PluginConfig, load_plugin_config
from lfsimple.core.controller import SessionController
from lfsimple.core.errors import ConfigError, HostError
from lfsimple.core.host import LOG_ERROR
from lfsimple.core.logging_config import setup_logging
from lfsimple.nvim.host import EXIT_FUNCTION, KEY_FUNCTION, NvimHost

OPTIONS_VAR = "lf_simple"

DIRECTORY_EVENT_EVAL = '[expand("<abuf>"), nvim_buf_get_name(str2nr(expand("<abuf>")))]'


@pynvim.plugin
class LfSimplePlugin:
    """Remote plugin object; one per Neovim instance."""

    def __init__(self, nvim: pynvim.Nvim) -> None:
        self.nvim = nvim
        self.host = NvimHost(nvim)
        self._controller: SessionController | None = None
        self._setup_options: dict = {}

    @property
    def controller(self) -> SessionController:
        """The session controller, built on first use."""
        if self._controller is None:
            config = self._load_config()
            setup_logging(config.log_level)
            self._controller = SessionController(self.host, config)
        return self._controller

    def _load_config(self) -> PluginConfig:
        editor_options = self.nvim.vars.get(OPTIONS_VAR) or {}
        try:
            config = load_plugin_config(editor_options, self._setup_options)
        except ConfigError as e:
            self.host.notify(f"lf-simple: {e}; using defaults", LOG_ERROR)
            config = PluginConfig()
        return config.with_selection_default(self.host.cache_dir())

    @pynvim.command("Lf", nargs="?", complete="dir")
    def lf_command(self, args: list[str]) -> None:
        """Open lf, optionally in a given directory."""
        self.controller.start(args[0] if args else None)

    @pynvim.function("LfSimpleSetup", sync=True)
    def setup(self, args: list) -> None:
        """Merge user options and apply them."""
        options = args[0] if args else {}
        if not isinstance(options, dict):
            self.host.notify("lf-simple: LfSimpleSetup() expects a dict", LOG_ERROR)
            return
        self._setup_options = options
        config = self._load_config()
        setup_logging(config.log_level)
        if self._controller is None:
            self._controller = SessionController(self.host, config)
        else:
            self._controller.config = config

        if config.replace_netrw:
            self.nvim.vars["loaded_netrw"] = 1
            self.nvim.vars["loaded_netrwPlugin"] = 1

    @pynvim.function(EXIT_FUNCTION)
    def on_job_exit(self, args: list) -> None:
        job_id, exit_code = args[0], args[1]
        self.host.dispatch_exit(job_id, exit_code)

    @pynvim.function(KEY_FUNCTION)
    def on_key(self, args: list) -> None:
        self.host.dispatch_key(args[0])

    @pynvim.autocmd("BufEnter", pattern="*", eval=DIRECTORY_EVENT_EVAL)
    def on_buf_enter(self, event: list[str]) -> None:
        self.replace_directory_buffer(event)

    @pynvim.autocmd("BufNewFile", pattern="*", eval=DIRECTORY_EVENT_EVAL)
    def on_buf_new_file(self, event: list[str]) -> None:
        self.replace_directory_buffer(event)

    def replace_directory_buffer(self, event: list[str]) -> None:
        """Swap a directory buffer for an lf session rooted at it.

        Args:
            event: [buffer number, absolute buffer name] from the autocmd.
        """
        buffer, path = event
        if not path or not os.path.isdir(path):
            return
        controller = self.controller
        if not controller.config.replace_netrw:
            return
        try:
            self.host.delete_buffer(int(buffer))
        except HostError as e:
            logger.bind(operation="replace_netrw", status="error").warning(
                f"Could not delete directory buffer {buffer}: {e}"
            )
        controller.start(os.path.normpath(path))
