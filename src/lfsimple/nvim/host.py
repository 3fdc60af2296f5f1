"""Neovim implementation of the editor host, over pynvim.

Terminal job exits and key presses come back from Neovim as calls to the
plugin's remote functions (EXIT_FUNCTION and KEY_FUNCTION). Those are
asynchronous notifications, so they are processed on the plugin host's
event loop after the Neovim-side callback has returned.
"""

import itertools
from collections.abc import Callable, Iterator
from contextlib import contextmanager

from pynvim import Nvim
from pynvim.api import NvimError

from lfsimple.core.errors import HostError
from lfsimple.core.host import LOG_INFO, ExitHandler, Host, KeyAction

EXIT_FUNCTION = "LfSimpleExit"
KEY_FUNCTION = "LfSimpleKey"


@contextmanager
def _api_errors() -> Iterator[None]:
    """Translate pynvim API failures into HostError."""
    try:
        yield
    except NvimError as e:
        raise HostError(str(e)) from e


class NvimHost(Host):
    """Host backed by a pynvim connection."""

    def __init__(self, nvim: Nvim) -> None:
        self.nvim = nvim
        self._exit_handlers: dict[int, ExitHandler] = {}
        self._key_actions: dict[int, tuple[int, Callable[[], None]]] = {}
        self._tokens = itertools.count(1)

    def executable(self, name: str) -> bool:
        return self.nvim.funcs.executable(name) == 1

    def cwd(self) -> str:
        return self.nvim.funcs.getcwd()

    def cache_dir(self) -> str:
        """Return stdpath("cache")."""
        return self.nvim.funcs.stdpath("cache")

    def notify(self, message: str, level: int = LOG_INFO) -> None:
        self.nvim.api.notify(message, level, {})

    def current_window(self) -> int:
        return self.nvim.api.get_current_win().handle

    def window_buffer(self, window: int) -> int:
        with _api_errors():
            return self.nvim.api.win_get_buf(window).handle

    def editor_size(self) -> tuple[int, int]:
        return self.nvim.options["columns"], self.nvim.options["lines"]

    def listed_buffers(self) -> list[tuple[int, str]]:
        buffers = []
        for buf in self.nvim.buffers:
            if self.nvim.api.get_option_value("buflisted", {"buf": buf.handle}):
                buffers.append((buf.handle, buf.name))
        return buffers

    def find_buffer(self, path: str) -> int | None:
        for buf in self.nvim.buffers:
            if buf.name == path:
                return buf.handle
        return None

    def is_valid_window(self, window: int) -> bool:
        return bool(self.nvim.api.win_is_valid(window))

    def is_valid_buffer(self, buffer: int) -> bool:
        return bool(self.nvim.api.buf_is_valid(buffer))

    def create_scratch_buffer(self, filetype: str) -> int:
        with _api_errors():
            buffer = self.nvim.api.create_buf(False, True).handle
            self.nvim.api.set_option_value("filetype", filetype, {"buf": buffer})
        return buffer

    def open_float(self, buffer: int, config: dict) -> int:
        with _api_errors():
            window = self.nvim.api.open_win(buffer, True, config).handle
            self.nvim.api.set_option_value("winhl", "Normal:Normal", {"win": window})
        return window

    def set_window_buffer(self, window: int, buffer: int) -> None:
        with _api_errors():
            self.nvim.api.win_set_buf(window, buffer)

    def set_current_window(self, window: int) -> None:
        with _api_errors():
            self.nvim.api.set_current_win(window)

    def close_window(self, window: int) -> None:
        with _api_errors():
            self.nvim.api.win_close(window, True)

    def delete_buffer(self, buffer: int) -> None:
        with _api_errors():
            self.nvim.api.buf_delete(buffer, {"force": True})
        for token in [t for t, (b, _) in self._key_actions.items() if b == buffer]:
            del self._key_actions[token]

    def open_file(self, path: str) -> None:
        with _api_errors():
            self.nvim.command(f"edit {self.nvim.funcs.fnameescape(path)}")

    def start_terminal(self, argv: list[str], cwd: str, on_exit: ExitHandler) -> int:
        with _api_errors():
            job_id = self.nvim.funcs.jobstart(
                argv, {"term": True, "cwd": cwd, "on_exit": EXIT_FUNCTION}
            )
        if job_id > 0:
            self._exit_handlers[job_id] = on_exit
        return job_id

    def map_key(self, buffer: int, mode: str, lhs: str, action: KeyAction) -> None:
        if isinstance(action, str):
            rhs = action
        else:
            token = next(self._tokens)
            self._key_actions[token] = (buffer, action)
            rhs = f"<Cmd>call {KEY_FUNCTION}({token})<CR>"
        with _api_errors():
            self.nvim.api.buf_set_keymap(
                buffer, mode, lhs, rhs, {"noremap": True, "silent": True}
            )

    def start_insert(self) -> None:
        self.nvim.command("startinsert")

    def dispatch_exit(self, job_id: int, exit_code: int) -> None:
        """Run the exit handler registered for job_id, once."""
        handler = self._exit_handlers.pop(job_id, None)
        if handler is not None:
            handler(job_id, exit_code)

    def dispatch_key(self, token: int) -> None:
        """Run the action bound to a key mapping token."""
        entry = self._key_actions.get(token)
        if entry is not None:
            entry[1]()
