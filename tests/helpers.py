"""Test helpers for lf-simple."""

import itertools

from lfsimple.core.errors import HostError
from lfsimple.core.host import Host


class FakeHost(Host):
    """In-memory editor host.

    Starts with one window (1000) showing one unnamed listed buffer (1).
    Every mutating call is appended to `events` as (method, *args) so tests
    can assert ordering.
    """

    def __init__(self, cwd: str = "/", executables: set[str] | None = None) -> None:
        self._cwd = cwd
        self.executables = {"lf"} if executables is None else executables
        self.buffers: dict[int, dict] = {}
        self.windows: dict[int, dict] = {}
        self.events: list[tuple] = []
        self.notifications: list[tuple[str, int]] = []
        self.mappings: dict[tuple[int, str, str], object] = {}
        self.jobs: dict[int, dict] = {}
        self.mode = "normal"
        self.spawn_result: int | None = None
        self.spawn_error: str | None = None
        self.fail_delete: set[int] = set()
        self.fail_open: dict[str, str] = {}
        self._buffer_ids = itertools.count(1)
        self._window_ids = itertools.count(1000)
        self._job_ids = itertools.count(3)

        first = self._new_buffer("", listed=True)
        self.current = self._new_window(first, floating=False)

    # Test setup helpers

    def _new_buffer(self, name: str, listed: bool, filetype: str = "") -> int:
        buffer = next(self._buffer_ids)
        self.buffers[buffer] = {"name": name, "listed": listed, "filetype": filetype}
        return buffer

    def _new_window(self, buffer: int, floating: bool, config: dict | None = None) -> int:
        window = next(self._window_ids)
        self.windows[window] = {"buffer": buffer, "floating": floating, "config": config}
        return window

    def add_file_buffer(self, path: str, listed: bool = True) -> int:
        """Open a buffer for path without showing it."""
        return self._new_buffer(str(path), listed=listed)

    def buffer_names(self) -> set[str]:
        return {b["name"] for b in self.buffers.values() if b["name"]}

    def floating_windows(self) -> list[int]:
        return [w for w, info in self.windows.items() if info["floating"]]

    def exit_job(self, job_id: int, exit_code: int = 0) -> None:
        """Deliver a job exit, as the editor's task queue would."""
        self.jobs[job_id]["on_exit"](job_id, exit_code)

    def press(self, buffer: int, mode: str, lhs: str) -> None:
        """Trigger a callable mapping."""
        action = self.mappings[(buffer, mode, lhs)]
        assert callable(action)
        action()

    # Host interface

    def executable(self, name: str) -> bool:
        return name in self.executables

    def cwd(self) -> str:
        return self._cwd

    def notify(self, message: str, level: int = 2) -> None:
        self.notifications.append((message, level))

    def current_window(self) -> int:
        return self.current

    def window_buffer(self, window: int) -> int:
        if window not in self.windows:
            raise HostError(f"Invalid window id: {window}")
        return self.windows[window]["buffer"]

    def editor_size(self) -> tuple[int, int]:
        return 120, 40

    def listed_buffers(self) -> list[tuple[int, str]]:
        return [(b, info["name"]) for b, info in self.buffers.items() if info["listed"]]

    def find_buffer(self, path: str) -> int | None:
        for buffer, info in self.buffers.items():
            if info["name"] == path:
                return buffer
        return None

    def is_valid_window(self, window: int) -> bool:
        return window in self.windows

    def is_valid_buffer(self, buffer: int) -> bool:
        return buffer in self.buffers

    def create_scratch_buffer(self, filetype: str) -> int:
        buffer = self._new_buffer("", listed=False, filetype=filetype)
        self.events.append(("create_scratch_buffer", buffer))
        return buffer

    def open_float(self, buffer: int, config: dict) -> int:
        window = self._new_window(buffer, floating=True, config=config)
        self.current = window
        self.events.append(("open_float", buffer))
        return window

    def set_window_buffer(self, window: int, buffer: int) -> None:
        if window not in self.windows or buffer not in self.buffers:
            raise HostError("Invalid handle")
        self.windows[window]["buffer"] = buffer
        self.events.append(("set_window_buffer", window, buffer))

    def set_current_window(self, window: int) -> None:
        if window not in self.windows:
            raise HostError(f"Invalid window id: {window}")
        self.current = window
        self.events.append(("set_current_window", window))

    def close_window(self, window: int) -> None:
        if window not in self.windows:
            raise HostError(f"Invalid window id: {window}")
        del self.windows[window]
        if self.current == window:
            self.current = next(iter(self.windows))
        self.events.append(("close_window", window))

    def delete_buffer(self, buffer: int) -> None:
        if buffer not in self.buffers or buffer in self.fail_delete:
            raise HostError(f"Failed to delete buffer {buffer}")
        del self.buffers[buffer]
        for window, info in list(self.windows.items()):
            if info["buffer"] != buffer:
                continue
            if info["floating"]:
                del self.windows[window]
            else:
                info["buffer"] = self._new_buffer("", listed=True)
        if self.current not in self.windows:
            self.current = next(iter(self.windows))
        self.events.append(("delete_buffer", buffer))

    def open_file(self, path: str) -> None:
        if path in self.fail_open:
            raise HostError(self.fail_open[path])
        buffer = self.find_buffer(path)
        if buffer is None:
            buffer = self._new_buffer(path, listed=True)
        self.windows[self.current]["buffer"] = buffer
        self.events.append(("open_file", path))

    def start_terminal(self, argv, cwd, on_exit) -> int:
        if self.spawn_error:
            raise HostError(self.spawn_error)
        if self.spawn_result is not None:
            return self.spawn_result
        job_id = next(self._job_ids)
        self.jobs[job_id] = {"argv": argv, "cwd": cwd, "on_exit": on_exit}
        self.events.append(("start_terminal", job_id))
        return job_id

    def map_key(self, buffer: int, mode: str, lhs: str, action) -> None:
        self.mappings[(buffer, mode, lhs)] = action

    def start_insert(self) -> None:
        self.mode = "terminal"
        self.events.append(("start_insert",))
