"""Editor host interface.

The controller and reconciler never talk to the editor directly. They go
through a Host, which the Neovim plugin implements over pynvim and the tests
implement in memory.

Window and buffer ids are plain integers. Methods that act on a handle raise
HostError when the editor rejects the call.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable

# Notification levels, matching vim.log.levels
LOG_DEBUG = 1
LOG_INFO = 2
LOG_WARN = 3
LOG_ERROR = 4

ExitHandler = Callable[[int, int], None]
KeyAction = Callable[[], None] | str


class Host(ABC):
    """Editor operations consumed by the session controller."""

    @abstractmethod
    def executable(self, name: str) -> bool:
        """Return True if name resolves on the editor's execution path."""

    @abstractmethod
    def cwd(self) -> str:
        """Return the editor's current working directory."""

    @abstractmethod
    def notify(self, message: str, level: int = LOG_INFO) -> None:
        """Show a message to the user."""

    @abstractmethod
    def current_window(self) -> int:
        """Return the id of the focused window."""

    @abstractmethod
    def window_buffer(self, window: int) -> int:
        """Return the id of the buffer shown in window."""

    @abstractmethod
    def editor_size(self) -> tuple[int, int]:
        """Return the editor size as (columns, lines)."""

    @abstractmethod
    def listed_buffers(self) -> list[tuple[int, str]]:
        """Return (buffer id, absolute name) for every listed buffer."""

    @abstractmethod
    def find_buffer(self, path: str) -> int | None:
        """Return the id of the buffer named path, or None."""

    @abstractmethod
    def is_valid_window(self, window: int) -> bool:
        """Return True if window still exists."""

    @abstractmethod
    def is_valid_buffer(self, buffer: int) -> bool:
        """Return True if buffer still exists."""

    @abstractmethod
    def create_scratch_buffer(self, filetype: str) -> int:
        """Create an unlisted scratch buffer and return its id."""

    @abstractmethod
    def open_float(self, buffer: int, config: dict) -> int:
        """Show buffer in a focused floating window and return its id."""

    @abstractmethod
    def set_window_buffer(self, window: int, buffer: int) -> None:
        """Show buffer in window."""

    @abstractmethod
    def set_current_window(self, window: int) -> None:
        """Focus window."""

    @abstractmethod
    def close_window(self, window: int) -> None:
        """Close window, discarding its contents."""

    @abstractmethod
    def delete_buffer(self, buffer: int) -> None:
        """Force-delete buffer, discarding unsaved changes."""

    @abstractmethod
    def open_file(self, path: str) -> None:
        """Edit path in the focused window."""

    @abstractmethod
    def start_terminal(
        self, argv: list[str], cwd: str, on_exit: ExitHandler
    ) -> int:
        """Run argv as a terminal job in the current buffer.

        on_exit(job_id, exit_code) must be invoked from the host's own task
        queue after the job ends, never from inside the job's exit callback.

        Returns:
            The job id. Values <= 0 mean the job could not be started.
        """

    @abstractmethod
    def map_key(self, buffer: int, mode: str, lhs: str, action: KeyAction) -> None:
        """Install a buffer-local, non-recursive mapping.

        action is either a callable run when the key is pressed or a string
        of keys the mapping expands to.
        """

    @abstractmethod
    def start_insert(self) -> None:
        """Enter insert (terminal input) mode in the focused window."""
