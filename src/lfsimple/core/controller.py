"""Session controller for lf-simple.

Owns the lifecycle of one lf run:

    idle -> launching -> active -> closing -> idle

start() captures the editor state and spawns lf in a terminal buffer.
When the job exits, the host delivers handle_exit() from its own task
queue, which runs teardown(): restore the display, destroy the terminal
buffer, reconcile buffers, reset. A failed spawn tears down immediately.
"""

from loguru import logger

from lfsimple.core.config import PluginConfig
from lfsimple.core.errors import (
    HostError,
    LfSimpleError,
    SessionAlreadyActive,
    SpawnFailed,
    ToolNotFound,
)
from lfsimple.core.host import LOG_ERROR, Host
from lfsimple.core.layout import float_config
from lfsimple.core.lf import build_command, resolve_start_dir
from lfsimple.core.reconcile import (
    ReconcileResult,
    clear_selection,
    reconcile,
    snapshot_buffers,
)
from lfsimple.core.session import Session

FILETYPE = "lf"


class SessionController:
    """Runs lf sessions against an editor host, one at a time."""

    def __init__(self, host: Host, config: PluginConfig) -> None:
        if config.selection_file is None:
            raise ValueError("config.selection_file must be resolved first")
        self.host = host
        self.config = config
        self.session: Session | None = None

    @property
    def state(self) -> str:
        """Current state of the controller's session ("idle" if none)."""
        return self.session.state if self.session else "idle"

    def start(self, target: str | None = None) -> None:
        """Open lf, starting in target (a directory, or a file's parent).

        Errors are reported to the user, never raised.
        """
        try:
            self._launch(target)
        except LfSimpleError as e:
            logger.bind(operation="start", status="error").error(
                f"{type(e).__name__}: {e}"
            )
            self.host.notify(str(e), LOG_ERROR)

    def _launch(self, target: str | None) -> None:
        if self.session is not None:
            raise SessionAlreadyActive()
        if not self.host.executable(self.config.executable):
            raise ToolNotFound(self.config.executable)

        host = self.host
        start_dir = resolve_start_dir(target, host.cwd())
        selection_file = self.config.selection_file

        if clear_selection(selection_file):
            logger.bind(operation="start", status="stale").debug(
                f"Removed stale selection file {selection_file}"
            )

        origin_window = host.current_window()
        session = Session(
            origin_window=origin_window,
            selection_file=selection_file,
            start_dir=start_dir,
            buffer_snapshot=snapshot_buffers(host),
            origin_buffer=(
                None if self.config.floating else host.window_buffer(origin_window)
            ),
        )
        self.session = session

        try:
            self._open_display(session)
            argv = build_command(selection_file, start_dir, self.config.executable)
            job_id = host.start_terminal(argv, start_dir, self.handle_exit)
        except HostError as e:
            self.teardown()
            raise SpawnFailed(f"Failed to start lf: {e}") from e
        if job_id <= 0:
            self.teardown()
            raise SpawnFailed("Failed to start lf")

        session.job_id = job_id
        session.state = "active"
        logger.bind(operation="start", status="active").info(
            f"Started lf job {job_id} in {start_dir} "
            f"({len(session.buffer_snapshot)} buffers in snapshot)"
        )

        self._install_mappings(session)
        host.set_current_window(session.display_window)
        host.start_insert()

    def _open_display(self, session: Session) -> None:
        host = self.host
        session.display_buffer = host.create_scratch_buffer(FILETYPE)
        if self.config.floating:
            columns, lines = host.editor_size()
            session.display_window = host.open_float(
                session.display_buffer,
                float_config(self.config.window, columns, lines),
            )
        else:
            host.set_window_buffer(session.origin_window, session.display_buffer)
            session.display_window = session.origin_window

    def _install_mappings(self, session: Session) -> None:
        buffer = session.display_buffer
        # q goes straight through to lf, which treats it as quit
        self.host.map_key(buffer, "t", "q", "q")
        if not self.config.floating and self.config.escape_to_quit:
            self.host.map_key(buffer, "n", "<Esc>", self.teardown)

    def handle_exit(self, job_id: int, exit_code: int) -> None:
        """Handle lf's terminal job exiting.

        Exits of jobs other than the current session's are ignored.
        """
        session = self.session
        if session is None or session.job_id != job_id:
            logger.bind(operation="exit", status="ignored").debug(
                f"Ignoring exit of job {job_id}"
            )
            return
        logger.bind(operation="exit", status="closing").info(
            f"lf job {job_id} exited with code {exit_code}"
        )
        self.teardown()

    def teardown(self) -> ReconcileResult | None:
        """Close the lf display and reconcile buffers.

        Runs once per session; later calls are no-ops.

        Returns:
            The reconciliation result, or None if there was nothing to close.
        """
        session = self.session
        if session is None or session.state == "closing":
            return None
        session.state = "closing"
        host = self.host

        try:
            self._restore_display(session)
        except HostError as e:
            logger.bind(operation="teardown", status="error").warning(
                f"Could not restore window {session.origin_window}: {e}"
            )

        if session.display_buffer is not None and host.is_valid_buffer(
            session.display_buffer
        ):
            try:
                host.delete_buffer(session.display_buffer)
            except HostError as e:
                logger.bind(operation="teardown", status="error").warning(
                    f"Could not delete lf buffer {session.display_buffer}: {e}"
                )

        pending: list[str] = []
        result = ReconcileResult()
        try:
            result = reconcile(
                host, session.buffer_snapshot, session.selection_file, pending.append
            )
        except HostError as e:
            logger.bind(operation="teardown", status="error").error(
                f"Reconcile failed: {e}"
            )
            host.notify(f"lf-simple: {e}", LOG_ERROR)
        finally:
            self.session = None

        logger.bind(operation="teardown", status="reconciled").info(
            f"Opened {len(result.opened)} files, "
            f"closed {sum(o.closed for o in result.cleanup)} dead buffers"
        )
        if result.failed:
            path, error = result.failed[0]
            more = f" (and {len(result.failed) - 1} more)" if len(result.failed) > 1 else ""
            host.notify(f"Could not open {path}{more}: {error}", LOG_ERROR)

        if pending:
            self.start(pending[0])
        return result

    def _restore_display(self, session: Session) -> None:
        host = self.host
        if self.config.floating:
            if (
                session.display_window is not None
                and session.display_window != session.origin_window
                and host.is_valid_window(session.display_window)
            ):
                host.close_window(session.display_window)
        elif (
            session.origin_buffer is not None
            and host.is_valid_window(session.origin_window)
            and host.is_valid_buffer(session.origin_buffer)
        ):
            host.set_window_buffer(session.origin_window, session.origin_buffer)

        if host.is_valid_window(session.origin_window):
            host.set_current_window(session.origin_window)
