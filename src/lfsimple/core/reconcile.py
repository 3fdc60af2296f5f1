"""Buffer reconciliation after an lf session.

Before lf starts, the controller snapshots the readable file buffers. When
lf exits, reconcile():
1. opens the files lf reported in the selection file (or hands the first
   selected directory back to the controller), then deletes the file
2. force-closes snapshot buffers whose files no longer exist, since lf may
   have deleted, moved or renamed them
"""

import os
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from loguru import logger

from lfsimple.core.errors import HostError
from lfsimple.core.host import Host


@dataclass
class CleanupOutcome:
    """Result of reclaiming the buffer for one vanished path."""

    path: str
    buffer: int | None
    closed: bool
    error: str | None = None


@dataclass
class ReconcileResult:
    """Outcome of one reconciliation pass.

    Attributes:
        opened: Selected files opened in the editor, in selection order
        directory: First selected directory, if any (later entries dropped)
        cleanup: One outcome per snapshot path that vanished from disk
        failed: (path, error) for selected files the editor refused to open
    """

    opened: list[str] = field(default_factory=list)
    directory: str | None = None
    cleanup: list[CleanupOutcome] = field(default_factory=list)
    failed: list[tuple[str, str]] = field(default_factory=list)


def is_readable_file(path: str) -> bool:
    """Return True if path is a regular file we can read."""
    return os.path.isfile(path) and os.access(path, os.R_OK)


def snapshot_buffers(host: Host) -> frozenset[str]:
    """Collect the paths of listed buffers backed by readable files."""
    return frozenset(
        name for _, name in host.listed_buffers() if name and is_readable_file(name)
    )


def read_selection(selection_file: str) -> list[str] | None:
    """Read the paths lf selected.

    Returns:
        Paths in file order with blank lines dropped, or None if the file is
        missing or unreadable.
    """
    if not is_readable_file(selection_file):
        return None
    try:
        with open(selection_file, encoding="utf-8", errors="surrogateescape") as f:
            return [line.rstrip("\r\n") for line in f if line.strip()]
    except OSError as e:
        logger.bind(operation="read_selection", status="error").warning(
            f"Could not read selection file: {e}",
        )
        return None


def clear_selection(selection_file: str) -> bool:
    """Delete the selection file.

    Returns:
        True if a file was removed.
    """
    try:
        os.remove(selection_file)
    except FileNotFoundError:
        return False
    return True


def process_selection(
    host: Host,
    selection_file: str,
    on_directory: Callable[[str], None],
) -> tuple[list[str], str | None, list[tuple[str, str]]]:
    """Open the files lf selected.

    The first directory in the selection is passed to on_directory and ends
    processing; anything listed after it is discarded. A file the editor
    refuses to open is recorded and does not stop the others. The selection
    file is removed however processing ends.

    Returns:
        (opened files, selected directory or None, (path, error) failures)
    """
    paths = read_selection(selection_file)
    if paths is None:
        return [], None, []

    opened: list[str] = []
    failed: list[tuple[str, str]] = []
    directory = None
    try:
        for index, path in enumerate(paths):
            if os.path.isdir(path):
                directory = path
                skipped = len(paths) - index - 1
                if skipped:
                    logger.bind(operation="process_selection", status="skip").debug(
                        f"Discarding {skipped} selection entries after {path}"
                    )
                on_directory(path)
                break
            try:
                host.open_file(path)
            except HostError as e:
                logger.bind(operation="process_selection", status="error").warning(
                    f"Could not open {path}: {e}"
                )
                failed.append((path, str(e)))
                continue
            opened.append(path)
    finally:
        clear_selection(selection_file)
    return opened, directory, failed


def cleanup_deleted_buffers(host: Host, snapshot: Iterable[str]) -> list[CleanupOutcome]:
    """Force-close buffers whose files disappeared during the session.

    Failures for one path are recorded and do not stop the others.
    """
    outcomes: list[CleanupOutcome] = []
    for path in sorted(snapshot):
        if is_readable_file(path):
            continue
        buffer = host.find_buffer(path)
        if buffer is None:
            outcomes.append(CleanupOutcome(path=path, buffer=None, closed=False))
            continue
        try:
            host.delete_buffer(buffer)
        except HostError as e:
            logger.bind(operation="cleanup", status="error").warning(
                f"Could not close buffer {buffer} for {path}: {e}",
            )
            outcomes.append(
                CleanupOutcome(path=path, buffer=buffer, closed=False, error=str(e))
            )
            continue
        logger.bind(operation="cleanup", status="closed").debug(
            f"Closed buffer {buffer} for vanished file {path}",
        )
        outcomes.append(CleanupOutcome(path=path, buffer=buffer, closed=True))
    return outcomes


def reconcile(
    host: Host,
    snapshot: Iterable[str],
    selection_file: str,
    on_directory: Callable[[str], None],
) -> ReconcileResult:
    """Apply lf's side effects to the editor.

    Args:
        host: Editor to act on.
        snapshot: Buffer paths captured before lf started.
        selection_file: File lf wrote its selection to.
        on_directory: Called with the first selected directory.

    Returns:
        What was opened, the selected directory and per-path cleanup outcomes.
    """
    opened, directory, failed = process_selection(host, selection_file, on_directory)
    cleanup = cleanup_deleted_buffers(host, snapshot)
    return ReconcileResult(
        opened=opened, directory=directory, cleanup=cleanup, failed=failed
    )
