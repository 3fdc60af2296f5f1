"""lf wrapper for lf-simple.

Builds the command line used to run lf inside the editor's terminal.
"""

import os
import shutil
import subprocess

# Override the lf binary used by the CLI checks (used for testing)
LF_EXECUTABLE_ENV = "LF_SIMPLE_LF"

DEFAULT_EXECUTABLE = "lf"


def _lf_cmd(args: list[str], executable: str | None = None) -> list[str]:
    """Build an lf command.

    If LF_SIMPLE_LF is set and no executable is given, it names the binary.
    """
    executable = executable or os.environ.get(LF_EXECUTABLE_ENV) or DEFAULT_EXECUTABLE
    return [executable] + args


def is_installed(executable: str | None = None) -> bool:
    """Check if lf is installed on the system.

    Returns:
        True if lf is installed and accessible, False otherwise.
    """
    cmd = _lf_cmd(["-version"], executable)
    if shutil.which(cmd[0]) is None:
        return False
    try:
        result = subprocess.run(cmd, capture_output=True)
    except OSError:
        return False
    return result.returncode == 0


def version(executable: str | None = None) -> str | None:
    """Return the installed lf version string, or None if lf is missing."""
    cmd = _lf_cmd(["-version"], executable)
    if shutil.which(cmd[0]) is None:
        return None
    try:
        result = subprocess.run(cmd, capture_output=True, text=True)
    except OSError:
        return None
    if result.returncode != 0:
        return None
    return result.stdout.strip()


def build_command(
    selection_file: str, start_dir: str, executable: str = DEFAULT_EXECUTABLE
) -> list[str]:
    """Build the argv that runs lf for one session.

    Args:
        selection_file: Path lf writes the selected files to when it quits.
        start_dir: Directory lf opens in.
        executable: lf binary name or path.

    Returns:
        Argument vector, e.g. ["lf", "-selection-path", "/c/lf_selection", "/src"]
    """
    return [executable, "-selection-path", selection_file, start_dir]


def resolve_start_dir(target: str | None, cwd: str) -> str:
    """Work out the directory lf should start in.

    Args:
        target: Path passed to :Lf, or None.
        cwd: The editor's working directory.

    Returns:
        target if it is a directory, its parent if it is not, cwd if absent.
        Relative paths are resolved against cwd.
    """
    if not target:
        return cwd
    path = os.path.expanduser(target)
    if not os.path.isabs(path):
        path = os.path.join(cwd, path)
    path = os.path.normpath(path)
    if os.path.isdir(path):
        return path
    return os.path.dirname(path)
