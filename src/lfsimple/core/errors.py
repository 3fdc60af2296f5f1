"""Error types for lf-simple.

Every failure the controller can report to the user is an LfSimpleError.
The controller catches these and turns them into a single notification.
"""


class LfSimpleError(Exception):
    """Base class for lf-simple errors."""

    pass


class ToolNotFound(LfSimpleError):
    """Raised when the lf executable cannot be resolved on the host's path."""

    def __init__(self, executable: str) -> None:
        super().__init__(f"{executable} command not found. Please install lf.")
        self.executable = executable


class SpawnFailed(LfSimpleError):
    """Raised when the terminal job for lf could not be started."""

    pass


class SessionAlreadyActive(LfSimpleError):
    """Raised when start() is called while a session is still running."""

    def __init__(self) -> None:
        super().__init__("lf is already running")


class HostError(LfSimpleError):
    """Raised when an editor operation fails."""

    pass


class ConfigError(LfSimpleError):
    """Raised for invalid plugin configuration."""

    pass
