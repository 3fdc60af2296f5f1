"""Logging setup for lf-simple.

The plugin runs inside Neovim's remote plugin host, where stderr is not
visible, so records go to a rotating file. The CLI can add a stderr sink.
"""

import sys
from pathlib import Path

import platformdirs
from loguru import logger

APP_NAME = "lf-simple"

LOG_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | "
    "{extra[operation]}:{extra[status]} | {message}"
)


def get_log_dir() -> Path:
    """Get the directory holding lf-simple's log files.

    macOS: ~/Library/Logs/lf-simple/
    Linux: ~/.local/state/lf-simple/log/
    """
    return Path(platformdirs.user_log_dir(appname=APP_NAME, ensure_exists=True))


def setup_logging(level: str = "INFO", stderr: bool = False, log_dir: Path | None = None):
    """Configure loguru sinks.

    Args:
        level: Minimum level for the file sink.
        stderr: Also log to stderr (used by the CLI's --verbose).
        log_dir: Directory for the log file. Defaults to get_log_dir().

    Returns:
        The configured logger.
    """
    logger.remove()
    logger.configure(extra={"operation": "-", "status": "-"})

    log_dir = log_dir or get_log_dir()
    logger.add(
        str(log_dir / "lf-simple.log"),
        format=LOG_FORMAT,
        rotation="5 MB",
        retention="7 days",
        level=level,
    )

    if stderr:
        logger.add(sys.stderr, format=LOG_FORMAT, level="DEBUG")

    return logger
