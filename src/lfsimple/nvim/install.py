"""Remote plugin installation for Neovim.

Neovim only loads Python remote plugins from rplugin/python3/ on its
runtimepath, and only after :UpdateRemotePlugins has written the manifest.
This module places a small shim there that imports the plugin class from
the installed lfsimple package.
"""

import os
import shutil
import subprocess
from pathlib import Path

from lfsimple.core.config import (
    clear_installed_version,
    content_hash,
    get_installed_version,
    set_installed_version,
)

COMPONENT = "rplugin"

SHIM_NAME = "lf_simple.py"

SHIM_CONTENT = '''"""lf-simple remote plugin entry point (installed by `lf-simple setup`)."""

from lfsimple.nvim.plugin import LfSimplePlugin  # noqa: F401
'''


def get_nvim_config_dir() -> Path:
    """Get Neovim's config directory, honouring XDG_CONFIG_HOME and NVIM_APPNAME."""
    base = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(base) / os.environ.get("NVIM_APPNAME", "nvim")


def get_nvim_cache_dir() -> Path:
    """Get Neovim's cache directory (stdpath("cache")) without starting nvim."""
    base = os.environ.get("XDG_CACHE_HOME") or str(Path.home() / ".cache")
    return Path(base) / os.environ.get("NVIM_APPNAME", "nvim")


def get_shim_path(config_dir: Path | None = None) -> Path:
    """Get the path of the remote plugin shim."""
    config_dir = config_dir or get_nvim_config_dir()
    return config_dir / "rplugin" / "python3" / SHIM_NAME


def nvim_is_installed() -> bool:
    """Check if nvim is on PATH."""
    return shutil.which("nvim") is not None


def shim_is_current(config_dir: Path | None = None) -> bool:
    """Return True if the shim exists and matches the recorded version."""
    shim_path = get_shim_path(config_dir)
    if not shim_path.exists():
        return False
    return get_installed_version(COMPONENT) == content_hash(shim_path.read_text())


def install_shim(config_dir: Path | None = None) -> Path:
    """Write the remote plugin shim and record its version.

    Existing files at the shim path are overwritten.

    Returns:
        Path of the written shim.
    """
    shim_path = get_shim_path(config_dir)
    shim_path.parent.mkdir(parents=True, exist_ok=True)
    shim_path.write_text(SHIM_CONTENT)
    set_installed_version(COMPONENT, content_hash(SHIM_CONTENT))
    return shim_path


def uninstall_shim(config_dir: Path | None = None) -> bool:
    """Remove the remote plugin shim.

    Only removes the file if it is the shim lf-simple wrote.

    Returns:
        True if the shim was removed.
    """
    shim_path = get_shim_path(config_dir)
    if not shim_path.exists():
        return False
    if "lfsimple.nvim.plugin" not in shim_path.read_text():
        return False
    shim_path.unlink()
    clear_installed_version(COMPONENT)
    return True


def update_remote_plugins() -> tuple[bool, str | None]:
    """Regenerate Neovim's remote plugin manifest.

    Returns:
        (success, error message or None)
    """
    try:
        result = subprocess.run(
            ["nvim", "--headless", "+UpdateRemotePlugins", "+qa"],
            capture_output=True,
            text=True,
        )
    except FileNotFoundError:
        return False, "nvim not found"
    if result.returncode != 0:
        return False, result.stderr.strip() or f"nvim exited with {result.returncode}"
    return True, None
