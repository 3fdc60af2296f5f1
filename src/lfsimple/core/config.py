"""lf-simple configuration management.

Configuration comes from three layers, later ones winning:
- built-in defaults
- ~/.lf-simple/config.json (the "plugin" table)
- editor-side options (g:lf_simple and LfSimpleSetup())

The same file tracks setup state and versions for the CLI.
"""

import copy
import hashlib
import os
from dataclasses import dataclass, field
from pathlib import Path

import orjson

from lfsimple.core.errors import ConfigError
from lfsimple.core.layout import WindowLayout
from lfsimple.core.lf import DEFAULT_EXECUTABLE

CONFIG_PATH_ENV = "LF_SIMPLE_CONFIG"

LOG_LEVELS = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}

SELECTION_FILE_NAME = "lf_selection"

DEFAULT_OPTIONS: dict = {
    "window": {
        "width": 0.8,
        "height": 0.8,
        "border": "rounded",
    },
    "floating": True,
    "replace_netrw": False,
    "escape_to_quit": True,
    "selection_file": None,
    "executable": DEFAULT_EXECUTABLE,
    "log_level": "INFO",
}


def get_config_path() -> Path:
    """Get the path to lf-simple's config file."""
    if env_path := os.environ.get(CONFIG_PATH_ENV):
        return Path(env_path)
    return Path.home() / ".lf-simple" / "config.json"


def read_config() -> dict:
    """Read lf-simple config, returning empty dict if not found."""
    config_path = get_config_path()
    if not config_path.exists():
        return {}
    try:
        content = config_path.read_bytes()
        return orjson.loads(content) if content else {}
    except (orjson.JSONDecodeError, OSError):
        return {}


def write_config(config: dict) -> None:
    """Write lf-simple config."""
    config_path = get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_bytes(orjson.dumps(config, option=orjson.OPT_INDENT_2))


def get_installed_version(component: str) -> str | None:
    """Get the installed version hash for a setup component."""
    config = read_config()
    return config.get("setup_versions", {}).get(component)


def set_installed_version(component: str, version_hash: str) -> None:
    """Set the installed version hash for a setup component."""
    config = read_config()
    if "setup_versions" not in config:
        config["setup_versions"] = {}
    config["setup_versions"][component] = version_hash
    write_config(config)


def clear_installed_version(component: str) -> None:
    """Forget the installed version hash for a setup component."""
    config = read_config()
    versions = config.get("setup_versions", {})
    if component in versions:
        del versions[component]
        write_config(config)


def content_hash(*contents: str) -> str:
    """Generate a hash from content strings."""
    combined = "".join(contents)
    return hashlib.sha256(combined.encode()).hexdigest()[:16]


def merge_options(base: dict, overrides: dict) -> dict:
    """Deep-merge overrides into a copy of base.

    Nested dicts are merged key by key; any other value in overrides
    replaces the one in base.

    Raises:
        ConfigError: If overrides contains a key base does not know.
    """
    merged = copy.deepcopy(base)
    for key, value in overrides.items():
        if key not in merged:
            raise ConfigError(f"Unknown option: {key}")
        if isinstance(merged[key], dict):
            if not isinstance(value, dict):
                raise ConfigError(f"Option {key} must be a table, got {value!r}")
            merged[key] = merge_options(merged[key], value)
        else:
            merged[key] = value
    return merged


@dataclass
class PluginConfig:
    """Effective plugin options.

    Attributes:
        window: Floating window layout
        floating: Show lf in a floating window instead of the current window
        replace_netrw: Open lf whenever a directory is edited
        escape_to_quit: Map <Esc> to close lf (embedded variant only)
        selection_file: File lf writes its selection to; None until resolved
        executable: lf binary name or path
        log_level: Minimum level for the plugin log
    """

    window: WindowLayout = field(default_factory=WindowLayout)
    floating: bool = True
    replace_netrw: bool = False
    escape_to_quit: bool = True
    selection_file: str | None = None
    executable: str = DEFAULT_EXECUTABLE
    log_level: str = "INFO"

    @classmethod
    def from_options(cls, options: dict) -> "PluginConfig":
        """Build a config from a fully merged options dict."""
        for name in ("floating", "replace_netrw", "escape_to_quit"):
            if not isinstance(options[name], bool):
                raise ConfigError(f"{name} must be a boolean, got {options[name]!r}")
        log_level = str(options["log_level"]).upper()
        if log_level not in LOG_LEVELS:
            raise ConfigError(f"Invalid log_level: {log_level}. Must be one of {LOG_LEVELS}")
        selection_file = options["selection_file"]
        if selection_file is not None:
            selection_file = os.path.expanduser(str(selection_file))
        return cls(
            window=WindowLayout(**options["window"]),
            floating=options["floating"],
            replace_netrw=options["replace_netrw"],
            escape_to_quit=options["escape_to_quit"],
            selection_file=selection_file,
            executable=str(options["executable"]),
            log_level=log_level,
        )

    def with_selection_default(self, cache_dir: str) -> "PluginConfig":
        """Fill in the default selection file under the editor's cache dir."""
        if self.selection_file is None:
            self.selection_file = os.path.join(cache_dir, SELECTION_FILE_NAME)
        return self


def load_options(*overrides: dict | None) -> dict:
    """Merge defaults, the config file and editor overrides, in that order."""
    options = merge_options(DEFAULT_OPTIONS, read_config().get("plugin", {}))
    for layer in overrides:
        if layer:
            options = merge_options(options, layer)
    return options


def load_plugin_config(*overrides: dict | None) -> PluginConfig:
    """Load the effective plugin config.

    Args:
        overrides: Option dicts applied after the config file, in order.

    Raises:
        ConfigError: If any layer holds an unknown or invalid option.
    """
    return PluginConfig.from_options(load_options(*overrides))
