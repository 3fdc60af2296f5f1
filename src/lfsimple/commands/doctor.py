"""Doctor command for lf-simple.

Reports whether everything the plugin needs is in place.
"""

from pathlib import Path

import click
import orjson

from lfsimple.core.config import get_config_path, load_plugin_config
from lfsimple.core.errors import ConfigError
from lfsimple.core.lf import version as lf_version
from lfsimple.nvim.install import (
    get_nvim_cache_dir,
    get_shim_path,
    nvim_is_installed,
    shim_is_current,
)


@click.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def doctor(as_json: bool) -> None:
    """Check the lf-simple installation.

    Exits with status 1 if lf is missing or the config is invalid.

    Examples:

        lf-simple doctor

        lf-simple doctor --json
    """
    report: dict = {
        "lf": lf_version(),
        "nvim": nvim_is_installed(),
        "config_path": str(get_config_path()),
        "config_error": None,
        "rplugin": str(get_shim_path()),
        "rplugin_current": shim_is_current(),
        "selection_file": None,
        "stale_selection": False,
    }

    try:
        config = load_plugin_config()
    except ConfigError as e:
        report["config_error"] = str(e)
    else:
        config.with_selection_default(str(get_nvim_cache_dir()))
        report["selection_file"] = config.selection_file
        report["stale_selection"] = Path(config.selection_file).exists()

    healthy = report["lf"] is not None and report["config_error"] is None

    if as_json:
        click.echo(orjson.dumps(report).decode())
    else:
        click.echo(f"lf:             {report['lf'] or 'NOT FOUND'}")
        click.echo(f"nvim:           {'found' if report['nvim'] else 'NOT FOUND'}")
        click.echo(f"config:         {report['config_path']}")
        if report["config_error"]:
            click.echo(f"config error:   {report['config_error']}")
        state = "up to date" if report["rplugin_current"] else "not installed"
        click.echo(f"remote plugin:  {report['rplugin']} ({state})")
        if report["selection_file"]:
            stale = " (stale file present)" if report["stale_selection"] else ""
            click.echo(f"selection file: {report['selection_file']}{stale}")

    if not healthy:
        raise SystemExit(1)
