"""Setup command for lf-simple.

Installs the Neovim remote plugin shim and registers it.
"""

import platform

import click

from lfsimple.core.lf import is_installed as lf_is_installed
from lfsimple.nvim.install import (
    install_shim,
    nvim_is_installed,
    update_remote_plugins,
)


@click.command()
@click.option(
    "--no-update",
    is_flag=True,
    help="Do not run :UpdateRemotePlugins after installing",
)
def setup(no_update: bool) -> None:
    """Set up lf-simple integration with Neovim.

    This command:

    \b
    1. Checks that lf is installed
    2. Installs the remote plugin shim into rplugin/python3/
    3. Runs :UpdateRemotePlugins so Neovim picks up :Lf

    Examples:

        lf-simple setup

        lf-simple setup --no-update
    """
    # 1. Check lf
    if not lf_is_installed():
        click.echo("lf is not installed.", err=True)
        system = platform.system()
        if system == "Darwin":
            click.echo("Install with: brew install lf", err=True)
        elif system == "Linux":
            click.echo("Install with: apt install lf (or your package manager)", err=True)
        else:
            click.echo("Please install lf to continue.", err=True)
        raise SystemExit(1)

    click.echo("lf found.")

    # 2. Install shim
    shim_path = install_shim()
    click.echo(f"Remote plugin installed to {shim_path}")

    # 3. Register with Neovim
    if no_update:
        click.echo("Run :UpdateRemotePlugins in Neovim, then restart it.")
        return

    if not nvim_is_installed():
        click.echo("nvim not found on PATH; run :UpdateRemotePlugins manually.", err=True)
        return

    ok, error = update_remote_plugins()
    if not ok:
        click.echo(f"UpdateRemotePlugins failed: {error}", err=True)
        raise SystemExit(1)

    click.echo()
    click.echo("lf-simple is now integrated with Neovim.")
    click.echo("Restart Neovim and run :Lf to open lf.")
