"""Uninstall command for lf-simple.

Removes the remote plugin shim written by `lf-simple setup`.
"""

import click

from lfsimple.nvim.install import (
    get_shim_path,
    nvim_is_installed,
    uninstall_shim,
    update_remote_plugins,
)


@click.command()
def uninstall() -> None:
    """Remove lf-simple's Neovim remote plugin.

    Leaves ~/.lf-simple/config.json in place.

    Examples:

        lf-simple uninstall
    """
    if not uninstall_shim():
        click.echo(f"No lf-simple remote plugin at {get_shim_path()}")
        return

    click.echo(f"Removed {get_shim_path()}")

    if nvim_is_installed():
        ok, error = update_remote_plugins()
        if not ok:
            click.echo(f"UpdateRemotePlugins failed: {error}", err=True)
