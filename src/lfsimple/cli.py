"""CLI entry point for lf-simple.

Usage:
    lf-simple setup           # Install the Neovim remote plugin
    lf-simple doctor          # Check lf, nvim and config
    lf-simple config          # Show effective plugin options
    lf-simple uninstall       # Remove the remote plugin
"""

import click

from lfsimple.commands.doctor import doctor
from lfsimple.commands.setup import setup
from lfsimple.commands.show_config import show_config
from lfsimple.commands.uninstall import uninstall
from lfsimple.core.logging_config import setup_logging


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log to stderr")
@click.version_option(package_name="lf-simple")
def main(verbose: bool) -> None:
    """lf-simple - the lf file manager inside Neovim.

    Open lf with :Lf in Neovim. Files you pick in lf open as buffers, and
    buffers for files lf deleted or moved are closed when it exits.
    """
    if verbose:
        setup_logging("DEBUG", stderr=True)


# Register commands
main.add_command(setup)
main.add_command(doctor)
main.add_command(show_config)
main.add_command(uninstall)
