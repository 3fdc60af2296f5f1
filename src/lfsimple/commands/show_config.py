"""Config command for lf-simple.

Prints the effective plugin options as JSON.
"""

import click
import orjson

from lfsimple.core.config import load_options
from lfsimple.core.errors import ConfigError


@click.command("config")
def show_config() -> None:
    """Show the effective plugin options.

    Merges the built-in defaults with the "plugin" table of
    ~/.lf-simple/config.json. Options set in Neovim (g:lf_simple,
    LfSimpleSetup()) are applied on top at runtime and are not shown.

    Examples:

        lf-simple config
    """
    try:
        options = load_options()
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    click.echo(orjson.dumps(options, option=orjson.OPT_INDENT_2).decode())
