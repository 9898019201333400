"""This file implements the ufdl cli.

It registers the subcommands of ufdl.
"""

from __future__ import annotations

import click

from ufdl_client.cli.config import config_cli
from ufdl_client.cli.info import info_cli
from ufdl_client.cli.list import list_cli


@click.group("ufdl")
def cli():
    """UFDL client CLI."""


cli.add_command(info_cli)
cli.add_command(config_cli)
cli.add_command(list_cli)
if __name__ == "__main__":
    cli()
