"""The configuration CLI.

Shows the UFDL client configuration and where it is read from.
"""

from __future__ import annotations

import os

import click
from rich.console import Console
from rich.table import Table
from rich.tree import Tree

from ufdl_client.config.config import (
    _pure_config_dict,
    get_config_dict,
    parse_credentials_config,
    parse_general_config,
)
from ufdl_client.utils.cli import _bool_icon, _mask
from ufdl_client.utils.config import cfg_files


def _config_section(profile: str | None) -> Tree:
    if profile is None:
        profile = _pure_config_dict().get("profile")
    config_node = Tree("Configuration" + ((f" (Profile '{profile}')") if profile is not None else ""))
    config_table = Table("Config Name", "Value")
    config_file_table = Table("Config File Path", "Exists")

    config_dict = get_config_dict(profile=profile)
    config = parse_general_config(config_dict)
    for config_item, value in config.__dict__.items():
        if isinstance(value, bool):
            config_table.add_row(config_item, _bool_icon(value))
        else:
            config_table.add_row(config_item, str(value))
    config_node.add(config_table)

    credentials = parse_credentials_config(config_dict)
    cred_table = Table("Credential Configuration Name", "Value")
    cred_table.add_row("server", credentials.server)
    cred_table.add_row("user", credentials.user)
    cred_table.add_row("password", _mask(credentials.password))
    config_node.add(cred_table)

    for cfg_file in cfg_files():
        config_file_table.add_row(os.fspath(cfg_file), _bool_icon(cfg_file.is_file()))
    config_node.add(config_file_table)
    return config_node


@click.command("config")
@click.option(
    "-p",
    "--profile",
    help=("The config profile to select.\n"),
)
def config_cli(profile: str | None):
    """Prints the current config and the config file locations."""
    console = Console(markup=True)
    console.print(_config_section(profile=profile))
