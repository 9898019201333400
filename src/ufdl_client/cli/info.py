"""`ufdl info` cli."""

from __future__ import annotations

import platform
import sys

import click
import requests
from rich.console import Console
from rich.panel import Panel
from rich.table import Table, box
from rich.tree import Tree

from ufdl_client.__about__ import __version__
from ufdl_client.cli.config import _config_section
from ufdl_client.client import Client
from ufdl_client.config.authentication import AuthState
from ufdl_client.config.config import get_config_dict, parse_credentials_config, parse_general_config
from ufdl_client.errors.meta import UFDLError
from ufdl_client.utils.cli import _bool_color, _bool_icon

HIGHLIGHT_BEGIN = "[bold color(5)]"
HIGHLIGHT_END = "[/bold color(5)]"


def _python_section() -> Tree:
    python_node = Tree("[bold]Python")
    python_node.add(
        Panel(
            f"[bold]Python {HIGHLIGHT_BEGIN}v{sys.version}, {platform.python_implementation()}{HIGHLIGHT_END}"
            f"\n[bold]UFDL client {HIGHLIGHT_BEGIN}v{__version__}{HIGHLIGHT_END}[/bold]"
            f"\n[bold]requests {HIGHLIGHT_BEGIN}v{requests.__version__}{HIGHLIGHT_END}[/bold]",
            expand=False,
        ),
    )
    return python_node


def _sysinfo_section() -> Tree:
    sysinfo_node = Tree("[bold] System Information")
    sysinfo_table = Table(show_header=False, box=box.ROUNDED)
    sysinfo_table.add_row("[bold]OS", HIGHLIGHT_BEGIN + platform.system())
    sysinfo_table.add_row("[bold]OS release", HIGHLIGHT_BEGIN + platform.release())
    sysinfo_table.add_row("[bold]Instruction set", HIGHLIGHT_BEGIN + platform.machine())
    sysinfo_node.add(sysinfo_table)
    return sysinfo_node


def _login_section(profile: str | None) -> Tree:
    config_dict = get_config_dict(profile=profile)
    credentials = parse_credentials_config(config_dict)
    login_node = Tree(f"[bold]Login as '{credentials.user}' on {credentials.server}")
    try:
        with Client(
            credentials.server,
            credentials.user,
            credentials.password,
            config=parse_general_config(config_dict),
        ) as client:
            authentication = client.connection.authentication
            try:
                authentication.access_token()
            except (UFDLError, requests.exceptions.RequestException) as e:
                login_node.add(f"{_bool_icon(False)} {e.__class__.__name__}: {e}")
            authenticated = authentication.state is AuthState.AUTHENTICATED
            login_node.add(
                _bool_color(authenticated, f"State: {authentication.state.value} {_bool_icon(authenticated)}")
            )
    except UFDLError as e:
        login_node.add(f"{_bool_icon(False)} Can't create the client: {e}")
    return login_node


@click.command("info")
@click.option(
    "-p",
    "--profile",
    help=("The config profile to select.\n"),
)
def info_cli(profile: str | None):
    """Prints useful information about the UFDL client installation and checks the login."""
    console = Console(highlight=False, force_terminal=True)
    tree = Tree("[bold]UFDL client Information")
    tree.add(_python_section())
    tree.add(_sysinfo_section())
    tree.add(_config_section(profile=profile))
    tree.add(_login_section(profile=profile))
    console.print(tree)
