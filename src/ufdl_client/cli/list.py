"""`ufdl list` cli."""

from __future__ import annotations

import json

import click
from rich.console import Console
from rich.table import Table

from ufdl_client.actions.action import ListAction
from ufdl_client.client import ActionKind, Client

"""The columns of the table, per kind."""
COLUMNS = {
    ActionKind.USERS: ("pk", "username", "first_name", "last_name", "email"),
    ActionKind.DATASETS: ("pk", "name", "version", "project", "licence", "is_public"),
    ActionKind.PROJECTS: ("pk", "name", "team"),
    ActionKind.TEAMS: ("pk", "name"),
    ActionKind.LICENSES: ("pk", "name", "url"),
    ActionKind.DOMAINS: ("pk", "name", "description"),
    ActionKind.FRAMEWORKS: ("pk", "name", "version"),
}


def _resource_table(kind: ActionKind, resources: list[dict]) -> Table:
    columns = COLUMNS[kind]
    table = Table(*columns, title=kind.value.capitalize())
    for resource in resources:
        table.add_row(*(str(resource.get(column, "")) for column in columns))
    return table


@click.command("list")
@click.argument("kind", type=click.Choice([kind.value for kind in ActionKind]))
@click.option("-p", "--profile", help=("The config profile to select.\n"))
@click.option("--server", help="The URL of the UFDL backend, overrides the config.")
@click.option("--user", help="The user, overrides the config.")
@click.option("--password", help="The password, overrides the config.")
@click.option("--filter", "filter_json", help="A JSON filter, only for kinds that support filtering.")
def list_cli(
    kind: str,
    profile: str | None,
    server: str | None,
    user: str | None,
    password: str | None,
    filter_json: str | None,
):
    """Lists the resources of a kind, e.g. `ufdl list datasets`."""
    action_kind = ActionKind(kind)
    with Client(server, user, password, profile=profile) as client:
        action = client.action(action_kind)
        if filter_json is not None:
            if not isinstance(action, ListAction):
                msg = f"{kind} can't be filtered"
                raise click.BadParameter(msg, param_hint="--filter")
            resources = action.list(json.loads(filter_json))
        else:
            resources = action.list()  # type: ignore[attr-defined]
    Console(markup=True).print(_resource_table(action_kind, resources))
