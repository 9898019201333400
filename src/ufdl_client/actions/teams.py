"""Implementation of the teams API, including the team memberships."""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING

from ufdl_client.actions.action import ListAction

if TYPE_CHECKING:
    import requests

LOGGER = logging.getLogger(__name__)


class Permissions(str, Enum):
    """The permissions a member has in a team."""

    READ = "R"
    WRITE = "W"
    ADMIN = "A"


class Teams(ListAction):
    """For managing the teams and their members."""

    name = "Teams"
    path = "/v1/teams/"
    resource_name = "team"

    def create(self, name: str) -> dict:
        """Creates a team and returns it."""
        LOGGER.info("creating team: %s", name)
        return self.api_request("POST", "create", json={"name": name}).json()

    def update(self, pk: int, name: str) -> dict:
        """Renames the team and returns it."""
        LOGGER.info("updating team with PK: %s", pk)
        return self.api_request("PUT", f"{self.check_pk(pk)}", json={"name": name}).json()

    def delete(self, pk: int, hard: bool = False) -> None:
        """Deletes the team, soft deleted teams can be reinstated.

        Args:
            pk: the primary key of the team
            hard: delete the team for good
        """
        LOGGER.info("deleting team with PK: %s (hard=%s)", pk, hard)
        self.api_request("DELETE", f"{self.check_pk(pk)}/hard" if hard else f"{self.check_pk(pk)}/")

    def reinstate(self, pk: int) -> dict:
        """Reinstates a soft deleted team and returns it."""
        LOGGER.info("reinstating team with PK: %s", pk)
        return self.api_request("DELETE", f"{self.check_pk(pk)}/reinstate").json()

    def api_memberships(
        self, pk: int, method: str, username: str, permissions: Permissions | str | None = None, **kwargs
    ) -> requests.Response:
        """Modifies the memberships of a team.

        Args:
            pk: the primary key of the team
            method: one of 'add', 'update' or 'remove'
            username: the user whose membership is modified
            permissions: the permissions of the member, not needed for 'remove'
            **kwargs: gets passed to :py:meth:`Action.api_request`
        """
        data: dict[str, str] = {"method": method, "username": username}
        if permissions is not None:
            data["permissions"] = Permissions(permissions).value
        return self.api_request("PATCH", f"{self.check_pk(pk)}/memberships", json=data, **kwargs)

    def add_membership(self, pk: int, username: str, permissions: Permissions | str = Permissions.READ) -> dict:
        """Adds the user to the team and returns the membership."""
        LOGGER.info("adding %s to team %s", username, pk)
        return self.api_memberships(pk, "add", username, permissions).json()

    def update_membership(self, pk: int, username: str, permissions: Permissions | str) -> dict:
        """Changes the permissions of the member and returns the membership."""
        LOGGER.info("updating membership of %s in team %s", username, pk)
        return self.api_memberships(pk, "update", username, permissions).json()

    def remove_membership(self, pk: int, username: str) -> None:
        """Removes the user from the team."""
        LOGGER.info("removing %s from team %s", username, pk)
        self.api_memberships(pk, "remove", username)
