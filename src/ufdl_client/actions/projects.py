"""Implementation of the projects API."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ufdl_client.actions.action import ListAction

if TYPE_CHECKING:
    import requests

LOGGER = logging.getLogger(__name__)


class Projects(ListAction):
    """For managing the projects."""

    name = "Projects"
    path = "/v1/core/projects/"
    resource_name = "project"

    def api_create(self, name: str, team: int, **kwargs) -> requests.Response:
        """Creates a project.

        Args:
            name: the name of the project
            team: the primary key of the team owning the project
            **kwargs: gets passed to :py:meth:`Action.api_request`
        """
        return self.api_request("POST", "create", json={"name": name, "team": team}, **kwargs)

    def create(self, name: str, team: int) -> dict:
        """Creates a project and returns it."""
        LOGGER.info("creating project: %s", name)
        return self.api_create(name, team).json()

    def update(self, pk: int, name: str, team: int) -> dict:
        """Replaces all fields of the project and returns it."""
        LOGGER.info("updating project with PK: %s", pk)
        return self.api_request("PUT", f"{self.check_pk(pk)}", json={"name": name, "team": team}).json()

    def partial_update(self, pk: int, name: str | None = None, team: int | None = None) -> dict:
        """Updates only the fields that are not None and returns the project."""
        data = {}
        if name is not None:
            data["name"] = name
        if team is not None:
            data["team"] = team
        LOGGER.info("partially updating project with PK: %s", pk)
        return self.api_request("PATCH", f"{self.check_pk(pk)}", json=data).json()

    def delete(self, pk: int, hard: bool = False) -> None:
        """Deletes the project, soft deleted projects can be reinstated.

        Args:
            pk: the primary key of the project
            hard: delete the project for good
        """
        LOGGER.info("deleting project with PK: %s (hard=%s)", pk, hard)
        self.api_request("DELETE", f"{self.check_pk(pk)}/hard" if hard else f"{self.check_pk(pk)}/")

    def reinstate(self, pk: int) -> dict:
        """Reinstates a soft deleted project and returns it."""
        LOGGER.info("reinstating project with PK: %s", pk)
        return self.api_request("DELETE", f"{self.check_pk(pk)}/reinstate").json()
