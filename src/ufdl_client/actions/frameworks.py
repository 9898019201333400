"""Implementation of the frameworks API."""

from __future__ import annotations

import logging

from ufdl_client.actions.action import ListAction

LOGGER = logging.getLogger(__name__)


class Frameworks(ListAction):
    """For managing the machine learning frameworks."""

    name = "Frameworks"
    path = "/v1/frameworks/"
    resource_name = "framework"

    def create(self, name: str, version: str) -> dict:
        """Creates a framework and returns it."""
        LOGGER.info("creating framework: %s %s", name, version)
        return self.api_request("POST", "create", json={"name": name, "version": version}).json()

    def update(self, pk: int, name: str, version: str) -> dict:
        """Replaces all fields of the framework and returns it."""
        LOGGER.info("updating framework with PK: %s", pk)
        return self.api_request("PUT", f"{self.check_pk(pk)}", json={"name": name, "version": version}).json()

    def partial_update(self, pk: int, name: str | None = None, version: str | None = None) -> dict:
        """Updates only the fields that are not None and returns the framework."""
        data = {}
        if name is not None:
            data["name"] = name
        if version is not None:
            data["version"] = version
        LOGGER.info("partially updating framework with PK: %s", pk)
        return self.api_request("PATCH", f"{self.check_pk(pk)}", json=data).json()

    def delete(self, pk: int) -> None:
        """Deletes the framework."""
        LOGGER.info("deleting framework with PK: %s", pk)
        self.api_request("DELETE", f"{self.check_pk(pk)}/")
