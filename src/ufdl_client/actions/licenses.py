"""Implementation of the licences API."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Literal

from ufdl_client.actions.action import ListAction

if TYPE_CHECKING:
    from collections.abc import Iterable

    import requests

LOGGER = logging.getLogger(__name__)

SubdescriptorType = Literal["domains", "permissions", "conditions", "limitations"]
"""The kinds of subdescriptors a licence has."""


class Licenses(ListAction):
    """For managing the licences."""

    name = "Licenses"
    path = "/v1/licences/"
    resource_name = "licence"

    def create(self, name: str, url: str) -> dict:
        """Creates a licence and returns it.

        Args:
            name: the name of the licence
            url: the URL of the licence text
        """
        LOGGER.info("creating licence: %s", name)
        return self.api_request("POST", "create", json={"name": name, "url": url}).json()

    def update(self, pk: int, name: str, url: str) -> dict:
        """Replaces all fields of the licence and returns it."""
        LOGGER.info("updating licence with PK: %s", pk)
        return self.api_request("PUT", f"{self.check_pk(pk)}", json={"name": name, "url": url}).json()

    def partial_update(self, pk: int, name: str | None = None, url: str | None = None) -> dict:
        """Updates only the fields that are not None and returns the licence."""
        data = {}
        if name is not None:
            data["name"] = name
        if url is not None:
            data["url"] = url
        LOGGER.info("partially updating licence with PK: %s", pk)
        return self.api_request("PATCH", f"{self.check_pk(pk)}", json=data).json()

    def api_subdescriptors(
        self, pk: int, method: Literal["add", "remove"], type_: SubdescriptorType, names: Iterable[str], **kwargs
    ) -> requests.Response:
        """Modifies the subdescriptors of a licence.

        Args:
            pk: the primary key of the licence
            method: 'add' or 'remove'
            type_: the kind of subdescriptors
            names: the subdescriptors
            **kwargs: gets passed to :py:meth:`Action.api_request`
        """
        return self.api_request(
            "PATCH",
            f"{self.check_pk(pk)}/subdescriptors",
            json={"method": method, "type": type_, "names": list(names)},
            **kwargs,
        )

    def add_subdescriptors(self, pk: int, type_: SubdescriptorType, names: Iterable[str]) -> dict:
        """Adds the subdescriptors to the licence and returns it."""
        LOGGER.info("adding %s to licence %s", type_, pk)
        return self.api_subdescriptors(pk, "add", type_, names).json()

    def remove_subdescriptors(self, pk: int, type_: SubdescriptorType, names: Iterable[str]) -> dict:
        """Removes the subdescriptors from the licence and returns it."""
        LOGGER.info("removing %s from licence %s", type_, pk)
        return self.api_subdescriptors(pk, "remove", type_, names).json()

    def delete(self, pk: int) -> None:
        """Deletes the licence."""
        LOGGER.info("deleting licence with PK: %s", pk)
        self.api_request("DELETE", f"{self.check_pk(pk)}/")
