"""Implementation of the users API."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ufdl_client.actions.action import Action

if TYPE_CHECKING:
    import requests

LOGGER = logging.getLogger(__name__)


class Users(Action):
    """For managing the users."""

    name = "Users"
    path = "/v1/core/users/"

    def api_list(self, **kwargs) -> requests.Response:
        """Lists the users.

        Args:
            **kwargs: gets passed to :py:meth:`Action.api_request`
        """
        return self.api_request("GET", **kwargs)

    def list(self) -> list[dict]:
        """Returns all users.

        .. code-block:: python

           [
               {
                   "pk": 1,
                   "username": "admin",
                   "first_name": "",
                   "last_name": "",
                   "email": "admin@example.com",
                   "is_staff": True,
                   ...
               },
           ]

        """
        LOGGER.info("listing users")
        return self.api_list().json()

    def api_load(self, pk: int, **kwargs) -> requests.Response:
        """Loads a user by primary key.

        Args:
            pk: the primary key of the user
            **kwargs: gets passed to :py:meth:`Action.api_request`
        """
        return self.api_request("GET", f"{self.check_pk(pk)}", **kwargs)

    def load(self, pk: int) -> dict:
        """Returns the user with the primary key."""
        LOGGER.info("loading user with id: %s", pk)
        return self.api_load(pk).json()

    def load_by_name(self, name: str) -> dict | None:
        """Returns the user with the user name, None if there is none."""
        LOGGER.info("loading user with name: %s", name)
        for user in self.list():
            if user.get("username") == name:
                return user
        return None

    def api_create(self, data: dict, **kwargs) -> requests.Response:
        """Creates a user.

        Args:
            data: the user fields
            **kwargs: gets passed to :py:meth:`Action.api_request`
        """
        return self.api_request("POST", json=data, **kwargs)

    def create(self, username: str, password: str, first_name: str, last_name: str, email: str) -> dict:
        """Creates a user and returns it."""
        LOGGER.info("creating user: %s", username)
        return self.api_create(
            {
                "username": username,
                "password": password,
                "first_name": first_name,
                "last_name": last_name,
                "email": email,
            }
        ).json()

    def api_delete(self, pk: int, **kwargs) -> requests.Response:
        """Deletes a user.

        Args:
            pk: the primary key of the user
            **kwargs: gets passed to :py:meth:`Action.api_request`
        """
        return self.api_request("DELETE", f"{self.check_pk(pk)}/", **kwargs)

    def delete(self, pk: int) -> None:
        """Deletes the user with the primary key."""
        LOGGER.info("deleting user with PK: %s", pk)
        self.api_delete(pk)
