"""Contains the Client class, the registry of the actions sharing one connection."""

from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import TYPE_CHECKING

from ufdl_client.actions.action import Action
from ufdl_client.actions.datasets import Datasets
from ufdl_client.actions.domains import Domains
from ufdl_client.actions.frameworks import Frameworks
from ufdl_client.actions.licenses import Licenses
from ufdl_client.actions.projects import Projects
from ufdl_client.actions.teams import Teams
from ufdl_client.actions.users import Users
from ufdl_client.config.config import get_config_dict, parse_credentials_config, parse_general_config
from ufdl_client.connection import Connection
from ufdl_client.errors.actions import ActionInstantiationError
from ufdl_client.utils.config import load_action_entry_point

if TYPE_CHECKING:
    from types import TracebackType

    from ufdl_client.config.config import Config

LOGGER = logging.getLogger(__name__)


class ActionKind(Enum):
    """The built-in resource kinds and their action classes."""

    USERS = "users"
    DATASETS = "datasets"
    PROJECTS = "projects"
    TEAMS = "teams"
    LICENSES = "licenses"
    DOMAINS = "domains"
    FRAMEWORKS = "frameworks"

    @property
    def action_class(self) -> type[Action]:
        """The action class for this kind."""
        return ACTION_CLASSES[self]


ACTION_CLASSES: dict[ActionKind, type[Action]] = {
    ActionKind.USERS: Users,
    ActionKind.DATASETS: Datasets,
    ActionKind.PROJECTS: Projects,
    ActionKind.TEAMS: Teams,
    ActionKind.LICENSES: Licenses,
    ActionKind.DOMAINS: Domains,
    ActionKind.FRAMEWORKS: Frameworks,
}

"""The kinds that are created when the client is constructed."""
CORE_KINDS = (ActionKind.USERS, ActionKind.DATASETS, ActionKind.PROJECTS, ActionKind.TEAMS)


def resolve_action_class(kind: ActionKind | str | type[Action]) -> type[Action]:
    """Returns the action class for the kind.

    Args:
        kind: an :py:class:`ActionKind`, its value, the name of an action registered
            via the `ufdl_action` entry point group, or an :py:class:`Action` subclass

    Raises:
        ActionInstantiationError: if the kind can't be resolved
    """
    if isinstance(kind, ActionKind):
        return kind.action_class
    if isinstance(kind, type):
        if issubclass(kind, Action) and kind is not Action:
            return kind
        raise ActionInstantiationError(kind, "not an Action subclass")
    if isinstance(kind, str):
        try:
            return ActionKind(kind).action_class
        except ValueError:
            pass
        try:
            action_class = load_action_entry_point(kind)
        except Exception as e:
            raise ActionInstantiationError(kind, f"failed to load the entry point: {e}") from e
        if action_class is None:
            raise ActionInstantiationError(kind, "unknown action kind")
        if not isinstance(action_class, type) or not issubclass(action_class, Action):
            raise ActionInstantiationError(kind, "the entry point is not an Action subclass")
        return action_class
    raise ActionInstantiationError(kind, "unknown action kind")


class Client:
    """The entry point for applications, hands out the actions of a UFDL backend.

    Every action kind has one cached instance per client, all of them share the
    :py:class:`~ufdl_client.connection.Connection` of the client.

    .. code-block:: python

        with Client("http://localhost:8000", "admin", "admin") as client:
            for user in client.users.list():
                print(user["username"])

    """

    def __init__(
        self,
        server: str | None = None,
        user: str | None = None,
        password: str | None = None,
        config: Config | None = None,
        profile: str | None = None,
    ) -> None:
        """Creates the connection and the core actions.

        Args:
            server: the URL of the UFDL backend, read from the credentials config if None
            user: the user, read from the credentials config if None
            password: the password, read from the credentials config if None
            config: the configuration, read from the config files and environment if None
            profile: the config profile to use
        """
        if config is None or server is None or user is None or password is None:
            config_dict = get_config_dict(profile)
            config = config or parse_general_config(config_dict)
            credentials = parse_credentials_config(config_dict)
            server = server if server is not None else credentials.server
            user = user if user is not None else credentials.user
            password = password if password is not None else credentials.password

        if config.rich_traceback:
            from rich.traceback import install

            install()

        self._connection = Connection(config)
        try:
            self._connection.set_server(server).set_authentication(user, password)
        except Exception:
            self._connection.close()
            raise
        self._actions: dict[type[Action], Action] = {}
        self._lock = threading.Lock()

        for kind in CORE_KINDS:
            try:
                self.action(kind)
            except Exception:
                LOGGER.exception("Failed to create the %s action", kind.value)

    @property
    def connection(self) -> Connection:
        """The connection shared by all actions."""
        return self._connection

    def new_action(self, kind: ActionKind | str | type[Action]) -> Action:
        """Returns a new action instance, the cached one is left untouched.

        Args:
            kind: see :py:func:`resolve_action_class`

        Raises:
            ActionInstantiationError: if the kind can't be resolved or the action fails to initialize
        """
        action_class = resolve_action_class(kind)
        try:
            return action_class(self._connection)
        except Exception as e:
            raise ActionInstantiationError(kind, str(e)) from e

    def action(self, kind: ActionKind | str | type[Action]) -> Action:
        """Returns the cached action instance, it gets created on first use.

        Args:
            kind: see :py:func:`resolve_action_class`

        Raises:
            ActionInstantiationError: if the kind can't be resolved or the action fails to initialize
        """
        action_class = resolve_action_class(kind)
        with self._lock:
            if (action := self._actions.get(action_class)) is None:
                action = self._actions[action_class] = self.new_action(action_class)
            return action

    @property
    def users(self) -> Users:
        """Returns the :py:class:`~ufdl_client.actions.users.Users` action."""
        return self.action(ActionKind.USERS)  # type: ignore[return-value]

    @property
    def datasets(self) -> Datasets:
        """Returns the :py:class:`~ufdl_client.actions.datasets.Datasets` action."""
        return self.action(ActionKind.DATASETS)  # type: ignore[return-value]

    @property
    def projects(self) -> Projects:
        """Returns the :py:class:`~ufdl_client.actions.projects.Projects` action."""
        return self.action(ActionKind.PROJECTS)  # type: ignore[return-value]

    @property
    def teams(self) -> Teams:
        """Returns the :py:class:`~ufdl_client.actions.teams.Teams` action."""
        return self.action(ActionKind.TEAMS)  # type: ignore[return-value]

    @property
    def licenses(self) -> Licenses:
        """Returns the :py:class:`~ufdl_client.actions.licenses.Licenses` action."""
        return self.action(ActionKind.LICENSES)  # type: ignore[return-value]

    @property
    def domains(self) -> Domains:
        """Returns the :py:class:`~ufdl_client.actions.domains.Domains` action."""
        return self.action(ActionKind.DOMAINS)  # type: ignore[return-value]

    @property
    def frameworks(self) -> Frameworks:
        """Returns the :py:class:`~ufdl_client.actions.frameworks.Frameworks` action."""
        return self.action(ActionKind.FRAMEWORKS)  # type: ignore[return-value]

    def close(self) -> None:
        """Closes the connection, the actions can't be used afterwards."""
        self._connection.close()

    def __enter__(self) -> Client:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(connection={self._connection!r})>"
