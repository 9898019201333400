"""Contains the Connection class, the state shared by all actions of a client."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import requests

from ufdl_client.__about__ import __version__
from ufdl_client.clients.context_client import UFDLSession
from ufdl_client.config.authentication import Authentication
from ufdl_client.config.config import Config
from ufdl_client.config.config_types import DEFAULT_SERVER_URL, Server
from ufdl_client.config.token_storage import create_token_storage

if TYPE_CHECKING:
    from ufdl_client.config.token_storage import TokenStorageHandler

LOGGER = logging.getLogger(__name__)


class Connection:
    """Bundles the requests session, the server and the authentication.

    The session lives as long as the connection, replacing the server or the credentials
    reuses it. Replace them before issuing concurrent requests, not while requests are in flight.
    """

    def __init__(self, config: Config | None = None, session: requests.Session | None = None) -> None:
        """Initializes the connection with the default server and blank credentials.

        Args:
            config: the configuration, defaults to :py:class:`Config` with its defaults
            session: use this session instead of creating a :py:class:`UFDLSession`,
                takes precedence over `config.requests_session`
        """
        self.config = config or Config()
        if session is not None:
            self._session = session
        elif self.config.requests_session is not None:
            self._session = self.config.requests_session
        else:
            self._session = UFDLSession(
                debug=self.config.debug,
                requests_ca_bundle=self.config.requests_ca_bundle,
                timeout=self.config.timeout,
            )
        # always resolves the current authentication, it may be replaced later
        self._session.auth = lambda r: self._authentication.attach(r)
        self._session.headers["User-Agent"] = requests.utils.default_user_agent(
            f"ufdl-client/{__version__}/python-requests"
        )
        self._server = Server(DEFAULT_SERVER_URL)
        self._authentication = self._new_authentication(
            "", "", create_token_storage(self.config.token_storage, self.config.token_file)
        )
        self._closed = False

    def _new_authentication(self, user: str, password: str, storage: TokenStorageHandler) -> Authentication:
        authentication = Authentication(user, password, storage=storage, timeout=self.config.timeout)
        authentication.set_server(self._server)
        authentication.set_requests_session(self._session)
        return authentication

    def set_server(self, url: str) -> Connection:
        """Switches to another UFDL backend.

        The authentication is pointed to the new server, the session is kept.

        Args:
            url: the URL of the backend, e.g. http://localhost:8000

        Returns:
            Connection: the connection itself

        Raises:
            ServerConfigError: if the url has no scheme or host
        """
        self._server = Server(url)
        self._authentication.set_server(self._server)
        LOGGER.debug("Using UFDL server %s", self._server)
        return self

    @property
    def server(self) -> Server:
        """The server context."""
        return self._server

    def set_authentication(self, user: str, password: str, storage: TokenStorageHandler | None = None) -> Connection:
        """Replaces the authentication with a fresh one for the credentials.

        Args:
            user: the user
            password: the password
            storage: the token storage, the storage of the current authentication is kept if None

        Returns:
            Connection: the connection itself
        """
        self._authentication = self._new_authentication(
            user, password, storage if storage is not None else self._authentication.storage
        )
        return self

    @property
    def authentication(self) -> Authentication:
        """The authentication."""
        return self._authentication

    @property
    def session(self) -> requests.Session:
        """The requests session shared by all actions."""
        return self._session

    @property
    def closed(self) -> bool:
        """Whether :py:meth:`close` was called."""
        return self._closed

    def close(self) -> None:
        """Closes the session, calling it again does nothing."""
        if self._closed:
            return
        self._closed = True
        self._session.close()

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(server={self._server!r}, authentication={self._authentication!r})>"
