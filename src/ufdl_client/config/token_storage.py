"""Token storage handlers, they keep obtained tokens between requests or between runs.

Tokens are stored per server URL and user.
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import TYPE_CHECKING

from ufdl_client.config.config_types import Tokens
from ufdl_client.errors.config import UFDLConfigError
from ufdl_client.utils.config import user_tokens_file

if TYPE_CHECKING:
    from os import PathLike

    from ufdl_client.config.authentication import Authentication
    from ufdl_client.config.config_types import TokenStorageType

LOGGER = logging.getLogger(__name__)


def _storage_key(auth: Authentication) -> tuple[str, str] | None:
    if auth.server is None:
        return None
    return auth.server.url, auth.user


class TokenStorageHandler:
    """Parent class for all token storage handlers."""

    def load(self, auth: Authentication) -> Tokens | None:
        """Returns the stored tokens for the server/user of the authentication, None if there are none."""
        msg = "This is only the base TokenStorageHandler class and does not implement loading tokens."
        raise NotImplementedError(msg)

    def store(self, auth: Authentication, tokens: Tokens) -> None:
        """Stores the tokens for the server/user of the authentication."""
        msg = "This is only the base TokenStorageHandler class and does not implement storing tokens."
        raise NotImplementedError(msg)

    def clear(self, auth: Authentication) -> None:
        """Removes the stored tokens for the server/user of the authentication."""
        msg = "This is only the base TokenStorageHandler class and does not implement clearing tokens."
        raise NotImplementedError(msg)


class MemoryOnlyStorage(TokenStorageHandler):
    """Keeps the tokens only in memory, nothing survives the process."""

    def __init__(self) -> None:
        self._tokens: dict[tuple[str, str], Tokens] = {}
        self._lock = threading.Lock()

    def load(self, auth: Authentication) -> Tokens | None:  # noqa: D102
        if (key := _storage_key(auth)) is None:
            return None
        with self._lock:
            return self._tokens.get(key)

    def store(self, auth: Authentication, tokens: Tokens) -> None:  # noqa: D102
        if (key := _storage_key(auth)) is None:
            return
        with self._lock:
            self._tokens[key] = tokens

    def clear(self, auth: Authentication) -> None:  # noqa: D102
        if (key := _storage_key(auth)) is None:
            return
        with self._lock:
            self._tokens.pop(key, None)


class LocalStorage(TokenStorageHandler):
    """Stores the tokens in a JSON file.

    The file looks like this, access token first:

    .. code-block:: json

        {"http://localhost:8000": {"admin": ["<access>", "<refresh>"]}}

    """

    def __init__(self, path: PathLike[str] | str | None = None) -> None:
        """Token storage backed by a JSON file.

        Args:
            path: the token file, defaults to :py:func:`ufdl_client.utils.config.user_tokens_file`
        """
        self.path = Path(path) if path is not None else user_tokens_file()
        self._lock = threading.Lock()

    def _read(self) -> dict:
        if not self.path.exists():
            LOGGER.debug("Token file not present: %s", self.path)
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as fd:
                data = json.load(fd)
        except (OSError, ValueError):
            LOGGER.exception("Failed to load tokens from disk: %s", self.path)
            return {}
        if not isinstance(data, dict):
            LOGGER.warning("Ignoring token file %s, expected a JSON object.", self.path)
            return {}
        return data

    def _write(self, data: dict) -> None:
        LOGGER.debug("Storing tokens on disk: %s", self.path)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("w", encoding="utf-8") as fd:
                json.dump(data, fd)
        except OSError:
            LOGGER.exception("Failed to store tokens on disk: %s", self.path)

    def load(self, auth: Authentication) -> Tokens | None:  # noqa: D102
        if (key := _storage_key(auth)) is None:
            return None
        server_url, user = key
        with self._lock:
            data = self._read()
        server = data.get(server_url)
        pair = server.get(user) if isinstance(server, dict) else None
        if pair is None:
            LOGGER.info("No tokens stored for server/user '%s/%s'.", server_url, user)
            return None
        if not isinstance(pair, list) or len(pair) != 2:  # noqa: PLR2004
            LOGGER.warning("Expected two values (access/refresh) in token array of '%s/%s'.", server_url, user)
            return None
        return Tokens(access=pair[0], refresh=pair[1])

    def store(self, auth: Authentication, tokens: Tokens) -> None:  # noqa: D102
        if (key := _storage_key(auth)) is None:
            return
        if not tokens.is_valid():
            LOGGER.warning("Tokens are not valid, cannot store!")
            return
        server_url, user = key
        with self._lock:
            data = self._read()
            server = data.get(server_url)
            if not isinstance(server, dict):
                server = data[server_url] = {}
            server[user] = [tokens.access, tokens.refresh]
            self._write(data)

    def clear(self, auth: Authentication) -> None:  # noqa: D102
        if (key := _storage_key(auth)) is None:
            return
        server_url, user = key
        with self._lock:
            data = self._read()
            server = data.get(server_url)
            if isinstance(server, dict) and user in server:
                del server[user]
                self._write(data)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(path={self.path!s})>"


def create_token_storage(
    storage_type: TokenStorageType, token_file: PathLike[str] | str | None = None
) -> TokenStorageHandler:
    """Creates the token storage handler for the `token_storage` config setting."""
    if storage_type == "memory":
        return MemoryOnlyStorage()
    if storage_type == "local":
        return LocalStorage(token_file)
    msg = f"The token storage {storage_type} does not exist, use 'memory' or 'local'."
    raise UFDLConfigError(msg)
