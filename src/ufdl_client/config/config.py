"""Classes and logic for the Configuration."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from ufdl_client.config.config_types import DEFAULT_SERVER_URL
from ufdl_client.errors.config import MissingCredentialsConfigError, UFDLConfigError
from ufdl_client.utils.config import (
    cfg_files,
    config_kwargs,
    get_environment_variable_config,
    merge_dicts,
)

if TYPE_CHECKING:
    from collections.abc import Iterable
    from os import PathLike

    import requests

    from ufdl_client.config.config_types import TokenStorageType

# compatibility for python version < 3.11
if sys.version_info < (3, 11):
    import tomli as tomllib
else:
    import tomllib


class Config:
    """Class for Configuration options."""

    def __init__(
        self,
        requests_ca_bundle: PathLike[str] | str | None = None,
        timeout: float | None = None,
        token_storage: TokenStorageType = "memory",
        token_file: PathLike[str] | str | None = None,
        rich_traceback: bool = False,
        debug: bool = False,
        requests_session: requests.Session | None = None,
    ) -> None:
        """Initialize the configuration.

        Args:
            requests_ca_bundle: a path to a CA bundle if :py:mod:`requests` needs custom certificates to work
                e.g. in a corporate network
            timeout: the read timeout in seconds for requests that don't set one, None waits forever
            token_storage: 'memory' keeps the tokens only for this process,
                'local' stores them in :py:attr:`token_file` to reuse them in the next run
            token_file: path to the token file of the 'local' token storage,
                default is :py:func:`~ufdl_client.utils.config.user_tokens_file`
            rich_traceback: enables a prettier traceback provided by the module `rich` See: https://rich.readthedocs.io/en/stable/traceback.html
            debug: enables debug logging
            requests_session (requests.Session): Overwrite the default used requests.Session.

        """
        self.requests_ca_bundle = os.fspath(requests_ca_bundle) if requests_ca_bundle else None
        self.timeout = float(timeout) if timeout is not None else None
        if token_storage not in ("memory", "local"):
            msg = f"config.token_storage needs to be 'memory' or 'local', not {token_storage!r}."
            raise UFDLConfigError(msg)
        self.token_storage = token_storage
        self.token_file = Path(token_file) if token_file is not None else None
        self.rich_traceback = bool(rich_traceback)
        self.debug = bool(debug)
        self.requests_session = requests_session

    def __repr__(self) -> str:
        return "<" + self.__class__.__name__ + "(" + self.__dict__.__str__() + ")>"


class Credentials:
    """The server and the user credentials from the credentials config."""

    def __init__(self, server: str = DEFAULT_SERVER_URL, user: str = "", password: str = "") -> None:
        self.server = server
        self.user = user
        self.password = password

    def __repr__(self) -> str:
        return (
            f"<{self.__class__.__name__}(server={self.server!r}, user={self.user!r},"
            f" password={'*' * len(self.password)!r})>"
        )


def _load_config_file(config_file: Path) -> dict | None:
    try:
        with config_file.open("rb") as config_file_fd:
            return tomllib.load(config_file_fd)
    except OSError:
        return None


def _load_config_files(config_files: Iterable[Path]) -> dict:
    """Merges the given config files.

    The last file wins.
    """
    config = {}
    for cfg_file in config_files:
        if cfg_file.exists():
            c = _load_config_file(cfg_file) or {}
            config = merge_dicts(config, c)
    return config


def _pure_config_dict(env: bool = True) -> dict:
    config = _load_config_files(cfg_files())
    if env:
        config = merge_dicts(config, get_environment_variable_config())
    return config


def get_config_dict(profile: str | None = None, env: bool = True) -> dict | None:
    """Loads config from the config files and environment variables.

    Profiles make configs like this possible:

    .. code-block:: toml

        [credentials]
        server = "https://ufdl.example.com"

        [integration.credentials]
        server = "http://localhost:8000"

    Where 'integration.credentials' will be merged over 'credentials'
    if the profile is set to integration.

    Args:
        profile: The profile to use, if None the default profile is used
        env: Whether to load the environment variables
    """
    config = _pure_config_dict(env=env)
    if not config:
        return None
    if profile is None:
        profile = config.get("profile")
    if profile in ("config", "credentials"):
        msg = f"Profile name can't be {profile}"
        raise AttributeError(msg)
    if profile and (profile_config := config.get(profile)) and isinstance(profile_config, dict):
        profile_credentials = profile_config.get("credentials", {})
        profile_config = profile_config.get("config", {})
    else:
        profile_credentials = {}
        profile_config = {}

    return_config = {}
    if merged_config := merge_dicts(config.get("config", {}), profile_config):
        return_config["config"] = merged_config
    if merged_credentials := merge_dicts(config.get("credentials", {}), profile_credentials):
        return_config["credentials"] = merged_credentials
    return return_config


def parse_credentials_config(config_dict: dict | None, required: bool = False) -> Credentials:
    """Parses the credentials config dictionary and returns a Credentials object.

    Args:
        config_dict: the dict returned by :py:func:`get_config_dict`
        required: raise :py:class:`MissingCredentialsConfigError` instead of returning the defaults,
            if there is no credentials config
    """
    if config_dict is not None and (credentials_config := config_dict.get("credentials")):
        return Credentials(**config_kwargs(Credentials, "credentials", dict(credentials_config)))
    if required:
        raise MissingCredentialsConfigError
    return Credentials()


def parse_general_config(config_dict: dict | None = None) -> Config:
    """Parses the config dictionary and returns a Config object."""
    if config_dict is not None and (general_config := config_dict.get("config")):
        return Config(**config_kwargs(Config, "config", dict(general_config)))
    return Config()
