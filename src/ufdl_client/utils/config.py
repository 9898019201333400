"""Where the configuration comes from.

The config file locations, the ``UFDL_*`` environment variables and the action entry points,
plus the helpers that turn a config section into constructor arguments.
"""

from __future__ import annotations

import inspect
import os
import warnings
from functools import cache
from importlib.metadata import entry_points
from pathlib import Path
from typing import TYPE_CHECKING, Any

import platformdirs

from ufdl_client.errors.config import UFDLConfigError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from ufdl_client.actions.action import Action

APP_NAME = "ufdl"
ENVIRONMENT_VARIABLE_PREFIX = "UFDL_"
CFG_FILE_NAME = "config.toml"
PROJECT_CFG_FILE_NAME = ".ufdl.toml"
TOKENS_FILE_NAME = "tokens.json"
"""The entry point group third-party packages register their action classes in."""
ACTION_ENTRY_POINT_GROUP = "ufdl_action"


@cache
def _dirs() -> platformdirs.PlatformDirs:
    return platformdirs.PlatformDirs(APP_NAME)


@cache
def cfg_files(use_project_config: bool = True) -> dict[Path, None]:
    """The config files in the order they are merged, later files override earlier ones (cached).

    The site config comes first, then the user configs and at last the ``.ufdl.toml``
    of the working directory. The paths are the keys of the returned dict.
    """
    files = [site_cfg_file(), *user_cfg_files()]
    if use_project_config and (project_cfg := find_project_config_file()) is not None:
        files.append(project_cfg)
    return dict.fromkeys(files)


def user_cfg_files() -> tuple[Path, ...]:
    """The config files of the current user."""
    return (
        Path.home() / f".{APP_NAME}" / CFG_FILE_NAME,
        Path.home() / ".config" / APP_NAME / CFG_FILE_NAME,
        _dirs().user_config_path / CFG_FILE_NAME,
    )


def site_cfg_file() -> Path:
    """The system-wide config file."""
    return _dirs().site_config_path / CFG_FILE_NAME


def user_tokens_file() -> Path:
    """The default location of the token file used by the local token storage."""
    return _dirs().user_config_path / TOKENS_FILE_NAME


def find_project_config_file(project_directory: Path | None = None) -> Path | None:
    """Returns the ``.ufdl.toml`` in the project directory, None if there is none.

    Args:
        project_directory: defaults to the working directory
    """
    project_config = (project_directory or Path.cwd()) / PROJECT_CFG_FILE_NAME
    return project_config if project_config.is_file() else None


def merge_dicts(base: dict, override: dict) -> dict:
    """Returns `base` updated with `override`, nested dicts are merged key by key.

    A None in `override` keeps the value of `base`. Neither argument is modified.
    """
    if not isinstance(base, dict) or not isinstance(override, dict):
        return base if override is None else override
    merged = dict(base)
    for key, value in override.items():
        merged[key] = merge_dicts(merged[key], value) if key in merged else value
    return merged


def get_environment_variable_config(environ: Mapping[str, str] | None = None) -> dict:
    """Returns the config set by ``UFDL_*`` environment variables.

    ``UFDL_<SECTION>__<KEY>`` sets `key` in the `section`, e.g. ``UFDL_CREDENTIALS__SERVER``.
    ``UFDL_PROFILE`` selects the profile, an empty value unsets it.
    The values 'true' and 'false' (in any case) become booleans.

    Args:
        environ: the variables to read, defaults to :py:data:`os.environ`
    """
    environ = os.environ if environ is None else environ
    config: dict = {}
    for name, value in environ.items():
        if not name.startswith(ENVIRONMENT_VARIABLE_PREFIX):
            continue
        keys = name[len(ENVIRONMENT_VARIABLE_PREFIX) :].lower().split("__")
        if keys == ["profile"]:
            config["profile"] = value or None
            continue
        if len(keys) < 2 or not all(keys):  # noqa: PLR2004
            warnings.warn(f"{name} is not a valid UFDL configuration environment variable.")
            continue
        section = config
        for key in keys[:-1]:
            if not isinstance(section.get(key), dict):
                section[key] = {}
            section = section[key]
        section[keys[-1]] = _env_value(value)
    return config


def _env_value(value: str) -> str | bool:
    return {"true": True, "false": False}.get(value.lower(), value)


def config_kwargs(init_class: type, section: str, values: Mapping[str, Any]) -> dict[str, Any]:
    """Returns the values of a config section that `init_class` accepts as keyword arguments.

    Unknown keys are left out with a warning.

    Raises:
        UFDLConfigError: if a required argument of `init_class` is missing in the section
    """
    parameters = {
        name: parameter
        for name, parameter in inspect.signature(init_class).parameters.items()
        if parameter.kind in (parameter.POSITIONAL_OR_KEYWORD, parameter.KEYWORD_ONLY)
    }
    for name, parameter in parameters.items():
        if parameter.default is parameter.empty and name not in values:
            msg = f"{section}.{name} is missing to create {init_class.__name__}."
            raise UFDLConfigError(msg)
    kwargs = {}
    for name, value in values.items():
        if name in parameters:
            kwargs[name] = value
        else:
            warnings.warn(f"{section}.{name} is not a valid config option for {init_class.__name__}.")
    return kwargs


def load_action_entry_point(name: str) -> type[Action] | None:
    """Loads the action class registered as `name` in the ``ufdl_action`` entry point group.

    Only that entry point is loaded, None if there is none with this name.
    """
    for entry_point in entry_points(group=ACTION_ENTRY_POINT_GROUP):
        if entry_point.name == name:
            return entry_point.load()
    return None
