"""Python client for the UFDL dataset management backend."""

from ufdl_client.__about__ import __version__
from ufdl_client.client import ActionKind, Client
from ufdl_client.config.authentication import Authentication, AuthState
from ufdl_client.config.config import Config
from ufdl_client.config.config_types import Server, Tokens
from ufdl_client.config.token_storage import LocalStorage, MemoryOnlyStorage
from ufdl_client.connection import Connection

__all__ = [
    "__version__",
    "ActionKind",
    "Authentication",
    "AuthState",
    "Client",
    "Config",
    "Connection",
    "LocalStorage",
    "MemoryOnlyStorage",
    "Server",
    "Tokens",
]
