"""UFDL client configuration custom exceptions."""

from __future__ import annotations

from ufdl_client.errors.meta import UFDLError


class UFDLConfigError(UFDLError):
    """Error meta class for all config related Errors."""


class MissingCredentialsConfigError(UFDLConfigError):
    """Error if no credentials config is available."""

    def __init__(self) -> None:
        super().__init__(
            "To create a Client you need to provide a server and credentials.\n"
            "Either through the Client parameters or through the config file.",
        )


class ServerConfigError(UFDLConfigError):
    """Raised when the backend URL is not an absolute URL with scheme and host."""

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"Invalid UFDL server URL {url!r}, expected something like 'http://localhost:8000'.")
