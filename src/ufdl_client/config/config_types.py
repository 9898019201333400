"""Types that are needed for the Configuration classes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal
from urllib.parse import urlsplit

from ufdl_client.errors.config import ServerConfigError

"""Token is not a different class, it is exactly the same as a str, this is only for code clarity."""
Token = str

DEFAULT_SERVER_URL = "http://localhost:8000"

TokenStorageType = Literal["memory", "local"]
"""Where tokens are kept between runs, see :py:mod:`ufdl_client.config.token_storage`."""


class Server:
    """The UFDL backend location, builds the endpoint URLs.

    The url never ends with a slash, so :py:meth:`Server.build` always joins with exactly one.
    Instances are not modified after creation, switching the backend creates a new Server.
    """

    def __init__(self, url: str = DEFAULT_SERVER_URL) -> None:
        url = url.rstrip("/")
        parts = urlsplit(url)
        if not parts.scheme or not parts.netloc:
            raise ServerConfigError(url)
        self._url = url

    @property
    def url(self) -> str:
        """The base URL of the backend, without trailing slash."""
        return self._url

    def build(self, path: str) -> str:
        """Combines the base URL with the path."""
        if not path.startswith("/"):
            path = "/" + path
        return self._url + path

    def __repr__(self) -> str:
        return self._url

    def __eq__(self, o: Server | object):
        if isinstance(o, Server):
            return o.url == self.url
        return object.__eq__(self, o)

    def __hash__(self) -> int:
        return hash(self._url)


@dataclass(frozen=True)
class Tokens:
    """The access/refresh token pair, replaced as a whole on login and refresh.

    Args:
        access: the short lived bearer token
        refresh: the token used to obtain a new access token
        obtained_at: unix timestamp when the pair was obtained, None if it was loaded from a token storage
    """

    access: Token | None = None
    refresh: Token | None = None
    obtained_at: float | None = None

    def is_valid(self) -> bool:
        """Checks whether both tokens are set (ie not None and not empty)."""
        return bool(self.access) and bool(self.refresh)

    def __repr__(self) -> str:
        return (
            f"<{self.__class__.__name__}(access={'***' if self.access else None},"
            f" refresh={'***' if self.refresh else None}, obtained_at={self.obtained_at})>"
        )
