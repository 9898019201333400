"""Authentication specific errors."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ufdl_client.errors.meta import UFDLAPIError, UFDLError

if TYPE_CHECKING:
    import requests


class AuthenticationFailedError(UFDLAPIError):
    """Exception is thrown when the credentials were rejected or the tokens could not be renewed.

    Once raised, the :py:class:`~ufdl_client.config.authentication.Authentication` stays failed
    until new credentials are set via :py:meth:`ufdl_client.connection.Connection.set_authentication`.
    """

    def __init__(
        self, response: requests.Response | None = None, info: str | None = None, user: str | None = None, **kwargs
    ):
        self.user = user
        self.message = "Authentication failed, the credentials were rejected by the UFDL backend."

        super().__init__(response=response, info=info, **kwargs)


class TokenProtocolError(UFDLError):
    """Raised when the login/refresh endpoints answer with an unexpected response.

    This points to a version mismatch between client and backend, not to wrong credentials.
    """

    def __init__(self, endpoint: str, body: str | None = None) -> None:
        self.endpoint = endpoint
        self.body = body
        msg = f"Unexpected token response from {endpoint}"
        if body is not None:
            msg += f": {body[:200]}"
        super().__init__(msg)
