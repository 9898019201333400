"""Errors raised by the action registry and the resource actions."""

from __future__ import annotations

from ufdl_client.errors.meta import UFDLAPIError, UFDLError


class ActionInstantiationError(UFDLError):
    """Raised when an action kind can't be resolved or its class can't be constructed."""

    def __init__(self, kind: object, reason: str | None = None) -> None:
        self.kind = kind
        msg = f"Could not create action for {kind!r}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class ConnectionClosedError(UFDLError):
    """Raised when a request is made after the client/connection was closed."""

    def __init__(self) -> None:
        super().__init__("The connection is closed, create a new Client.")


class PermissionDeniedError(UFDLAPIError):
    """Exception is thrown when the user is not allowed to perform the operation."""

    message = "You are not allowed to perform this operation!"


class ResourceNotFoundError(UFDLAPIError):
    """Exception is thrown when the requested resource does not exist."""

    message = "The resource does not exist!"
