"""Action parent class."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, ClassVar, Literal

import requests

from ufdl_client.errors.actions import ConnectionClosedError
from ufdl_client.errors.handling import ErrorHandlingConfig, raise_ufdl_api_error

if TYPE_CHECKING:
    from os import PathLike

    from requests import Response
    from requests.sessions import (  # type: ignore[attr-defined]
        _Data,
        _Files,
        _Params,
        _Timeout,
    )

    from ufdl_client.connection import Connection

LOGGER = logging.getLogger(__name__)

DOWNLOAD_CHUNK_SIZE = 8192


class Action:
    """Base class for the resource specific actions.

    An action keeps the connection it was created with and holds no other state,
    so one instance can be shared between threads.
    """

    """The display name of the action."""
    name: ClassVar[str]
    """The URL path of the resource, e.g. `/v1/core/users/`, the api paths of the methods are appended."""
    path: ClassVar[str]

    def __init__(self, connection: Connection) -> None:
        self._connection = connection

    @property
    def connection(self) -> Connection:
        """The connection this action was created with."""
        return self._connection

    def api_url(self, api_path: str = "") -> str:
        """Returns the URL for the api path below :py:attr:`path`."""
        return self._connection.server.build(self.path + api_path)

    def _send(self, request: requests.Request, stream: bool | None, timeout: _Timeout | None) -> Response:
        session = self._connection.session
        prepared = session.prepare_request(request)
        settings = session.merge_environment_settings(prepared.url, {}, stream, None, None)
        return session.send(prepared, timeout=timeout, allow_redirects=True, **settings)

    def api_request(
        self,
        method: str,
        api_path: str = "",
        params: _Params | None = None,
        data: _Data | None = None,
        json: Any | None = None,  # noqa: ANN401
        headers: dict | None = None,
        files: _Files | None = None,
        stream: bool | None = None,
        timeout: _Timeout | None = None,
        error_handling: ErrorHandlingConfig | Literal[False] | None = None,
    ) -> Response:
        """Make an authenticated request to the UFDL API.

        The `api_path` argument is only the part after :py:attr:`path`.
        For http://localhost:8000/v1/core/users/1/ this would be only "1/".

        When the backend rejects the access token (401), the token gets refreshed
        and the request is sent exactly once more.
        If the refresh fails, the error for the original response is raised.

        Args:
            method: see :py:meth:`requests.Session.request`
            api_path: **only** the api path
            params: see :py:meth:`requests.Session.request`
            data: see :py:meth:`requests.Session.request`
            json: see :py:meth:`requests.Session.request`
            headers: see :py:meth:`requests.Session.request`
            files: see :py:meth:`requests.Session.request`
            stream: see :py:meth:`requests.Session.request`
            timeout: see :py:meth:`requests.Session.request`
            error_handling: error handling config; if set to False, errors won't be automatically handled

        Raises:
            ConnectionClosedError: if the connection was closed
        """
        if self._connection.closed:
            raise ConnectionClosedError
        request = requests.Request(
            method=method,
            url=self.api_url(api_path),
            params=params,
            data=data,
            json=json,
            headers=headers,
            files=files,
        )
        response = self._send(request, stream, timeout)
        if response.status_code == 401 and self._connection.authentication.handle_unauthorized(response):  # noqa: PLR2004
            response.close()
            response = self._send(request, stream, timeout)
        raise_ufdl_api_error(response, error_handling)
        return response

    def download(
        self,
        api_path: str,
        output: PathLike[str] | str,
        params: _Params | None = None,
        error_handling: ErrorHandlingConfig | Literal[False] | None = None,
    ) -> Response:
        """Streams the response body of a GET request into a file.

        Args:
            api_path: **only** the api path
            output: the file to write to, it is only created if the request succeeded
            params: see :py:meth:`requests.Session.request`
            error_handling: see :py:meth:`Action.api_request`
        """
        response = self.api_request("GET", api_path, params=params, stream=True, error_handling=error_handling)
        with response, Path(output).open("wb") as fd:
            for chunk in response.iter_content(chunk_size=DOWNLOAD_CHUNK_SIZE):
                fd.write(chunk)
        return response

    @staticmethod
    def check_pk(pk: int) -> int:
        """Returns the primary key, raises ValueError if it is -1 or not an int."""
        if not isinstance(pk, int) or isinstance(pk, bool) or pk == -1:
            msg = f"Invalid PK: {pk!r}"
            raise ValueError(msg)
        return pk

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(name={self.name!r}, path={self.path!r})>"


class ListAction(Action):
    """Action for resources that are listed via `POST list` with an optional filter."""

    """The singular name of the resource, used in the log messages."""
    resource_name: ClassVar[str]

    def api_list(self, filter_spec: dict | None = None, **kwargs) -> Response:
        """Lists the resources.

        Args:
            filter_spec: the filter to apply, e.g. {"expressions": [...], "order_by": [...]}
            **kwargs: gets passed to :py:meth:`Action.api_request`
        """
        return self.api_request("POST", "list", json=filter_spec, **kwargs)

    def list(self, filter_spec: dict | None = None) -> list[dict]:
        """Returns the resources, optionally filtered.

        Args:
            filter_spec: see :py:meth:`ListAction.api_list`
        """
        LOGGER.info("listing %s%s", self.name.lower(), "" if filter_spec is None else f", filter: {filter_spec}")
        return self.api_list(filter_spec).json()

    def api_load(self, pk: int, **kwargs) -> Response:
        """Loads a resource by primary key.

        Args:
            pk: the primary key
            **kwargs: gets passed to :py:meth:`Action.api_request`
        """
        return self.api_request("GET", f"{self.check_pk(pk)}", **kwargs)

    def load(self, pk: int) -> dict:
        """Returns the resource with the primary key."""
        LOGGER.info("loading %s with id: %s", self.resource_name, pk)
        return self.api_load(pk).json()

    def load_by_name(self, name: str) -> dict | None:
        """Returns the first resource with the name, None if there is none."""
        LOGGER.info("loading %s with name: %s", self.resource_name, name)
        for resource in self.list():
            if resource.get("name") == name:
                return resource
        return None
