"""Metaclasses for all UFDL client exceptions/errors."""

from __future__ import annotations

import shutil
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import requests


class UFDLError(Exception):
    """Metaclass for :class:`UFDLAPIError`.

    Catch all ufdl_client errors:

    .. code-block:: python

        try:
            fun()  # raise ResourceNotFoundError or any other
        except UFDLError:
            print("Some ufdl_client error")

    """


class UFDLAPIError(UFDLError):
    """Parent class for all UFDL api errors.

    All "child" errors can be caught with this parent class e.g.:

    .. code-block:: python

        try:
            abcd()  # could raise PermissionDeniedError or ResourceNotFoundError
        except UFDLAPIError as e:
            print(e)

    """

    message = "Details about the UFDL API error:\n"

    def __init__(self, response: requests.Response | None = None, info: str | None = None, **kwargs) -> None:
        """Initialize a UFDL API error.

        Args:
            response: requests Response where the API error occured
            info: add additional information to this error
            kwargs: error specific parameters which may contain more information about the error
        """
        self.response = response
        self.kwargs = kwargs
        self.info = info
        if api_message := self.kwargs.get("detail"):
            # the backend puts its human readable message into "detail"
            self.message = str(api_message)
            del self.kwargs["detail"]
        term_size = shutil.get_terminal_size().columns
        msg = self.message
        if self.info:
            msg += f"\n{self.info}\n"
        else:
            msg += "\n"
        request_sep = "-" * int((term_size - 7) / 2)
        msg += request_sep + "REQUEST" + request_sep + "\n"
        if self.response is not None and self.response.request is not None:
            if self.response.request.method:
                msg += "METHOD = " + self.response.request.method + "\n"
            if ct := self.response.request.headers.get("content-type"):
                msg += "CONTENT-TYPE = " + ct + "\n"
            msg += "ENDPOINT = " + self.response.request.path_url + "\n"

        if len(self.kwargs) > 0:
            param_sep = "-" * int((term_size - 10) / 2)
            msg += param_sep + "PARAMETERS" + param_sep + "\n"
            for k, v in self.kwargs.items():
                msg += str(k) + " = " + str(v) + "\n"

        response_sep = "-" * int((term_size - 8) / 2)
        msg += response_sep + "RESPONSE" + response_sep + "\n"

        if self.response is not None:
            msg += f"STATUS = {self.response.status_code}\n"

        super().__init__(msg)

    @property
    def status_code(self) -> int | None:
        """The HTTP status code of the failed response, if there is one."""
        if self.response is None:
            return None
        return self.response.status_code

    def __dir__(self):
        yield from super().__dir__()
        yield from self.kwargs.keys()

    def __getattr__(self, name: str):
        return self.kwargs.get(name) or super().__getattribute__(name)
