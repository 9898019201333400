"""Error handling configuration for UFDLAPIErrors."""

from __future__ import annotations

import logging
from typing import Literal

import requests

from ufdl_client.errors.actions import PermissionDeniedError, ResourceNotFoundError
from ufdl_client.errors.auth import AuthenticationFailedError
from ufdl_client.errors.meta import UFDLAPIError

LOGGER = logging.getLogger(__name__)

DEFAULT_ERROR_MAPPING: dict[int | None, type[UFDLAPIError]] = {
    None: UFDLAPIError,
    401: AuthenticationFailedError,
    403: PermissionDeniedError,
    404: ResourceNotFoundError,
}
"""This mapping maps the HTTP status codes coming from the API to the UFDL client classes."""


class ErrorHandlingConfig:
    """Configuration for UFDL error handling."""

    def __init__(
        self,
        api_error_mapping: dict[int, type[UFDLAPIError]] | type[UFDLAPIError] | None = None,
        info: str | None = None,
        **kwargs,
    ):
        """Configuration for UFDL error handling.

        Args:
            api_error_mapping: Either a dictionary which maps status codes to python Exception classes,
                or just a python exception class to use it for every HTTP Error.
                Status codes that are not above 400, which do not raise an HTTP Error, will automatically be raised too
            info: additionial information about the error, passed to the constructor of the Exception
            kwargs: will be passed to the constructor of the Exception
        """
        self.api_error_mapping = api_error_mapping
        self.kwargs = kwargs
        self.info = info

    def _get_error_details(self, response: requests.Response) -> None:
        try:
            error_response = response.json()
        except ValueError:
            LOGGER.debug("Error response of %s is not JSON.", response.url)
            return
        if isinstance(error_response, dict):
            for k, v in error_response.items():
                # these are positional parameters of the exception classes
                if k not in ("response", "info"):
                    self.kwargs.setdefault(k, v)

    def get_exception_class(self, response: requests.Response) -> type[UFDLAPIError] | None:
        """Returns the python exception class for the response."""
        try:
            response.raise_for_status()
        except requests.exceptions.HTTPError:
            self._get_error_details(response)
            if self.api_error_mapping is not None:
                if isinstance(self.api_error_mapping, dict):
                    if status_exception := self.api_error_mapping.get(response.status_code):
                        return status_exception
                else:
                    return self.api_error_mapping
            return DEFAULT_ERROR_MAPPING.get(response.status_code) or DEFAULT_ERROR_MAPPING[None]
        else:
            if isinstance(self.api_error_mapping, dict) and (exc := self.api_error_mapping.get(response.status_code)):
                return exc
        return None

    def get_exception(self, response: requests.Response) -> UFDLAPIError | None:
        """Returns exception determined by :py:meth:`ErrorHandlingConfig.get_exception_class` filled out with the response and kwargs."""  # noqa: E501
        if exc := self.get_exception_class(response):
            return exc(response=response, info=self.info, **self.kwargs)
        return None


def raise_ufdl_api_error(
    response: requests.Response,
    error_handling: ErrorHandlingConfig | Literal[False] | None = None,
):
    """Raise a UFDL API error through the ErrorHandlingConfig.

    Convenience function around ErrorHandlingConfig.get_exception.
    """
    if error_handling is not False and (exc := (error_handling or ErrorHandlingConfig()).get_exception(response)):
        raise exc
