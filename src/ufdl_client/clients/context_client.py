"""HTTP client implementation, the transport shared by all actions of a client."""

from __future__ import annotations

import logging
import numbers
import os
import time
import typing
from pathlib import Path
from typing import TYPE_CHECKING

import requests

if TYPE_CHECKING:
    from os import PathLike

    from requests import PreparedRequest, Response


DEFAULT_TIMEOUT = (60, None)
LOGGER = logging.getLogger(__name__)


def retry(times: int, exceptions: type[Exception] | tuple[type[Exception], ...]) -> typing.Callable:
    """Retry Decorator.

    Retries the wrapped function/method `times` times if the exceptions listed
    in ``exceptions`` are thrown, the last attempt raises the exception.

    Args:
        times: The number of times to repeat the wrapped function/method
        exceptions: Exception classes that trigger a retry attempt
    """

    def decorator(func: typing.Callable) -> typing.Callable:
        def newfn(*args, **kwargs) -> typing.Callable:
            attempt = 0
            while attempt < times:
                try:
                    return func(*args, **kwargs)
                except exceptions:  # noqa: PERF203
                    LOGGER.debug("Exception thrown when attempting to run %s, attempt %d of %d", func, attempt, times)
                    time.sleep(0.1)
                    attempt += 1
            return func(*args, **kwargs)

        return newfn

    return decorator


class UFDLSession(requests.Session):
    """Requests Session with the client config applied.

    Every request gets a timeout, requests without one get :py:attr:`DEFAULT_TIMEOUT`
    or the timeout passed to the constructor.
    """

    def __init__(
        self,
        debug: bool = False,
        requests_ca_bundle: PathLike[str] | str | None = None,
        timeout: float | None = None,
    ) -> None:
        self.debug = debug
        super().__init__()
        if requests_ca_bundle is not None and Path(requests_ca_bundle).is_file():
            self.verify = os.fspath(requests_ca_bundle)
        self.default_timeout = DEFAULT_TIMEOUT if timeout is None else (DEFAULT_TIMEOUT[0], timeout)

        self._counter = 0

    @retry(times=3, exceptions=requests.exceptions.ConnectionError)
    def send(self, request: PreparedRequest, **kwargs) -> Response:
        """Send a prepared request.

        Args:
            request: the prepared request, see :py:meth:`requests.Session.prepare_request`
            **kwargs: see :py:meth:`requests.Session.send`
        """
        timeout = kwargs.get("timeout")
        if isinstance(timeout, numbers.Number):
            # add default connect timeout if timeout is a number
            kwargs["timeout"] = (DEFAULT_TIMEOUT[0], timeout)
        elif timeout is None:
            kwargs["timeout"] = self.default_timeout

        if self.debug:
            self._counter = count = self._counter + 1
            LOGGER.debug(f"(r{count}) Making {request.method!s} request to {request.url!s}")  # noqa: G004

        response = super().send(request, **kwargs)
        if self.debug:
            LOGGER.debug(
                f"(r{count}) Got response status={response.status_code}, "  # noqa: G004
                f"content_type={response.headers.get('content-type')}, "
                f"content_length={response.headers.get('content-length')}",
            )
        return response
