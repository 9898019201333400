"""Authentication against the UFDL backend.

The :py:class:`Authentication` obtains an access/refresh token pair with the user credentials,
attaches the access token as bearer token to every request and renews it when the backend rejects it.

State transitions::

    UNAUTHENTICATED --login ok--> AUTHENTICATED --401 on request--> EXPIRED
    EXPIRED --refresh ok--> AUTHENTICATED
    EXPIRED --refresh rejected--> FAILED
    EXPIRED --refresh of stored tokens rejected--> login with the credentials
    UNAUTHENTICATED --login rejected--> FAILED

FAILED is terminal, create a new Authentication with other credentials.
Tokens loaded from a token storage never lead to FAILED on their own, the credentials get a login attempt first.
"""

from __future__ import annotations

import logging
import threading
import time
from enum import Enum
from typing import TYPE_CHECKING

import requests

from ufdl_client.config.config_types import Tokens
from ufdl_client.config.token_storage import MemoryOnlyStorage, TokenStorageHandler
from ufdl_client.errors.auth import AuthenticationFailedError, TokenProtocolError
from ufdl_client.errors.config import UFDLConfigError
from ufdl_client.errors.handling import ErrorHandlingConfig, raise_ufdl_api_error

if TYPE_CHECKING:
    from ufdl_client.config.config_types import Server, Token

LOGGER = logging.getLogger(__name__)

URL_OBTAIN = "/v1/auth/obtain/"
URL_REFRESH = "/v1/auth/refresh/"

KEY_USERNAME = "username"
KEY_PASSWORD = "password"  # noqa: S105
KEY_ACCESS = "access"
KEY_REFRESH = "refresh"

BEARER_PREFIX = "Bearer "
"""Status codes of the token endpoints that mean the credentials/refresh token were rejected."""
REJECTED_STATUS_CODES = frozenset({401, 403})


class AuthState(Enum):
    """The states of an :py:class:`Authentication`."""

    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"
    EXPIRED = "expired"
    FAILED = "failed"


def _no_auth(r: requests.PreparedRequest) -> requests.PreparedRequest:
    # the token requests share the session, whose auth hook would try to attach a token
    return r


def bearer_token(request: requests.PreparedRequest | None) -> Token | None:
    """Returns the bearer token that was sent with the request, None if there was none."""
    if request is None:
        return None
    authorization = request.headers.get("Authorization")
    if authorization and authorization.startswith(BEARER_PREFIX):
        return authorization[len(BEARER_PREFIX) :]
    return None


class Authentication:
    """Holds the credentials and the tokens for one user on one server.

    This is the single source of truth for the bearer token of every request.
    Logins and refreshes are guarded by a lock, so concurrent requests coalesce into one token request.
    """

    def __init__(
        self,
        user: str = "",
        password: str = "",
        storage: TokenStorageHandler | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initializes the authentication.

        Args:
            user: the user to log in with
            password: the password of the user, never logged
            storage: where tokens are stored, defaults to :py:class:`MemoryOnlyStorage`
            timeout: the read timeout in seconds of the login/refresh requests, None uses the session default
        """
        self.user = user
        self._password = password
        self.storage = storage if storage is not None else MemoryOnlyStorage()
        self.timeout = timeout
        self._server: Server | None = None
        self._tokens = Tokens()
        self._state = AuthState.UNAUTHENTICATED
        self._lock = threading.RLock()
        self._requests_session: requests.Session | None = None

    @property
    def server(self) -> Server | None:
        """The server the tokens are obtained from."""
        return self._server

    def set_server(self, server: Server) -> None:
        """Sets the server to talk to.

        Doesn't touch the state or the tokens, a token for another server gets rejected on the next request.
        """
        self._server = server

    def set_requests_session(self, session: requests.Session) -> None:
        """Sets the requests session used for the login/refresh requests."""
        self._requests_session = session

    @property
    def state(self) -> AuthState:
        """The current state."""
        return self._state

    @property
    def tokens(self) -> Tokens:
        """The current token pair, empty when not logged in."""
        return self._tokens

    def __call__(self, r: requests.PreparedRequest) -> requests.PreparedRequest:
        return self.attach(r)

    def attach(self, r: requests.PreparedRequest) -> requests.PreparedRequest:
        """Sets bearer authentication header on PreparedRequest object.

        Logs in first if there is no token yet. Does not overwrite authorization header if present.

        Raises:
            AuthenticationFailedError: if the credentials were rejected before
        """
        if "Authorization" not in r.headers:
            r.headers["Authorization"] = BEARER_PREFIX + self.access_token()
        return r

    def access_token(self) -> Token:
        """Returns the current access token, loads or obtains the tokens when necessary."""
        with self._lock:
            if self._state is AuthState.FAILED:
                raise AuthenticationFailedError(
                    info="The credentials were rejected before, set new credentials to try again.", user=self.user
                )
            if self._state is AuthState.UNAUTHENTICATED:
                stored = self.storage.load(self)
                if stored is not None and stored.is_valid():
                    LOGGER.debug("Using stored tokens for %r", self.user)
                    self._tokens = stored
                    self._state = AuthState.AUTHENTICATED
                else:
                    self.obtain()
            return self._tokens.access

    def obtain(self) -> Tokens:
        """Obtains the tokens, using the user/password.

        Raises:
            AuthenticationFailedError: if the credentials were rejected, the state is FAILED afterwards
            TokenProtocolError: if the response doesn't contain the tokens
            requests.exceptions.RequestException: network errors, the state is unchanged
        """
        with self._lock:
            LOGGER.info("Obtaining tokens for %r", self.user)
            response = self._token_request(URL_OBTAIN, {KEY_USERNAME: self.user, KEY_PASSWORD: self._password})
            if response.status_code in REJECTED_STATUS_CODES:
                LOGGER.error("Failed to obtain tokens for %r, status %d", self.user, response.status_code)
                self._fail()
            raise_ufdl_api_error(
                response,
                ErrorHandlingConfig(dict.fromkeys(REJECTED_STATUS_CODES, AuthenticationFailedError), user=self.user),
            )
            data = self._token_response(response, URL_OBTAIN)
            access, refresh = data.get(KEY_ACCESS), data.get(KEY_REFRESH)
            if not _is_token(access) or not _is_token(refresh):
                raise TokenProtocolError(URL_OBTAIN, response.text)
            self._set_tokens(Tokens(access=access, refresh=refresh, obtained_at=time.time()))
            return self._tokens

    def refresh(self) -> bool:
        """Updates the access token, using the refresh token.

        Obtains new tokens with the credentials if there is no refresh token,
        or if a refresh token loaded from the token storage is rejected.

        Returns:
            bool: True if there is a new access token, False if the backend rejected the renewal,
                the state is FAILED then

        Raises:
            TokenProtocolError: if the response doesn't contain an access token
            requests.exceptions.RequestException: network errors, the state is unchanged
        """
        with self._lock:
            if not self._tokens.refresh:
                return self._obtain_or_fail()
            LOGGER.info("Refreshing tokens for %r", self.user)
            response = self._token_request(URL_REFRESH, {KEY_REFRESH: self._tokens.refresh})
            if response.status_code in REJECTED_STATUS_CODES:
                if self._tokens.obtained_at is None:
                    LOGGER.info("Stored refresh token of %r was rejected, logging in", self.user)
                    self.storage.clear(self)
                    return self._obtain_or_fail()
                LOGGER.error("Failed to refresh tokens for %r, status %d", self.user, response.status_code)
                self._fail()
                return False
            raise_ufdl_api_error(response)
            data = self._token_response(response, URL_REFRESH)
            access = data.get(KEY_ACCESS)
            if not _is_token(access):
                raise TokenProtocolError(URL_REFRESH, response.text)
            # the backend may or may not rotate the refresh token
            refresh = data.get(KEY_REFRESH) if _is_token(data.get(KEY_REFRESH)) else self._tokens.refresh
            self._set_tokens(Tokens(access=access, refresh=refresh, obtained_at=time.time()))
            return True

    def handle_unauthorized(self, response: requests.Response) -> bool:
        """Reports a 401 response of a request that was authenticated by this object.

        The access token of the request is considered expired and gets refreshed,
        unless another request already renewed it in the meantime.

        Returns:
            bool: True if the request should be sent again (exactly once), False if the original failure should be raised
        """
        rejected = bearer_token(response.request)
        with self._lock:
            if self._state is AuthState.FAILED or rejected is None:
                return False
            if rejected != self._tokens.access:
                return self._state is AuthState.AUTHENTICATED
            LOGGER.debug("Access token of %r was rejected", self.user)
            self._state = AuthState.EXPIRED
            return self.refresh()

    def logout(self) -> None:
        """Forgets the tokens, the next request will log in again."""
        with self._lock:
            self._tokens = Tokens()
            self._state = AuthState.UNAUTHENTICATED
            self.storage.clear(self)

    def _obtain_or_fail(self) -> bool:
        try:
            self.obtain()
        except AuthenticationFailedError:
            return False
        return True

    def _set_tokens(self, tokens: Tokens) -> None:
        self._tokens = tokens
        self._state = AuthState.AUTHENTICATED
        self.storage.store(self, tokens)

    def _fail(self) -> None:
        self._tokens = Tokens()
        self._state = AuthState.FAILED
        self.storage.clear(self)

    def _token_request(self, path: str, payload: dict) -> requests.Response:
        if self._server is None:
            msg = "No server set for the authentication."
            raise UFDLConfigError(msg)
        if self._requests_session is None:
            self._requests_session = requests.Session()
        return self._requests_session.request(
            "POST",
            self._server.build(path),
            json=payload,
            auth=_no_auth,
            timeout=self.timeout,
        )

    def _token_response(self, response: requests.Response, path: str) -> dict:
        try:
            data = response.json()
        except ValueError as e:
            raise TokenProtocolError(path, response.text) from e
        if not isinstance(data, dict):
            raise TokenProtocolError(path, response.text)
        return data

    def __repr__(self) -> str:
        return (
            f"<{self.__class__.__name__}(user={self.user!r}, password={'*' * len(self._password)!r},"
            f" state={self._state.value}, tokens={self._tokens!r})>"
        )


def _is_token(value: object) -> bool:
    return isinstance(value, str) and len(value) > 0
