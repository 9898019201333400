from __future__ import annotations

from typing import TYPE_CHECKING
from unittest import mock

import pytest
import requests_mock

from ufdl_client.config.config import Config
from ufdl_client.utils.config import CFG_FILE_NAME
from tests.unit.mocks import UFDLMockClient, register_login

if TYPE_CHECKING:
    from collections.abc import Generator
    from pathlib import Path


@pytest.fixture()
def test_client_mock() -> Generator[UFDLMockClient, None, None]:
    """This fixture provides a client with default config and its own :py:class:`requests_mock.Adapter`.

    Useful for mocking API responses. see :py:class:`~tests.unit.mocks.UFDLMockClient`.
    The login is not registered, use :py:func:`logged_in_client_mock` or :py:func:`~tests.unit.mocks.register_login`.
    """
    client = UFDLMockClient(Config(token_storage="memory"))
    yield client
    client.close()


@pytest.fixture()
def logged_in_client_mock(test_client_mock) -> UFDLMockClient:
    """Like :py:func:`test_client_mock`, but the login endpoint answers with the default tokens."""
    register_login(test_client_mock.mock_adapter)
    return test_client_mock


@pytest.fixture()
def isolated_adapter() -> requests_mock.Adapter:
    """A fresh adapter, for tests that use an Authentication without a client."""
    return requests_mock.Adapter()


@pytest.fixture()
def mock_config_location(tmp_path_factory, request) -> Generator[dict[Path, None], None, None]:
    """Mocks the locations where the config files are read and returns them.

    Can be used in tests like this:
    .. code-block:: python

       from ufdl_client.config import config


       def test_xyz(mock_config_location):
           assert mock_config_location == config.cfg_files()  # true

    """
    paths = dict.fromkeys(
        [
            tmp_path_factory.mktemp(f"{request.node.name}_site_cfg").joinpath(CFG_FILE_NAME),
            tmp_path_factory.mktemp(f"{request.node.name}_user_cfg").joinpath(CFG_FILE_NAME),
        ],
    )
    with mock.patch("ufdl_client.config.config.cfg_files", return_value=paths), mock.patch(
        "ufdl_client.cli.config.cfg_files", return_value=paths
    ):
        yield paths
