import pytest

from ufdl_client.actions.action import Action, ListAction
from ufdl_client.errors.actions import ConnectionClosedError, PermissionDeniedError, ResourceNotFoundError
from ufdl_client.errors.handling import ErrorHandlingConfig
from ufdl_client.errors.meta import UFDLAPIError


class Things(ListAction):
    name = "Things"
    path = "/v1/things/"
    resource_name = "thing"


def test_api_url(test_client_mock):
    action = Things(test_client_mock.connection)
    assert action.connection is test_client_mock.connection
    assert action.api_url() == "http+mock://ufdl.test/v1/things/"
    assert action.api_url("1/files/a.txt") == "http+mock://ufdl.test/v1/things/1/files/a.txt"
    test_client_mock.connection.set_server("http+mock://other.test/")
    assert action.api_url("list") == "http+mock://other.test/v1/things/list"


@pytest.mark.parametrize("pk", [-1, "1", 1.0, True, None])
def test_check_pk_invalid(pk):
    with pytest.raises(ValueError, match="Invalid PK"):
        Action.check_pk(pk)


def test_check_pk():
    assert Action.check_pk(0) == 0
    assert Action.check_pk(12) == 12


def test_invalid_pk_makes_no_request(logged_in_client_mock):
    with pytest.raises(ValueError):  # noqa: PT011
        Things(logged_in_client_mock.connection).load(-1)
    assert logged_in_client_mock.mock_adapter.call_count == 0


def test_closed_connection(logged_in_client_mock):
    action = Things(logged_in_client_mock.connection)
    logged_in_client_mock.close()
    with pytest.raises(ConnectionClosedError):
        action.list()
    assert logged_in_client_mock.mock_adapter.call_count == 0


@pytest.mark.parametrize(
    ("status_code", "error"),
    [(403, PermissionDeniedError), (404, ResourceNotFoundError), (400, UFDLAPIError), (500, UFDLAPIError)],
)
def test_error_mapping(logged_in_client_mock, status_code, error):
    logged_in_client_mock.mock_adapter.register_uri(
        "GET", logged_in_client_mock.url("/v1/things/3"), status_code=status_code, json={"detail": "Nope."}
    )
    with pytest.raises(error) as exc_info:
        Things(logged_in_client_mock.connection).load(3)
    assert exc_info.value.status_code == status_code
    assert str(exc_info.value).startswith("Nope.")
    assert "ENDPOINT = /v1/things/3" in str(exc_info.value)


def test_error_handling_override(logged_in_client_mock):
    class ThingNotFoundError(UFDLAPIError):
        message = "No such thing."

    logged_in_client_mock.mock_adapter.register_uri(
        "GET", logged_in_client_mock.url("/v1/things/3"), status_code=404, text="not found"
    )
    action = Things(logged_in_client_mock.connection)
    with pytest.raises(ThingNotFoundError):
        action.api_load(3, error_handling=ErrorHandlingConfig({404: ThingNotFoundError}, thing=3))
    response = action.api_load(3, error_handling=False)
    assert response.status_code == 404


def test_list_action(logged_in_client_mock):
    adapter = logged_in_client_mock.mock_adapter
    list_matcher = adapter.register_uri(
        "POST", logged_in_client_mock.url("/v1/things/list"), json=[{"pk": 1, "name": "a"}, {"pk": 2, "name": "b"}]
    )
    load_matcher = adapter.register_uri("GET", logged_in_client_mock.url("/v1/things/2"), json={"pk": 2})
    action = Things(logged_in_client_mock.connection)

    assert action.list() == [{"pk": 1, "name": "a"}, {"pk": 2, "name": "b"}]
    assert list_matcher.last_request.body is None

    filter_spec = {"expressions": [{"type": "exact", "field": "name", "value": "b"}]}
    action.list(filter_spec)
    assert list_matcher.last_request.json() == filter_spec

    assert action.load(2) == {"pk": 2}
    assert load_matcher.call_count == 1
    assert action.load_by_name("b") == {"pk": 2, "name": "b"}
    assert action.load_by_name("c") is None


def test_download(logged_in_client_mock, tmp_path):
    logged_in_client_mock.mock_adapter.register_uri(
        "GET", logged_in_client_mock.url("/v1/things/1/content"), content=b"x" * 20000
    )
    output = tmp_path.joinpath("content.bin")
    Things(logged_in_client_mock.connection).download("1/content", output)
    assert output.read_bytes() == b"x" * 20000


def test_failed_download_creates_no_file(logged_in_client_mock, tmp_path):
    logged_in_client_mock.mock_adapter.register_uri(
        "GET", logged_in_client_mock.url("/v1/things/1/content"), status_code=404
    )
    output = tmp_path.joinpath("content.bin")
    with pytest.raises(ResourceNotFoundError):
        Things(logged_in_client_mock.connection).download("1/content", output)
    assert not output.exists()


def test_repr(test_client_mock):
    assert repr(Things(test_client_mock.connection)) == "<Things(name='Things', path='/v1/things/')>"
