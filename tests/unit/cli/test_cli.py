from click.testing import CliRunner

from ufdl_client.cli.main import cli

SERVER = "http://ufdl.test"


def _write_config(mock_config_location, content: str):
    list(mock_config_location)[1].write_text(content)


def test_config(mock_config_location):
    _write_config(
        mock_config_location,
        f"""
[config]
debug = true

[credentials]
server = "{SERVER}"
user = "jdoe"
password = "very_secret"
""",
    )
    runner = CliRunner()
    result = runner.invoke(cli, ["config"])
    assert result.exit_code == 0, result.output
    assert "very_secret" not in result.output
    assert "***********" in result.output
    assert "jdoe" in result.output
    assert SERVER in result.output


def test_list(mock_config_location, requests_mock):
    requests_mock.post(f"{SERVER}/v1/auth/obtain/", json={"access": "a", "refresh": "r"})
    requests_mock.get(
        f"{SERVER}/v1/core/users/",
        json=[{"pk": 1, "username": "admin", "email": "admin@example.com"}],
    )
    result = CliRunner().invoke(cli, ["list", "users", "--server", SERVER, "--user", "admin", "--password", "pw"])
    assert result.exit_code == 0, result.output
    assert "admin@example.com" in result.output
    assert requests_mock.request_history[0].json() == {"username": "admin", "password": "pw"}
    assert requests_mock.request_history[1].headers["Authorization"] == "Bearer a"


def test_list_filter(mock_config_location, requests_mock):
    _write_config(mock_config_location, f'[credentials]\nserver = "{SERVER}"\nuser = "admin"\npassword = "pw"\n')
    requests_mock.post(f"{SERVER}/v1/auth/obtain/", json={"access": "a", "refresh": "r"})
    list_matcher = requests_mock.post(f"{SERVER}/v1/teams/list", json=[{"pk": 3, "name": "ml-team"}])
    result = CliRunner().invoke(cli, ["list", "teams", "--filter", '{"expressions": []}'])
    assert result.exit_code == 0, result.output
    assert "ml-team" in result.output
    assert list_matcher.last_request.json() == {"expressions": []}

    result = CliRunner().invoke(cli, ["list", "users", "--filter", "{}"])
    assert result.exit_code == 2
    assert "users can't be filtered" in result.output


def test_list_unknown_kind(mock_config_location):
    result = CliRunner().invoke(cli, ["list", "organisations"])
    assert result.exit_code == 2


def test_info(mock_config_location, requests_mock):
    _write_config(mock_config_location, f'[credentials]\nserver = "{SERVER}"\nuser = "admin"\npassword = "pw"\n')
    requests_mock.post(f"{SERVER}/v1/auth/obtain/", json={"access": "a", "refresh": "r"})
    result = CliRunner().invoke(cli, ["info"])
    assert result.exit_code == 0, result.output
    assert "State: authenticated" in result.output
    assert "Login as 'admin'" in result.output


def test_info_login_failed(mock_config_location, requests_mock):
    _write_config(mock_config_location, f'[credentials]\nserver = "{SERVER}"\nuser = "admin"\npassword = "wrong"\n')
    requests_mock.post(f"{SERVER}/v1/auth/obtain/", status_code=401, json={"detail": "No active account"})
    result = CliRunner().invoke(cli, ["info"])
    assert result.exit_code == 0, result.output
    assert "AuthenticationFailedError" in result.output
    assert "State: failed" in result.output
