import pytest

from ufdl_client.actions.teams import Permissions

USERS = "/v1/core/users/"
PROJECTS = "/v1/core/projects/"
TEAMS = "/v1/teams/"
LICENCES = "/v1/licences/"
DOMAINS = "/v1/domains/"
FRAMEWORKS = "/v1/frameworks/"


def test_users(logged_in_client_mock):
    adapter = logged_in_client_mock.mock_adapter
    users = [{"pk": 1, "username": "admin"}, {"pk": 2, "username": "jdoe"}]
    adapter.register_uri("GET", logged_in_client_mock.url(USERS), json=users)
    adapter.register_uri("GET", logged_in_client_mock.url(f"{USERS}2"), json=users[1])
    create = adapter.register_uri("POST", logged_in_client_mock.url(USERS), json={"pk": 3})
    delete = adapter.register_uri("DELETE", logged_in_client_mock.url(f"{USERS}3/"), status_code=204)

    assert logged_in_client_mock.users.list() == users
    assert logged_in_client_mock.users.load(2) == users[1]
    assert logged_in_client_mock.users.load_by_name("jdoe") == users[1]
    assert logged_in_client_mock.users.load_by_name("nobody") is None
    assert logged_in_client_mock.users.create("jane", "pw", "Jane", "Doe", "jane@example.com") == {"pk": 3}
    assert create.last_request.json() == {
        "username": "jane",
        "password": "pw",
        "first_name": "Jane",
        "last_name": "Doe",
        "email": "jane@example.com",
    }
    logged_in_client_mock.users.delete(3)
    assert delete.call_count == 1


def test_projects(logged_in_client_mock):
    adapter = logged_in_client_mock.mock_adapter
    url = logged_in_client_mock.url
    create = adapter.register_uri("POST", url(f"{PROJECTS}create"), json={"pk": 5, "name": "p", "team": 1})
    update = adapter.register_uri("PUT", url(f"{PROJECTS}5"), json={"pk": 5})
    partial = adapter.register_uri("PATCH", url(f"{PROJECTS}5"), json={"pk": 5})
    soft_delete = adapter.register_uri("DELETE", url(f"{PROJECTS}5/"), json={})
    hard_delete = adapter.register_uri("DELETE", url(f"{PROJECTS}5/hard"), json={})
    reinstate = adapter.register_uri("DELETE", url(f"{PROJECTS}5/reinstate"), json={"pk": 5})

    projects = logged_in_client_mock.projects
    assert projects.create("p", 1) == {"pk": 5, "name": "p", "team": 1}
    assert create.last_request.json() == {"name": "p", "team": 1}
    projects.update(5, "q", 2)
    assert update.last_request.json() == {"name": "q", "team": 2}
    projects.partial_update(5, team=3)
    assert partial.last_request.json() == {"team": 3}
    projects.partial_update(5, name="r")
    assert partial.last_request.json() == {"name": "r"}
    projects.delete(5)
    assert soft_delete.call_count == 1
    assert hard_delete.call_count == 0
    projects.delete(5, hard=True)
    assert hard_delete.call_count == 1
    assert projects.reinstate(5) == {"pk": 5}
    assert reinstate.call_count == 1


def test_teams(logged_in_client_mock):
    adapter = logged_in_client_mock.mock_adapter
    url = logged_in_client_mock.url
    create = adapter.register_uri("POST", url(f"{TEAMS}create"), json={"pk": 7, "name": "t"})
    update = adapter.register_uri("PUT", url(f"{TEAMS}7"), json={"pk": 7, "name": "u"})
    memberships = adapter.register_uri("PATCH", url(f"{TEAMS}7/memberships"), json={})
    hard_delete = adapter.register_uri("DELETE", url(f"{TEAMS}7/hard"), json={})
    reinstate = adapter.register_uri("DELETE", url(f"{TEAMS}7/reinstate"), json={"pk": 7})

    teams = logged_in_client_mock.teams
    assert teams.create("t") == {"pk": 7, "name": "t"}
    assert create.last_request.json() == {"name": "t"}
    assert teams.update(7, "u") == {"pk": 7, "name": "u"}
    assert update.last_request.json() == {"name": "u"}

    teams.add_membership(7, "jdoe")
    assert memberships.last_request.json() == {"method": "add", "username": "jdoe", "permissions": "R"}
    teams.update_membership(7, "jdoe", Permissions.ADMIN)
    assert memberships.last_request.json() == {"method": "update", "username": "jdoe", "permissions": "A"}
    teams.update_membership(7, "jdoe", "W")
    assert memberships.last_request.json() == {"method": "update", "username": "jdoe", "permissions": "W"}
    teams.remove_membership(7, "jdoe")
    assert memberships.last_request.json() == {"method": "remove", "username": "jdoe"}
    with pytest.raises(ValueError):  # noqa: PT011
        teams.update_membership(7, "jdoe", "X")
    assert memberships.call_count == 4

    teams.delete(7, hard=True)
    assert hard_delete.call_count == 1
    teams.reinstate(7)
    assert reinstate.call_count == 1


def test_licenses(logged_in_client_mock):
    adapter = logged_in_client_mock.mock_adapter
    url = logged_in_client_mock.url
    licences = [{"pk": 1, "name": "MIT"}, {"pk": 2, "name": "GPL-3.0"}]
    list_matcher = adapter.register_uri("POST", url(f"{LICENCES}list"), json=licences)
    create = adapter.register_uri("POST", url(f"{LICENCES}create"), json={"pk": 3})
    partial = adapter.register_uri("PATCH", url(f"{LICENCES}3"), json={"pk": 3})
    subdescriptors = adapter.register_uri("PATCH", url(f"{LICENCES}3/subdescriptors"), json={"pk": 3})
    delete = adapter.register_uri("DELETE", url(f"{LICENCES}3/"), status_code=204)

    licenses = logged_in_client_mock.licenses
    assert licenses.load_by_name("GPL-3.0") == licences[1]
    assert list_matcher.call_count == 1
    licenses.create("Apache-2.0", "https://www.apache.org/licenses/LICENSE-2.0")
    assert create.last_request.json() == {"name": "Apache-2.0", "url": "https://www.apache.org/licenses/LICENSE-2.0"}
    licenses.partial_update(3, url="https://example.com")
    assert partial.last_request.json() == {"url": "https://example.com"}
    licenses.add_subdescriptors(3, "permissions", ["Commercial use", "Modification"])
    assert subdescriptors.last_request.json() == {
        "method": "add",
        "type": "permissions",
        "names": ["Commercial use", "Modification"],
    }
    licenses.remove_subdescriptors(3, "domains", ("Image classification",))
    assert subdescriptors.last_request.json() == {
        "method": "remove",
        "type": "domains",
        "names": ["Image classification"],
    }
    licenses.delete(3)
    assert delete.call_count == 1


def test_domains(logged_in_client_mock):
    adapter = logged_in_client_mock.mock_adapter
    domains = [{"pk": 1, "name": "ic", "description": "Image Classification"}]
    adapter.register_uri("POST", logged_in_client_mock.url(f"{DOMAINS}list"), json=domains)
    adapter.register_uri("GET", logged_in_client_mock.url(f"{DOMAINS}1"), json=domains[0])
    assert logged_in_client_mock.domains.list() == domains
    assert logged_in_client_mock.domains.load(1) == domains[0]
    assert logged_in_client_mock.domains.load_by_name("ic") == domains[0]


def test_frameworks(logged_in_client_mock):
    adapter = logged_in_client_mock.mock_adapter
    url = logged_in_client_mock.url
    create = adapter.register_uri("POST", url(f"{FRAMEWORKS}create"), json={"pk": 2})
    update = adapter.register_uri("PUT", url(f"{FRAMEWORKS}2"), json={"pk": 2})
    partial = adapter.register_uri("PATCH", url(f"{FRAMEWORKS}2"), json={"pk": 2})
    delete = adapter.register_uri("DELETE", url(f"{FRAMEWORKS}2/"), status_code=204)

    frameworks = logged_in_client_mock.frameworks
    assert frameworks.create("tensorflow", "2.15") == {"pk": 2}
    assert create.last_request.json() == {"name": "tensorflow", "version": "2.15"}
    frameworks.update(2, "pytorch", "2.3")
    assert update.last_request.json() == {"name": "pytorch", "version": "2.3"}
    frameworks.partial_update(2, version="2.4")
    assert partial.last_request.json() == {"version": "2.4"}
    frameworks.delete(2)
    assert delete.call_count == 1
