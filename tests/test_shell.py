"""Tests for the presentation shell: session flow, remembered identity, banners."""

import json
from unittest.mock import MagicMock

import pytest
import requests

from ideaboard.shell import ApiClient, ApiResponse, JsonFileIdentityStore, MemoryIdentityStore, PresentationShell
from ideaboard.shell.shell import NETWORK_ERROR, USER_KEY

ANN = {"id": 7, "fullName": "Ann", "phoneNumber": "555-0001"}


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def _ok(**data):
    return ApiResponse(status_code=200, data={"success": True, **data})


def _fail(message, status_code=400):
    return ApiResponse(status_code=status_code, data={"success": False, "message": message})


@pytest.fixture
def api():
    api = MagicMock(spec=ApiClient)
    api.login.return_value = _ok(user=ANN)
    api.register.return_value = _ok(user=ANN)
    api.list_user_ideas.return_value = _ok(ideas=[])
    api.user_idea_stats.return_value = _ok(stats={"total": 0, "byStatus": {}})
    api.submit_idea.return_value = _ok(idea={"id": 1, "status": "pending"})
    return api


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store():
    return MemoryIdentityStore()


@pytest.fixture
def shell(api, store, clock):
    return PresentationShell(api, store, clock=clock)


class TestLogin:

    def test_login_switches_to_dashboard(self, shell, api, store):
        assert shell.login("555-0001", "secret1") is True
        assert shell.screen == "dashboard"
        assert shell.user == ANN
        assert shell.banner.kind == "success"
        api.list_user_ideas.assert_called_once_with(7)
        assert store.get(USER_KEY) is None

    def test_remember_me_persists_identity(self, shell, store):
        shell.login("555-0001", "secret1", remember=True)
        assert store.get(USER_KEY) == ANN

    def test_server_message_is_shown_verbatim(self, shell, api):
        api.login.return_value = _fail("Invalid phone number or password")
        assert shell.login("555-0001", "bad") is False
        assert shell.screen == "login"
        assert shell.banner.text == "Invalid phone number or password"
        assert shell.banner.kind == "error"

    def test_transport_failure_shows_generic_error(self, shell, api):
        api.login.side_effect = requests.ConnectionError("refused")
        assert shell.login("555-0001", "secret1") is False
        assert shell.banner.text == NETWORK_ERROR
        assert shell.loading is False

    def test_restore_uses_remembered_identity(self, api, clock):
        shell = PresentationShell(api, MemoryIdentityStore({USER_KEY: ANN}), clock=clock)
        assert shell.restore() is True
        assert shell.is_logged_in
        assert shell.screen == "dashboard"

    def test_restore_without_identity(self, shell):
        assert shell.restore() is False
        assert shell.screen == "login"

    def test_logout_forgets_identity(self, shell, store):
        shell.login("555-0001", "secret1", remember=True)
        shell.logout()
        assert shell.user is None
        assert shell.ideas == []
        assert shell.screen == "login"
        assert store.get(USER_KEY) is None


class TestRegister:

    def test_password_mismatch_is_caught_locally(self, shell, api):
        assert shell.register("Ann", "555-0001", "secret1", "secret2") is False
        assert shell.banner.text == "Passwords do not match!"
        api.register.assert_not_called()

    def test_success_returns_to_login(self, shell, clock):
        shell.show_register()
        assert shell.register("Ann", "555-0001", "secret1", "secret1") is True
        assert shell.screen == "login"
        assert shell.banner.text == "Registration successful! You can now login."
        clock.now += 2
        assert shell.banner is None

    def test_duplicate_message_is_shown(self, shell, api):
        api.register.return_value = _fail("User with this phone number already exists")
        assert shell.register("Ann", "555-0001", "secret1", "secret1") is False
        assert shell.banner.text == "User with this phone number already exists"


class TestSubmitIdea:

    def test_requires_all_fields(self, shell, api, clock):
        shell.login("555-0001", "secret1")
        assert shell.submit_idea("  ", "dashboard", "settings", "ui-ux") is False
        assert shell.banner.text == "Please fill in all fields"
        api.submit_idea.assert_not_called()
        clock.now += 3
        assert shell.banner is None

    def test_submits_with_user_identity_and_refreshes(self, shell, api):
        shell.login("555-0001", "secret1")
        api.list_user_ideas.reset_mock()
        api.list_user_ideas.return_value = _ok(ideas=[{"id": 1, "status": "pending"}])

        assert shell.submit_idea("add dark mode", "dashboard", "settings", "ui-ux") is True
        api.submit_idea.assert_called_once_with(
            text="add dark mode",
            project="dashboard",
            module="settings",
            section="ui-ux",
            submitted_by="Ann",
            user_id=7,
        )
        api.list_user_ideas.assert_called_once_with(7)
        assert shell.ideas == [{"id": 1, "status": "pending"}]
        assert shell.idea_form["text"] == ""

    def test_network_failure_keeps_form(self, shell, api):
        shell.login("555-0001", "secret1")
        api.submit_idea.side_effect = requests.Timeout()
        assert shell.submit_idea("add dark mode", "dashboard", "settings", "ui-ux") is False
        assert shell.banner.text == "Error submitting idea. Please try again."
        assert shell.idea_form["text"] == "add dark mode"
        assert shell.submitting is False

    def test_requires_login(self, shell, api):
        assert shell.submit_idea("x", "dashboard", "settings", "ui-ux") is False
        api.submit_idea.assert_not_called()


def test_unknown_tab_is_rejected(shell):
    with pytest.raises(ValueError):
        shell.select_sub_tab("reports")
    with pytest.raises(ValueError):
        shell.select_tab("reports")


def test_task_tab_folds_and_unfolds_its_sub_menu(shell, api):
    shell.login("555-0001", "secret1")
    assert shell.visible_sub_tabs == ("idea", "assign", "status")

    shell.select_tab("task")
    assert shell.active_tab == "task"
    assert shell.task_menu_open is False
    assert shell.visible_sub_tabs == ()
    with pytest.raises(ValueError):
        shell.select_sub_tab("status")

    shell.select_tab("task")
    assert shell.task_menu_open is True
    shell.select_sub_tab("status")
    assert shell.active_sub_tab == "status"

    api.list_user_ideas.reset_mock()
    shell.select_sub_tab("idea")
    api.list_user_ideas.assert_called_once_with(7)

    shell.select_tab("task")
    shell.logout()
    assert shell.task_menu_open is True
    assert shell.active_sub_tab == "idea"


def test_json_file_identity_store_round_trip(tmp_path):
    path = tmp_path / "state" / "identity.json"
    store = JsonFileIdentityStore(path)
    assert store.get(USER_KEY) is None

    store.set(USER_KEY, ANN)
    assert json.loads(path.read_text())[USER_KEY] == ANN
    assert JsonFileIdentityStore(path).get(USER_KEY) == ANN

    store.delete(USER_KEY)
    assert store.get(USER_KEY) is None


def test_json_file_identity_store_ignores_corrupt_file(tmp_path):
    path = tmp_path / "identity.json"
    path.write_text("{not json")
    assert JsonFileIdentityStore(path).get(USER_KEY) is None


def test_shell_against_live_app(client, tmp_path):
    """Drive the shell through the real routes using the test client as transport."""
    api = ApiClient(base_url="http://testserver/api", session=client)
    shell = PresentationShell(api, JsonFileIdentityStore(tmp_path / "identity.json"))

    assert shell.register("Ann", "555-0001", "secret1", "secret1")
    assert shell.login("555-0001", "secret1", remember=True)
    assert shell.submit_idea("add dark mode", "dashboard", "settings", "ui-ux")
    assert [i["status"] for i in shell.ideas] == ["pending"]
    assert shell.stats["total"] == 1

    restored = PresentationShell(api, JsonFileIdentityStore(tmp_path / "identity.json"))
    assert restored.restore()
    assert restored.user["fullName"] == "Ann"
    assert len(restored.ideas) == 1
