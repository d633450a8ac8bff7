"""Test the HTTP client, first against a stub session and then against the real app."""

import pytest
import requests

from client.api import ApiClient, ApiError
from client.app import ClientApp


class StubResponse:
    def __init__(self, status_code, payload=None):
        self.status_code = status_code
        self._payload = payload

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


class StubSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests = []

    def request(self, method, url, **kwargs):
        self.requests.append((method, url, kwargs))
        if self.error:
            raise self.error
        return self.response


def test_request_carries_bearer_token():
    session = StubSession(StubResponse(200, []))
    api = ApiClient("http://api.test/api/", token="abc", session=session)
    assert api.list_posts() == []
    method, url, kwargs = session.requests[0]
    assert (method, url) == ("GET", "http://api.test/api/posts")
    assert kwargs["headers"]["Authorization"] == "Bearer abc"


def test_no_token_no_header():
    session = StubSession(StubResponse(200, {"status": "OK"}))
    ApiClient("http://api.test/api", session=session).health()
    assert "Authorization" not in session.requests[0][2]["headers"]


def test_error_payload_becomes_api_error():
    session = StubSession(StubResponse(400, {"error": "Username already exists"}))
    api = ApiClient("http://api.test/api", session=session)
    with pytest.raises(ApiError) as excinfo:
        api.register("Alice", "alice", "a@b.co", "secret1")
    assert excinfo.value.status_code == 400
    assert excinfo.value.message == "Username already exists"


def test_error_without_json_body():
    session = StubSession(StubResponse(502))
    with pytest.raises(ApiError, match="Request failed with status 502"):
        ApiClient("http://api.test/api", session=session).list_posts()


def test_network_failure():
    session = StubSession(error=requests.ConnectionError("refused"))
    with pytest.raises(ApiError) as excinfo:
        ApiClient("http://api.test/api", session=session).list_posts()
    assert excinfo.value.status_code == 0
    assert excinfo.value.message == "Network error. Please try again."


def test_resolve_report_omits_empty_notes():
    session = StubSession(StubResponse(200, {"message": "ok"}))
    ApiClient("http://api.test/api", session=session).resolve_report(3, "dismiss")
    assert session.requests[0][2]["json"] == {"action": "dismiss"}


@pytest.fixture()
def make_app(client, tmp_path):
    def _make(name):
        return ClientApp("http://testserver/api", storage_path=tmp_path / f"{name}.json", session=client)
    return _make


def test_client_against_running_app(make_app):
    alice = make_app("alice")
    assert alice.open_page("index") == "login"
    alice.auth.register("Alice", "alice", "alice@example.com", "secret123", "secret123", True)
    assert alice.open_page("login") == "index"
    assert alice.open_page("index") is None
    assert alice.feed.is_empty

    post = alice.feed.create_post("hello #world")
    assert post["user"]["username"] == "alice"

    bob = make_app("bob")
    bob.auth.register("Bob", "bob", "bob@example.com", "secret123", "secret123", True)
    bob.open_page("index")
    assert bob.feed.toggle_like(post["id"]) is True
    bob.feed.load()
    assert bob.feed.find_post(post["id"])["likes_count"] == 1
    assert bob.feed.find_post(post["id"])["liked_by_me"] is True

    assert bob.open_page("profile", "alice") is None
    assert bob.profile.action_label() == "Follow"
    assert bob.profile.toggle_follow() is True
    assert bob.api.get_profile("alice")["followers_count"] == 1
    assert bob.feed.toggle_feed() == "following"
    assert [item["id"] for item in bob.feed.posts] == [post["id"]]
    assert "hello" in bob.profile.render()

    alice.open_page("profile")
    assert alice.profile.is_own_profile
    assert alice.profile.save_profile("Alice A", bio="about me")
    assert alice.api.me()["bio"] == "about me"

    assert alice.logout() == "login"
    assert alice.open_page("profile") == "login"


def test_client_reports_server_errors(make_app):
    app = make_app("carol")
    app.auth.register("Carol", "carol", "carol@example.com", "secret123", "secret123", True)
    with pytest.raises(ApiError) as excinfo:
        app.api.follow("carol")
    assert excinfo.value.status_code == 400
    assert excinfo.value.message == "You cannot follow yourself"
