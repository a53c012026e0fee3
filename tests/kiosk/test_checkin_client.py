import pytest
import requests

from gym_checkin.core.exceptions import AuthenticationError, UpstreamError, ValidationError
from gym_checkin.kiosk.client import CheckInClient


class StubResponse:
    def __init__(self, status_code=200, body=None, text_only=False):
        self.status_code = status_code
        self._body = body
        self._text_only = text_only

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if self._text_only:
            raise ValueError("not json")
        return self._body


class StubSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.posts: list[tuple] = []

    def post(self, url, json=None, timeout=None):
        self.posts.append((url, json, timeout))
        if self.error is not None:
            raise self.error
        return self.response


def client_with(session):
    return CheckInClient("http://gym.test:5000/", timeout=2.5, session=session)


def test_check_in_posts_payload():
    session = StubSession(StubResponse(body={"ok": True, "status": "active"}))

    data = client_with(session).check_in("000123")

    assert data == {"ok": True, "status": "active"}
    assert session.posts == [("http://gym.test:5000/api/scan/check-in", {"payload": "000123"}, 2.5)]


def test_check_in_never_sends_invalid_codes():
    session = StubSession(StubResponse(body={}))

    with pytest.raises(ValidationError):
        client_with(session).check_in("12345")
    assert session.posts == []


def test_server_error_body_is_returned():
    session = StubSession(StubResponse(500, {"ok": False, "message": "Server error."}))

    assert client_with(session).check_in("000123") == {"ok": False, "message": "Server error."}


def test_transport_failure_is_upstream_error():
    session = StubSession(error=requests.exceptions.ConnectionError("refused"))

    with pytest.raises(UpstreamError, match="refused"):
        client_with(session).check_in("000123")


@pytest.mark.parametrize("response", [StubResponse(502, text_only=True), StubResponse(200, body=["not", "a", "dict"])])
def test_unusable_response_is_upstream_error(response):
    with pytest.raises(UpstreamError):
        client_with(StubSession(response)).check_in("000123")


def test_login_rejected():
    with pytest.raises(AuthenticationError):
        client_with(StubSession(StubResponse(401, {"ok": False}))).login("a@b.c", "x")


def test_login_ok():
    session = StubSession(StubResponse(200, {"ok": True}))

    client_with(session).login("admin@skygym.local", "pw")

    assert session.posts[0][0] == "http://gym.test:5000/login"


def test_absolute_url():
    client = CheckInClient("http://gym.test:5000")

    assert client.absolute_url("/photos/000123") == "http://gym.test:5000/photos/000123"


def test_parse_camera_labels():
    from gym_checkin.kiosk.devices import parse_camera_labels

    assert parse_camera_labels("0:Front, 1: USB rear ,junk,x:y") == {0: "Front", 1: "USB rear"}
    assert parse_camera_labels("") == {}
