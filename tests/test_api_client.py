import pytest
import requests

from core.api_client import (
    ApiClient,
    ApiError,
    ACCESS_TOKEN_KEY,
    REFRESH_TOKEN_KEY,
    USER_KEY,
    extract_error_detail,
    fix_media_url,
)
from core.config import BACKEND_BASE_URL


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=None):
        self.status_code = status_code
        self._payload = payload
        if text is not None:
            self.text = text
        elif payload is not None:
            self.text = "json"
        else:
            self.text = ""
        self.content = self.text.encode()

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON")
        return self._payload


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response or FakeResponse()
        self.error = error
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        if self.error:
            raise self.error
        return self.response


def make_client(response=None, error=None, store=None):
    session = FakeSession(response, error)
    client = ApiClient("http://backend/api/", token_store=store if store is not None else {}, session=session)
    return client, session


def test_bearer_token_attached_when_present():
    client, session = make_client(FakeResponse(200, [{"id": 1}]))
    client.set_tokens("abc", "def")

    assert client.get("/payments/") == [{"id": 1}]
    method, url, kwargs = session.calls[0]
    assert method == "GET"
    assert url == "http://backend/api/payments/"
    assert kwargs["headers"]["Authorization"] == "Bearer abc"


def test_unauthenticated_request_sends_empty_authorization():
    client, session = make_client(FakeResponse(200, {"access": "x"}))
    client.set_tokens("stale")

    client.post("/token/", {"username": "a", "password": "b"}, authenticate=False)
    _, _, kwargs = session.calls[0]
    assert kwargs["headers"]["Authorization"] == ""
    assert kwargs["json"] == {"username": "a", "password": "b"}


def test_multipart_when_files_given():
    client, session = make_client(FakeResponse(201, {"id": 3}))
    client.post("/users/", data={"username": "sam"}, files={"profile_photo": ("p.jpg", b"x", "image/jpeg")})

    _, _, kwargs = session.calls[0]
    assert "json" not in kwargs
    assert kwargs["data"] == {"username": "sam"}
    assert kwargs["files"]["profile_photo"][0] == "p.jpg"


def test_error_response_raises_with_detail():
    client, _ = make_client(FakeResponse(400, {"username": ["A user with that username already exists."]}))

    with pytest.raises(ApiError) as exc:
        client.post("/users/", {"username": "sam"})

    assert exc.value.status_code == 400
    assert exc.value.has_field_error("username")
    assert "already exists" in exc.value.detail


def test_connection_error_is_wrapped():
    client, _ = make_client(error=requests.ConnectionError("refused"))

    with pytest.raises(ApiError) as exc:
        client.get("/users/")
    assert exc.value.status_code is None
    assert "Connection error" in str(exc.value)


def test_delete_no_content_is_normalized():
    client, _ = make_client(FakeResponse(204))
    assert client.delete("/payments/1/") == {"success": True}


def test_non_json_body_returned_as_text():
    client, _ = make_client(FakeResponse(200, text="pong"))
    assert client.get("/ping/") == "pong"


def test_clear_tokens_drops_tokens_and_user():
    store = {ACCESS_TOKEN_KEY: "a", REFRESH_TOKEN_KEY: "r", USER_KEY: "u", "other": 1}
    client, _ = make_client(store=store)

    client.clear_tokens()
    assert store == {"other": 1}
    assert client.access_token is None


@pytest.mark.parametrize("payload, expected", [
    ({"detail": "Not found."}, "Not found."),
    ({"amount": ["Must be positive."]}, "amount: Must be positive."),
    (["Bad value"], "Bad value"),
    ("<html>Server Error</html>", "<html>Server Error</html>"),
    (None, "fallback"),
])
def test_extract_error_detail(payload, expected):
    assert extract_error_detail(payload, "fallback") == expected


def test_fix_media_url():
    assert fix_media_url("/media/photos/a.jpg") == f"{BACKEND_BASE_URL}/media/photos/a.jpg"
    assert fix_media_url("https://cdn/x.jpg") == "https://cdn/x.jpg"
    assert fix_media_url(None) == ""
