import pytest

from core.api_client import ApiError


class FakeApi:
    """Stands in for the module-level api_client; records calls and replays canned responses."""

    def __init__(self):
        self.calls = []
        self.responses = {}

    def respond(self, method, path, value):
        self.responses[(method, path)] = value

    def _handle(self, method, path, **kwargs):
        self.calls.append((method, path, kwargs))
        value = self.responses.get((method, path))
        if isinstance(value, Exception):
            raise value
        return value

    def get(self, path, **kwargs):
        return self._handle("GET", path, **kwargs)

    def post(self, path, json=None, **kwargs):
        return self._handle("POST", path, json=json, **kwargs)

    def patch(self, path, json=None, **kwargs):
        return self._handle("PATCH", path, json=json, **kwargs)

    def delete(self, path, **kwargs):
        result = self._handle("DELETE", path, **kwargs)
        return {"success": True} if result is None else result

    def last_call(self):
        return self.calls[-1]


@pytest.fixture()
def fake_api():
    return FakeApi()


@pytest.fixture()
def api_error():
    def make(message="Boom", status_code=400, payload=None):
        return ApiError(message, status_code=status_code, payload=payload)
    return make
