import json

import pytest
import requests

from spotilocal import (
    ClientNotRunning,
    ConnectionRefused,
    EndpointNotFound,
    HelperNotRunning,
    InternalError,
    LocalApiClient,
    ProtocolError,
    StatusTimeout,
    connect,
)
from spotilocal import client as client_module


def make_response(status_code=200, body=None, raw=None):
    r = requests.Response()
    r.status_code = status_code
    r.url = "http://127.0.0.1:4370/remote/status.json"
    if raw is not None:
        r._content = raw
    else:
        r._content = json.dumps(body if body is not None else {}).encode("utf-8")
    return r


@pytest.fixture
def fake_get(monkeypatch):
    """Patch requests.get; set .result to a Response or an exception."""

    class FakeGet:
        def __init__(self):
            self.result = make_response()
            self.calls = []

        def __call__(self, url, headers=None, params=None, timeout=None):
            self.calls.append({"url": url, "headers": headers, "params": params, "timeout": timeout})
            if isinstance(self.result, BaseException):
                raise self.result
            return self.result

    fake = FakeGet()
    monkeypatch.setattr(client_module.requests, "get", fake)
    return fake


def test_urls_and_headers(fake_get, status_json):
    fake_get.result = make_response(body=status_json)
    client = LocalApiClient(host="localhost", port=4371, timeout=2,
                            params={"oauth": "tok", "csrf": "csrf"})
    client.fetch_status_json()

    call = fake_get.calls[0]
    assert call["url"] == "http://localhost:4371/remote/status.json"
    assert call["params"] == {"oauth": "tok", "csrf": "csrf"}
    assert call["timeout"] == 2
    assert call["headers"]["Origin"] == "https://open.spotify.com"


def test_defaults_from_config():
    client = LocalApiClient()
    assert client.status_url == "http://127.0.0.1:4370/remote/status.json"


def test_fetch_status_returns_snapshot(fake_get, status_json):
    fake_get.result = make_response(body=status_json)
    snapshot = LocalApiClient().fetch_status()
    assert snapshot.volume_percentage == 75
    assert str(snapshot.simple_track()) == "Artist One - Test Song"


def test_timeout_is_transient(fake_get):
    fake_get.result = requests.exceptions.ReadTimeout("slow")
    with pytest.raises(StatusTimeout) as excinfo:
        LocalApiClient().fetch_status()
    assert excinfo.value.fatal is False


def test_connect_timeout_is_transient(fake_get):
    # ConnectTimeout is both a ConnectionError and a Timeout
    fake_get.result = requests.exceptions.ConnectTimeout("slow")
    with pytest.raises(StatusTimeout):
        LocalApiClient().fetch_status()


def test_connection_error_is_fatal(fake_get):
    fake_get.result = requests.exceptions.ConnectionError("refused")
    with pytest.raises(ConnectionRefused) as excinfo:
        LocalApiClient().fetch_status()
    assert excinfo.value.fatal is True
    assert excinfo.value.url.endswith("/remote/status.json")


@pytest.mark.parametrize("status_code", [404, 410])
def test_missing_endpoint_is_fatal(fake_get, status_code):
    fake_get.result = make_response(status_code=status_code)
    with pytest.raises(EndpointNotFound) as excinfo:
        LocalApiClient().fetch_status()
    assert excinfo.value.fatal is True


def test_server_error_is_protocol_error(fake_get):
    fake_get.result = make_response(status_code=500)
    with pytest.raises(ProtocolError) as excinfo:
        LocalApiClient().fetch_status()
    assert excinfo.value.fatal is False


def test_invalid_json_is_protocol_error(fake_get):
    fake_get.result = make_response(raw=b"<html>not json</html>")
    with pytest.raises(ProtocolError):
        LocalApiClient().fetch_status()


def test_non_object_json_is_protocol_error(fake_get):
    fake_get.result = make_response(body=[1, 2, 3])
    with pytest.raises(ProtocolError) as excinfo:
        LocalApiClient().fetch_status()
    assert "list" in excinfo.value.detail


def test_helper_error_payload_is_protocol_error(fake_get):
    fake_get.result = make_response(body={"error": {"type": "4102", "message": "Invalid OAuth token"}})
    with pytest.raises(ProtocolError) as excinfo:
        LocalApiClient().fetch_status()
    assert "4102" in excinfo.value.detail
    assert "Invalid OAuth token" in excinfo.value.detail


def test_connect_success(fake_get, status_json):
    fake_get.result = make_response(body=status_json)
    client = connect(port=4372)
    assert isinstance(client, LocalApiClient)
    assert client.is_connected()
    client.disconnect()
    assert not client.is_connected()


def test_connect_helper_not_running(fake_get):
    fake_get.result = requests.exceptions.ConnectionError("refused")
    with pytest.raises(HelperNotRunning) as excinfo:
        connect()
    assert isinstance(excinfo.value.__cause__, ConnectionRefused)


def test_connect_client_not_running(fake_get, status_json):
    status_json["running"] = False
    fake_get.result = make_response(body=status_json)
    client = LocalApiClient()
    with pytest.raises(ClientNotRunning):
        client.connect()
    assert not client.is_connected()


def test_connect_internal_error(fake_get):
    fake_get.result = make_response(status_code=404)
    with pytest.raises(InternalError) as excinfo:
        connect()
    assert isinstance(excinfo.value.cause, EndpointNotFound)


def test_connection_error_marks_client_disconnected(fake_get, status_json):
    fake_get.result = make_response(body=status_json)
    client = connect()
    fake_get.result = requests.exceptions.ConnectionError("gone")
    with pytest.raises(ConnectionRefused):
        client.fetch_status()
    assert not client.is_connected()


def test_poll_uses_client_as_transport(fake_get, status_json):
    fake_get.result = make_response(body=status_json)
    client = LocalApiClient()
    seen = []

    def callback(transport, snapshot, changes):
        seen.append((transport, snapshot, changes))
        return False

    outcome = client.poll(callback, interval=0.01).join(timeout=5)
    assert outcome is not None
    assert len(seen) == 1
    assert seen[0][0] is client
    assert seen[0][2].any_changed()


def test_non_finite_json_numbers_parse_to_defaults(fake_get):
    fake_get.result = make_response(raw=b'{"volume": 1e400, "server_time": NaN, "online": true}')
    snapshot = LocalApiClient().fetch_status()
    assert snapshot.volume_percentage == 0
    assert snapshot.server_time == 0
    assert snapshot.online is True
