import copy
import threading

import pytest

from spotilocal import StatusSnapshot


SAMPLE_STATUS = {
    "version": 9,
    "client_version": "1.0.42.151.g19de0aa6",
    "playing": True,
    "shuffle": False,
    "repeat": False,
    "play_enabled": True,
    "prev_enabled": True,
    "next_enabled": True,
    "track": {
        "track_resource": {
            "name": "Test Song",
            "uri": "spotify:track:track123",
            "location": {"og": "https://open.spotify.com/track/track123"},
        },
        "artist_resource": {
            "name": "Artist One",
            "uri": "spotify:artist:art1",
            "location": {"og": "https://open.spotify.com/artist/art1"},
        },
        "album_resource": {
            "name": "First Album",
            "uri": "spotify:album:alb1",
            "location": {"og": "https://open.spotify.com/album/alb1"},
        },
        "length": 210,
        "track_type": "normal",
    },
    "context": {},
    "playing_position": 12.5,
    "server_time": 1491339473,
    "volume": 0.75,
    "online": True,
    "open_graph_state": {"private_session": False, "posting_disabled": True},
    "running": True,
}


@pytest.fixture
def status_json():
    return copy.deepcopy(SAMPLE_STATUS)


@pytest.fixture
def snapshot(status_json):
    return StatusSnapshot.from_json(status_json)


class StubTransport:
    """
    Transport that replays a script of snapshots and errors, one per fetch.

    Once the script is exhausted the last entry repeats.
    """

    def __init__(self, script):
        self.script = list(script)
        self.fetches = 0
        self.threads = set()
        self._lock = threading.Lock()

    def fetch_status(self):
        with self._lock:
            self.threads.add(threading.get_ident())
            index = min(self.fetches, len(self.script) - 1)
            self.fetches += 1
        item = self.script[index]
        if isinstance(item, BaseException):
            raise item
        return item


class RecordingCallback:
    """Records every call; returns the scripted answers (True once exhausted)."""

    def __init__(self, answers=()):
        self.answers = list(answers)
        self.calls = []
        self.threads = set()

    def __call__(self, transport, snapshot, changes):
        self.threads.add(threading.get_ident())
        self.calls.append((snapshot, changes))
        index = len(self.calls) - 1
        if index < len(self.answers):
            return self.answers[index]
        return True


@pytest.fixture
def stub_transport():
    return StubTransport


@pytest.fixture
def recording_callback():
    return RecordingCallback
