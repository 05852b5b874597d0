"""
Status Model - Data models for the local API status payload

This module turns the JSON returned by the helper's status endpoint into
immutable records: the status snapshot itself, the track/artist/album
resources it references and a few smaller helper types.
"""

import math
from dataclasses import dataclass, field
from typing import Optional, Dict, Any


def _as_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _as_bool(value: Any) -> bool:
    # the helper reports flags as JSON booleans; anything else counts as false
    return value is True


def _as_int(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value):
        return int(value)
    return 0


def _as_float(value: Any) -> float:
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, int):
        try:
            value = float(value)
        except OverflowError:
            return 0.0
    if isinstance(value, float) and math.isfinite(value):
        return value
    return 0.0


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def volume_to_percentage(volume: Any) -> int:
    """
    Convert the helper's volume (0.0 - 1.0) to a percentage.

    Returns:
        Integer in 0..100
    """
    # clamp first so huge values cannot overflow when scaled
    volume = max(0.0, min(1.0, _as_float(volume)))
    return int(round(volume * 100))


@dataclass(frozen=True)
class Resource:
    """
    A named resource (artist, album or track) as reported by the helper.
    """
    uri: str = ""
    name: str = ""
    url: str = ""  # web link ("location.og")

    @classmethod
    def from_json(cls, data: Any) -> "Resource":
        data = _as_dict(data)
        return cls(
            uri=_as_str(data.get('uri')),
            name=_as_str(data.get('name')),
            url=_as_str(_as_dict(data.get('location')).get('og')),
        )

    def same_as(self, other: "Resource") -> bool:
        """
        Resources are the same when their URIs match. Without a URI on both
        sides every field has to match.
        """
        if self.uri and other.uri:
            return self.uri == other.uri
        return self == other

    def to_dict(self) -> Dict[str, Any]:
        return {'uri': self.uri, 'name': self.name, 'url': self.url}


@dataclass(frozen=True)
class TrackResource(Resource):
    """
    The playing track: a resource with a length and a track type.
    """
    length: int = 0  # Length in full seconds
    track_type: str = ""

    def get_length_formatted(self) -> str:
        """
        Get formatted length string (M:SS).
        """
        if self.length <= 0:
            return "0:00"
        minutes, seconds = divmod(self.length, 60)
        return f"{minutes}:{seconds:02d}"

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update({
            'length': self.length,
            'length_formatted': self.get_length_formatted(),
            'track_type': self.track_type,
        })
        return data


@dataclass(frozen=True)
class OpenGraphState:
    """Social sharing state of the current session."""
    private_session: bool = False
    posting_disabled: bool = False

    @classmethod
    def from_json(cls, data: Any) -> "OpenGraphState":
        data = _as_dict(data)
        return cls(
            private_session=_as_bool(data.get('private_session')),
            posting_disabled=_as_bool(data.get('posting_disabled')),
        )


@dataclass(frozen=True)
class SimpleTrack:
    """
    Just the names of the playing track, its artist and album.
    """
    name: str
    artist: str
    album: str

    def __str__(self) -> str:
        return f"{self.artist} - {self.name}"


@dataclass(frozen=True)
class StatusSnapshot:
    """
    One parsed observation of the local API status.

    A snapshot with a track always carries an artist and an album; a snapshot
    without a track carries neither.
    """
    client_version: str = ""
    online: bool = False
    volume_percentage: int = 0
    track: Optional[TrackResource] = None
    artist: Optional[Resource] = None
    album: Optional[Resource] = None
    version: int = 0  # protocol version
    running: bool = False
    playing: bool = False
    shuffle: bool = False
    server_time: int = 0
    play_enabled: bool = False
    prev_enabled: bool = False
    next_enabled: bool = False
    playing_position: float = 0.0  # seconds
    open_graph_state: OpenGraphState = field(default_factory=OpenGraphState)

    def __post_init__(self):
        if not 0 <= self.volume_percentage <= 100:
            raise ValueError(f"volume_percentage must be between 0 and 100, got {self.volume_percentage}")
        if self.track is not None and (self.artist is None or self.album is None):
            raise ValueError("A snapshot with a track must also carry its artist and album")
        if self.track is None and (self.artist is not None or self.album is not None):
            raise ValueError("A snapshot without a track cannot carry an artist or album")

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "StatusSnapshot":
        """
        Build a snapshot from a status.json payload.

        Parsing is permissive: missing or mistyped keys fall back to empty
        defaults instead of raising.

        Args:
            data: Decoded JSON object from the status endpoint

        Returns:
            New StatusSnapshot
        """
        data = _as_dict(data)
        track_data = _as_dict(data.get('track'))
        track_resource = Resource.from_json(track_data.get('track_resource'))

        track = artist = album = None
        if track_resource.uri or track_resource.name:
            track = TrackResource(
                uri=track_resource.uri,
                name=track_resource.name,
                url=track_resource.url,
                length=_as_int(track_data.get('length')),
                track_type=_as_str(track_data.get('track_type')),
            )
            artist = Resource.from_json(track_data.get('artist_resource'))
            album = Resource.from_json(track_data.get('album_resource'))

        return cls(
            client_version=_as_str(data.get('client_version')),
            online=_as_bool(data.get('online')),
            volume_percentage=volume_to_percentage(data.get('volume')),
            track=track,
            artist=artist,
            album=album,
            version=_as_int(data.get('version')),
            running=_as_bool(data.get('running')),
            playing=_as_bool(data.get('playing')),
            shuffle=_as_bool(data.get('shuffle')),
            server_time=_as_int(data.get('server_time')),
            play_enabled=_as_bool(data.get('play_enabled')),
            prev_enabled=_as_bool(data.get('prev_enabled')),
            next_enabled=_as_bool(data.get('next_enabled')),
            playing_position=_as_float(data.get('playing_position')),
            open_graph_state=OpenGraphState.from_json(data.get('open_graph_state')),
        )

    def has_track(self) -> bool:
        return self.track is not None

    def simple_track(self) -> Optional[SimpleTrack]:
        """
        Get the names of the playing track, artist and album.

        Returns:
            SimpleTrack or None when nothing is loaded
        """
        if self.track is None:
            return None
        return SimpleTrack(name=self.track.name, artist=self.artist.name, album=self.album.name)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {
            'client_version': self.client_version,
            'version': self.version,
            'online': self.online,
            'running': self.running,
            'playing': self.playing,
            'shuffle': self.shuffle,
            'volume_percentage': self.volume_percentage,
            'server_time': self.server_time,
            'play_enabled': self.play_enabled,
            'prev_enabled': self.prev_enabled,
            'next_enabled': self.next_enabled,
            'playing_position': self.playing_position,
            'open_graph_state': {
                'private_session': self.open_graph_state.private_session,
                'posting_disabled': self.open_graph_state.posting_disabled,
            },
            'track': self.track.to_dict() if self.track else None,
            'artist': self.artist.to_dict() if self.artist else None,
            'album': self.album.to_dict() if self.album else None,
        }
