"""
Change detection between two status snapshots
"""

from dataclasses import dataclass, fields
from typing import List, Optional

from .status_model import Resource, StatusSnapshot


@dataclass(frozen=True)
class ChangeSet:
    """
    Which status fields changed between two snapshots.

    Each flag is named after the snapshot field it tracks (``volume`` tracks
    ``volume_percentage``).
    """
    client_version: bool = False
    version: bool = False
    online: bool = False
    running: bool = False
    playing: bool = False
    shuffle: bool = False
    volume: bool = False
    server_time: bool = False
    play_enabled: bool = False
    prev_enabled: bool = False
    next_enabled: bool = False
    playing_position: bool = False
    open_graph_state: bool = False
    track: bool = False
    artist: bool = False
    album: bool = False

    @classmethod
    def all_changed(cls) -> "ChangeSet":
        """ChangeSet for a first observation: every flag set."""
        return cls(**{f.name: True for f in fields(cls)})

    def changed_fields(self) -> List[str]:
        return [f.name for f in fields(self) if getattr(self, f.name)]

    def any_changed(self) -> bool:
        return any(getattr(self, f.name) for f in fields(self))

    def __bool__(self) -> bool:
        return self.any_changed()


def _resource_changed(old: Optional[Resource], new: Optional[Resource]) -> bool:
    if old is None and new is None:
        return False
    if old is None or new is None:
        return True
    return not old.same_as(new)


def diff(old: Optional[StatusSnapshot], new: StatusSnapshot) -> ChangeSet:
    """
    Compare two snapshots field by field.

    Track, artist and album compare by URI; going from "no track" to "track"
    or back always counts as a change. Pure function, safe from any thread.

    Args:
        old: Previous snapshot, or None for the first observation
        new: Current snapshot

    Returns:
        ChangeSet with one flag per field
    """
    if old is None:
        return ChangeSet.all_changed()

    return ChangeSet(
        client_version=old.client_version != new.client_version,
        version=old.version != new.version,
        online=old.online != new.online,
        running=old.running != new.running,
        playing=old.playing != new.playing,
        shuffle=old.shuffle != new.shuffle,
        volume=old.volume_percentage != new.volume_percentage,
        server_time=old.server_time != new.server_time,
        play_enabled=old.play_enabled != new.play_enabled,
        prev_enabled=old.prev_enabled != new.prev_enabled,
        next_enabled=old.next_enabled != new.next_enabled,
        playing_position=old.playing_position != new.playing_position,
        open_graph_state=old.open_graph_state != new.open_graph_state,
        track=_resource_changed(old.track, new.track),
        artist=_resource_changed(old.artist, new.artist),
        album=_resource_changed(old.album, new.album),
    )
