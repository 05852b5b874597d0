"""
spotilocal - Status polling for a desktop player's local API

Reads the status served by the player's helper process on localhost,
parses it into immutable snapshots and can poll it in the background,
reporting what changed between polls.
"""

__version__ = "0.1.0"

from .client import LocalApiClient, connect
from .changes import ChangeSet, diff
from .monitor import PollHandle, PollOutcome, PollState, StatusPoller, StopReason, start
from .status_model import OpenGraphState, Resource, SimpleTrack, StatusSnapshot, TrackResource
from .errors import (
    SpotilocalError,
    ConnectError,
    ClientNotRunning,
    HelperNotRunning,
    InternalError,
    TransportError,
    StatusTimeout,
    ConnectionRefused,
    EndpointNotFound,
    ProtocolError,
)

__all__ = [
    "LocalApiClient",
    "connect",
    "ChangeSet",
    "diff",
    "PollHandle",
    "PollOutcome",
    "PollState",
    "StatusPoller",
    "StopReason",
    "start",
    "OpenGraphState",
    "Resource",
    "SimpleTrack",
    "StatusSnapshot",
    "TrackResource",
    "SpotilocalError",
    "ConnectError",
    "ClientNotRunning",
    "HelperNotRunning",
    "InternalError",
    "TransportError",
    "StatusTimeout",
    "ConnectionRefused",
    "EndpointNotFound",
    "ProtocolError",
]
