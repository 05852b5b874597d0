"""
spotilocal Errors - Exceptions raised while connecting to and polling the local API

Setup errors (ConnectError) are raised once by connect(). Transport errors are
raised per fetch; the ``fatal`` class attribute tells the status poller whether
polling can continue.
"""

from typing import Optional


class SpotilocalError(Exception):
    """Base class for all spotilocal errors."""


# =============================================================================
# Setup errors
# =============================================================================

class ConnectError(SpotilocalError):
    """Connecting to the local API failed."""


class ClientNotRunning(ConnectError):
    """The desktop player is not running."""

    def __init__(self, message: str = "Desktop client is not running"):
        super().__init__(message)


class HelperNotRunning(ConnectError):
    """The helper process serving the local API is not reachable."""

    def __init__(self, message: str = "Local API helper is not running"):
        super().__init__(message)


class InternalError(ConnectError):
    """Connecting failed for any other reason; ``cause`` holds the original error."""

    def __init__(self, cause: Exception):
        super().__init__(f"Internal error while connecting: {cause}")
        self.cause = cause


# =============================================================================
# Transport errors
# =============================================================================

class TransportError(SpotilocalError):
    """A single status fetch failed."""

    fatal = False

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


class StatusTimeout(TransportError):
    """The helper did not answer in time."""


class ConnectionRefused(TransportError):
    """The helper is no longer reachable."""

    fatal = True


class EndpointNotFound(TransportError):
    """The status endpoint does not exist (anymore)."""

    fatal = True


class ProtocolError(TransportError):
    """The helper answered with something that is not a usable status."""

    def __init__(self, detail: str, url: Optional[str] = None):
        super().__init__(f"Protocol error: {detail}", url=url)
        self.detail = detail
