"""
spotilocal Client - HTTP transport for the desktop player's local API
"""

import logging
import requests
from typing import Optional, Dict, Any

from . import config
from .errors import (
    ClientNotRunning,
    ConnectionRefused,
    EndpointNotFound,
    HelperNotRunning,
    InternalError,
    ProtocolError,
    StatusTimeout,
    TransportError,
)
from .monitor import PollHandle, StatusCallback, StatusPoller
from .status_model import StatusSnapshot

logger = logging.getLogger(__name__)

# Status codes meaning the endpoint is gone for good
_GONE_STATUS_CODES = (404, 410)


class LocalApiClient:
    """
    Client for the status endpoint served by the player's helper process.
    """

    def __init__(self,
                 host: Optional[str] = None,
                 port: Optional[int] = None,
                 scheme: Optional[str] = None,
                 status_path: Optional[str] = None,
                 timeout: Optional[float] = None,
                 params: Optional[Dict[str, str]] = None,
                 headers: Optional[Dict[str, str]] = None):
        """
        Initialize local API client.

        Args:
            host: Helper hostname (default from config)
            port: Helper port (default from config)
            scheme: 'http' or 'https'
            status_path: Path of the status endpoint
            timeout: Request timeout in seconds
            params: Extra query parameters sent with every request (tokens, etc.)
            headers: Extra headers; an Origin header is always sent
        """
        self.host = host or config.LOCAL_API_HOST
        self.port = port or config.LOCAL_API_PORT
        self.scheme = scheme or config.LOCAL_API_SCHEME
        self.status_path = status_path or config.LOCAL_API_STATUS_PATH
        self.timeout = timeout if timeout is not None else config.LOCAL_API_REQUEST_TIMEOUT
        self.params = dict(params or {})
        self.headers = {"Origin": config.LOCAL_API_ORIGIN}
        self.headers.update(headers or {})
        self._connected = False

        # Construct base URL
        self.base_url = f"{self.scheme}://{self.host}:{self.port}"
        self.status_url = f"{self.base_url}/{self.status_path.lstrip('/')}"

        logger.info(f"Local API client initialized for {self.base_url}")

    def __repr__(self) -> str:
        return f"LocalApiClient({self.status_url!r})"

    def _send_request(self, url: str) -> Dict[str, Any]:
        """
        Send GET request to the local API.

        Args:
            url: Full endpoint URL

        Returns:
            Decoded JSON object

        Raises:
            TransportError: subclass matching the failure
        """
        try:
            response = requests.get(url, headers=self.headers, params=self.params, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.Timeout as e:
            raise StatusTimeout(f"Request timeout for {url}", url=url) from e
        except requests.exceptions.ConnectionError as e:
            self._connected = False
            raise ConnectionRefused(f"Connection error for {url}", url=url) from e
        except requests.exceptions.HTTPError as e:
            if e.response is not None and e.response.status_code in _GONE_STATUS_CODES:
                self._connected = False
                raise EndpointNotFound(f"Endpoint not found: {url}", url=url) from e
            raise ProtocolError(f"HTTP error {e}", url=url) from e
        except requests.exceptions.RequestException as e:
            raise ProtocolError(f"Request error {e}", url=url) from e

        try:
            data = response.json()
        except ValueError as e:
            raise ProtocolError(f"JSON decode error: {e}", url=url) from e

        if not isinstance(data, dict):
            raise ProtocolError(f"expected a JSON object, got {type(data).__name__}", url=url)

        # The helper reports its own failures as {"error": {"type": ..., "message": ...}}
        error = data.get('error')
        if error:
            if isinstance(error, dict):
                detail = f"{error.get('type', '?')}: {error.get('message', '')}"
            else:
                detail = str(error)
            raise ProtocolError(f"helper returned error {detail}", url=url)

        return data

    def connect(self) -> "LocalApiClient":
        """
        Check that the helper answers and the player is running.

        Returns:
            This client, for chaining

        Raises:
            HelperNotRunning: Nothing answers at the configured address
            ClientNotRunning: The helper reports the player is not running
            InternalError: Any other failure
        """
        logger.info(f"Testing connection to local API at {self.base_url}")

        try:
            data = self.fetch_status_json()
        except ConnectionRefused as e:
            raise HelperNotRunning(f"No local API helper answering at {self.base_url}") from e
        except TransportError as e:
            raise InternalError(e) from e

        if data.get('running') is False:
            self._connected = False
            raise ClientNotRunning()

        self._connected = True
        logger.info("Connected to local API successfully")
        return self

    def disconnect(self):
        """Forget the connection state."""
        logger.info("Disconnecting from local API")
        self._connected = False

    def is_connected(self) -> bool:
        """Check if the last connect() succeeded and nothing failed since."""
        return self._connected

    # Status
    def fetch_status_json(self) -> Dict[str, Any]:
        """Get the raw status object."""
        return self._send_request(self.status_url)

    def fetch_status(self) -> StatusSnapshot:
        """
        Get player status.

        Raises:
            TransportError: If the request fails
        """
        return StatusSnapshot.from_json(self.fetch_status_json())

    def poll(self,
             callback: StatusCallback,
             interval: Optional[float] = None,
             max_consecutive_failures: Optional[int] = None) -> PollHandle:
        """
        Start polling the status in the background.

        Args:
            callback: Called as callback(client, snapshot, changes); return False to stop
            interval: Seconds between polls (default from config)
            max_consecutive_failures: Transient failures tolerated in a row, 0 for unlimited

        Returns:
            PollHandle to join or cancel the loop
        """
        poller = StatusPoller(self, callback, interval=interval,
                              max_consecutive_failures=max_consecutive_failures)
        return poller.start()


def connect(**kwargs) -> LocalApiClient:
    """
    Create a client and connect it.

    Keyword arguments are passed to LocalApiClient.

    Raises:
        ConnectError: If the helper or the player is not available
    """
    return LocalApiClient(**kwargs).connect()
