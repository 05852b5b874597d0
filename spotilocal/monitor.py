"""
Status Monitor - Background polling of the local API with change detection
"""

import logging
import threading
import itertools
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Callable, Any

from . import config
from .changes import ChangeSet, diff
from .errors import TransportError
from .status_model import StatusSnapshot

logger = logging.getLogger(__name__)

# callback(transport, snapshot, changes) -> keep polling?
StatusCallback = Callable[[Any, StatusSnapshot, ChangeSet], bool]

_poller_ids = itertools.count(1)


class PollState(Enum):
    """Lifecycle of a status poller"""
    CREATED = "created"
    RUNNING = "running"
    STOPPED = "stopped"


class StopReason(Enum):
    """Why a poll loop ended"""
    NORMAL_STOP = "normal_stop"            # callback returned False
    FATAL_TRANSPORT = "fatal_transport"    # helper gone or endpoint removed
    CANCELLED = "cancelled"                # PollHandle.cancel()
    UNEXPECTED_ERROR = "unexpected_error"  # callback or transport raised something else


@dataclass(frozen=True)
class PollOutcome:
    """
    Terminal result of a poll loop.
    """
    reason: StopReason
    error: Optional[BaseException] = None
    ticks: int = 0  # fetch attempts made

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self):
        """Re-raise the error that ended the loop, if any."""
        if self.error is not None:
            raise self.error


class StatusPoller:
    """
    Poll a transport on a dedicated thread and report every snapshot with
    the changes since the previous one.

    The last snapshot lives only inside the loop thread; callers see
    immutable snapshots, ChangeSets and the final PollOutcome.
    """

    def __init__(self,
                 transport,
                 callback: StatusCallback,
                 interval: Optional[float] = None,
                 max_consecutive_failures: Optional[int] = None):
        """
        Initialize status poller.

        Args:
            transport: Object with a fetch_status() -> StatusSnapshot method
            callback: Called as callback(transport, snapshot, changes) after
                every successful fetch; return False to stop polling
            interval: Seconds to wait before each tick (default from config)
            max_consecutive_failures: Transient failures in a row before giving
                up, 0 for unlimited (default from config)
        """
        if interval is None:
            interval = config.POLL_INTERVAL
        if max_consecutive_failures is None:
            max_consecutive_failures = config.POLL_MAX_CONSECUTIVE_FAILURES

        if interval <= 0:
            raise ValueError(f"Poll interval must be positive, got {interval}")
        if max_consecutive_failures < 0:
            raise ValueError("max_consecutive_failures cannot be negative")

        self.transport = transport
        self.callback = callback
        self.interval = float(interval)
        self.max_consecutive_failures = max_consecutive_failures

        self.state = PollState.CREATED
        self.outcome: Optional[PollOutcome] = None
        self._poll_thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()
        self.name = f"spotilocal-poller-{next(_poller_ids)}"

    def start(self) -> "PollHandle":
        """
        Start the poll loop on its own thread. Never blocks.

        Returns:
            PollHandle for joining or cancelling the loop
        """
        if self.state is not PollState.CREATED:
            raise RuntimeError(f"{self.name} was already started")

        logger.info(f"Starting {self.name} (interval {self.interval}s)")
        self._poll_thread = threading.Thread(target=self._poll_loop, name=self.name, daemon=True)
        self.state = PollState.RUNNING
        self._poll_thread.start()
        return PollHandle(self)

    def _poll_loop(self):
        """Main polling loop."""
        last_snapshot: Optional[StatusSnapshot] = None
        failures = 0
        ticks = 0
        outcome = None

        while outcome is None:
            # Returns True as soon as cancel() is requested
            if self._stop_event.wait(timeout=self.interval):
                outcome = PollOutcome(StopReason.CANCELLED, ticks=ticks)
                break

            ticks += 1
            try:
                snapshot = self.transport.fetch_status()
            except TransportError as e:
                failures += 1
                gave_up = self.max_consecutive_failures and failures >= self.max_consecutive_failures
                if e.fatal or gave_up:
                    logger.error(f"{self.name}: stopping after fatal transport error: {e}")
                    outcome = PollOutcome(StopReason.FATAL_TRANSPORT, error=e, ticks=ticks)
                else:
                    logger.warning(f"{self.name}: transient transport error ({failures} in a row), retrying: {e}")
                continue
            except Exception as e:
                logger.exception(f"{self.name}: unexpected error fetching status")
                outcome = PollOutcome(StopReason.UNEXPECTED_ERROR, error=e, ticks=ticks)
                continue

            failures = 0
            changes = diff(last_snapshot, snapshot)
            last_snapshot = snapshot
            logger.debug(f"{self.name}: tick {ticks} changed {changes.changed_fields()}")

            try:
                keep_polling = self.callback(self.transport, snapshot, changes)
            except Exception as e:
                logger.exception(f"{self.name}: error in status callback")
                outcome = PollOutcome(StopReason.UNEXPECTED_ERROR, error=e, ticks=ticks)
                continue

            if not keep_polling:
                outcome = PollOutcome(StopReason.NORMAL_STOP, ticks=ticks)

        self.outcome = outcome
        self.state = PollState.STOPPED
        logger.info(f"{self.name} stopped: {outcome.reason.value} after {outcome.ticks} ticks")

    def cancel(self):
        """Ask the loop to stop at the next tick boundary."""
        if self.state is PollState.STOPPED:
            logger.debug(f"{self.name} already stopped, ignoring cancel")
            return
        self._stop_event.set()

    def join(self, timeout: Optional[float] = None) -> Optional[PollOutcome]:
        if self._poll_thread is None:
            raise RuntimeError(f"{self.name} was never started")
        self._poll_thread.join(timeout)
        if self._poll_thread.is_alive():
            return None
        return self.outcome

    def is_running(self) -> bool:
        return self._poll_thread is not None and self._poll_thread.is_alive()


class PollHandle:
    """
    Handle to a running poll loop.

    join() may be called any number of times; once the loop has ended every
    call returns the same PollOutcome.
    """

    def __init__(self, poller: StatusPoller):
        self._poller = poller

    @property
    def thread_name(self) -> str:
        return self._poller.name

    @property
    def outcome(self) -> Optional[PollOutcome]:
        """Final outcome, or None while the loop is still running."""
        return self._poller.outcome

    def join(self, timeout: Optional[float] = None) -> Optional[PollOutcome]:
        """
        Block until the poll loop ends.

        Args:
            timeout: Seconds to wait, None to wait forever

        Returns:
            PollOutcome, or None if the timeout expired first
        """
        return self._poller.join(timeout)

    def cancel(self):
        """
        Request the loop to stop. A tick already in flight completes first;
        after the loop has ended this does nothing.
        """
        self._poller.cancel()

    def stop(self, timeout: Optional[float] = None) -> Optional[PollOutcome]:
        """Cancel and wait for the loop (default wait from config)."""
        self.cancel()
        return self.join(config.THREAD_JOIN_TIMEOUT if timeout is None else timeout)

    def is_running(self) -> bool:
        return self._poller.is_running()


def start(transport,
          interval: float,
          callback: StatusCallback,
          max_consecutive_failures: Optional[int] = None) -> PollHandle:
    """
    Start polling ``transport`` every ``interval`` seconds.

    Returns:
        PollHandle for the new poll loop
    """
    poller = StatusPoller(transport, callback, interval=interval,
                          max_consecutive_failures=max_consecutive_failures)
    return poller.start()
