"""Frame streamer: pushes resolved grids to the hardware at a bounded rate."""

import logging
import time
from collections.abc import Callable

from growgrid.core.encoder import encode_frame
from growgrid.exceptions import TransportOpenError, TransportWriteError
from growgrid.models import ConnectionStatus, Grid
from growgrid.protocols import ClockEvent, TransportEvent, TransportObserver
from growgrid.utils import ObserverManager

from .transport import FrameTransport

logger = logging.getLogger(__name__)

DEFAULT_FRAME_INTERVAL = 0.05

GridSource = Callable[[], tuple[Grid, int]]


class FrameStreamer:
    """
    Encodes resolved grids and writes them to a FrameTransport.

    At most one frame is written per ``frame_interval`` seconds; pushes that
    arrive sooner are dropped, not queued. A failed write closes the
    transport and leaves the streamer DISCONNECTED until ``connect()`` is
    called again.

    The streamer can be driven explicitly through ``push`` or registered as
    a ClockObserver with a ``grid_source`` that resamples on every tick.
    """

    def __init__(
        self,
        transport: FrameTransport | None = None,
        master_brightness: float = 100,
        frame_interval: float = DEFAULT_FRAME_INTERVAL,
        grid_source: GridSource | None = None,
        time_source: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the streamer (not connected).

        Args:
            transport: Link to the controller
            master_brightness: Output brightness percentage (0-100)
            frame_interval: Minimum seconds between written frames
            grid_source: Returns (resolved grid, grid size) for clock-driven pushes
            time_source: Monotonic clock in seconds
        """
        self._transport = transport
        self.master_brightness = master_brightness
        self.frame_interval = frame_interval
        self.grid_source = grid_source
        self._time_source = time_source
        self._status = ConnectionStatus.DISCONNECTED
        self._last_sent: float | None = None
        self._frames_sent = 0
        self._observers = ObserverManager[TransportObserver](observer_type_name="transport")

    # =================================================================
    # Observers
    # =================================================================

    def register_observer(self, observer: TransportObserver) -> None:
        """Register an observer to receive link status changes."""
        self._observers.register(observer)

    def unregister_observer(self, observer: TransportObserver) -> None:
        """Unregister an observer."""
        self._observers.unregister(observer)

    def _notify(self, event: TransportEvent, message: str | None = None) -> None:
        self._observers.notify("on_transport_event", event, message)

    # =================================================================
    # Link
    # =================================================================

    @property
    def status(self) -> ConnectionStatus:
        return self._status

    @property
    def is_connected(self) -> bool:
        return self._status is ConnectionStatus.CONNECTED

    @property
    def frames_sent(self) -> int:
        return self._frames_sent

    @property
    def transport(self) -> FrameTransport | None:
        return self._transport

    def connect(self, transport: FrameTransport | None = None) -> bool:
        """
        Open the link.

        Args:
            transport: Replaces the current transport if given

        Returns:
            True if connected; False if opening failed (status becomes ERROR)
        """
        if transport is not None:
            if self._transport is not None and self._transport is not transport:
                self._transport.close()
            self._transport = transport
        if self._transport is None:
            raise ValueError("FrameStreamer has no transport to connect")

        if self.is_connected:
            return True

        self._status = ConnectionStatus.CONNECTING
        try:
            self._transport.open()
        except TransportOpenError as e:
            self._status = ConnectionStatus.ERROR
            logger.error(e.technical_message)
            self._notify(TransportEvent.ERROR, e.user_message)
            return False

        self._status = ConnectionStatus.CONNECTED
        self._last_sent = None
        logger.info("Hardware link connected")
        self._notify(TransportEvent.CONNECTED)
        return True

    def disconnect(self) -> None:
        """Close the link."""
        if self._transport is not None:
            self._transport.close()
        if self._status is ConnectionStatus.DISCONNECTED:
            return
        self._status = ConnectionStatus.DISCONNECTED
        logger.info("Hardware link disconnected")
        self._notify(TransportEvent.DISCONNECTED)

    def _drop(self, error: TransportWriteError) -> None:
        logger.error(error.technical_message)
        self._transport.close()
        self._status = ConnectionStatus.DISCONNECTED
        self._notify(TransportEvent.DISCONNECTED, error.user_message)

    # =================================================================
    # Streaming
    # =================================================================

    def push(self, grid: Grid, grid_size: int) -> bool:
        """
        Write a frame if connected and the frame interval has elapsed.

        Returns:
            True if a frame was written
        """
        if not self.is_connected:
            return False

        now = self._time_source()
        if self._last_sent is not None and now - self._last_sent <= self.frame_interval:
            return False

        frame = encode_frame(grid, self.master_brightness, grid_size)
        if not self._transport.write(frame):
            port = getattr(self._transport, "port", None)
            self._drop(TransportWriteError(port, "write returned failure"))
            return False

        self._last_sent = now
        self._frames_sent += 1
        return True

    def on_clock_event(self, event: ClockEvent, absolute_time: float) -> None:
        """Resample and push on cursor moves."""
        if self.grid_source is None or event is ClockEvent.STATE_CHANGED:
            return
        grid, grid_size = self.grid_source()
        self.push(grid, grid_size)
