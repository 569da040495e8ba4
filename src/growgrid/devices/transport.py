"""Byte transports to the LED controller."""

import logging
from typing import Protocol, runtime_checkable

import serial
import serial.tools.list_ports

from growgrid.exceptions import TransportOpenError

logger = logging.getLogger(__name__)

DEFAULT_BAUD_RATE = 115200


@runtime_checkable
class FrameTransport(Protocol):
    """
    A byte sink for encoded frames.

    ``write`` reports failure through its return value instead of raising,
    so the streamer can drop the link without unwinding the tick that
    produced the frame.
    """

    @property
    def is_open(self) -> bool:
        """Whether frames can be written."""
        ...

    def open(self) -> None:
        """
        Open the link.

        Raises:
            TransportOpenError: If the device can't be opened
        """
        ...

    def write(self, data: bytes) -> bool:
        """Write one frame. Returns False if the write failed."""
        ...

    def close(self) -> None:
        """Close the link (safe to call when already closed)."""
        ...


class SerialTransport:
    """FrameTransport over a USB serial port (pyserial)."""

    def __init__(
        self,
        port: str,
        baud_rate: int = DEFAULT_BAUD_RATE,
        write_timeout: float | None = 1.0,
    ):
        """
        Initialize the transport (the port is not opened yet).

        Args:
            port: Serial device (e.g. /dev/ttyACM0, COM3)
            baud_rate: Line speed
            write_timeout: Seconds before a blocked write counts as failed
        """
        self.port = port
        self.baud_rate = baud_rate
        self.write_timeout = write_timeout
        self._serial: serial.Serial | None = None

    @property
    def is_open(self) -> bool:
        return self._serial is not None and self._serial.is_open

    def open(self) -> None:
        if self.is_open:
            return
        try:
            self._serial = serial.Serial(
                self.port,
                self.baud_rate,
                timeout=1,
                write_timeout=self.write_timeout,
            )
        except (serial.SerialException, OSError) as e:
            self._serial = None
            logger.error(f"Failed to open {self.port}: {e}")
            raise TransportOpenError(self.port, str(e)) from e
        logger.info(f"Opened {self.port} at {self.baud_rate} baud")

    def write(self, data: bytes) -> bool:
        if not self.is_open:
            return False
        try:
            self._serial.write(data)
            return True
        except (serial.SerialException, OSError) as e:
            logger.error(f"Write to {self.port} failed: {e}")
            return False

    def close(self) -> None:
        if self._serial is None:
            return
        try:
            self._serial.close()
        except (serial.SerialException, OSError) as e:
            logger.warning(f"Error closing {self.port}: {e}")
        finally:
            self._serial = None
            logger.info(f"Closed {self.port}")


def list_serial_ports() -> list[tuple[str, str]]:
    """Available serial ports as (device, description) pairs."""
    return [(port.device, port.description) for port in serial.tools.list_ports.comports()]
