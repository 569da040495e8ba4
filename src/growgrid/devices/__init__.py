"""Hardware link: byte transports and the rate-limited frame streamer."""

from .streamer import DEFAULT_FRAME_INTERVAL, FrameStreamer
from .transport import DEFAULT_BAUD_RATE, FrameTransport, SerialTransport, list_serial_ports

__all__ = [
    "DEFAULT_BAUD_RATE",
    "DEFAULT_FRAME_INTERVAL",
    "FrameStreamer",
    "FrameTransport",
    "SerialTransport",
    "list_serial_ports",
]
