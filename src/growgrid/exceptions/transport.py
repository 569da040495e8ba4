"""Hardware transport exceptions.

- TransportError: Base class for hardware link errors
- TransportOpenError: The serial port could not be opened
- TransportWriteError: A frame could not be written
"""

from .base import GrowGridError


class TransportError(GrowGridError):
    """Hardware link failed."""

    def __init__(self, user_message: str, port: str | None = None, **kwargs):
        """
        Initialize transport error.

        Args:
            user_message: User-friendly error message
            port: The serial port involved (if known)
        """
        super().__init__(user_message, **kwargs)
        self.port = port


class TransportOpenError(TransportError):
    """Serial port could not be opened."""

    def __init__(self, port: str, original_error: str | None = None):
        """
        Initialize open error.

        Args:
            port: The serial port that failed to open
            original_error: The error message from the serial library
        """
        user_msg = f"Could not connect to {port}."
        tech_msg = user_msg
        if original_error:
            tech_msg += f"\nOriginal error: {original_error}"

        super().__init__(
            user_message=user_msg,
            technical_message=tech_msg,
            port=port,
            recovery_hint=(
                "Check the cable and that no other program holds the port. "
                "Run 'growgrid serial list' to see available ports."
            ),
        )


class TransportWriteError(TransportError):
    """Frame write to the hardware failed; the link has been dropped."""

    def __init__(self, port: str | None = None, original_error: str | None = None):
        """
        Initialize write error.

        Args:
            port: The serial port that failed
            original_error: The error message from the serial library
        """
        user_msg = "Lost connection to the LED controller."
        tech_msg = f"Write to {port or 'transport'} failed: {original_error or 'unknown error'}"

        super().__init__(
            user_message=user_msg,
            technical_message=tech_msg,
            port=port,
            recovery_hint="Reconnect the device to resume streaming.",
        )
