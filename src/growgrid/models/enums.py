"""Enumerations for the lighting designer."""

from enum import Enum


class Channel(str, Enum):
    """Colour channels."""

    RED = "red"
    GREEN = "green"
    BLUE = "blue"


class TimeBand(str, Enum):
    """Coarse time-of-day bands used by spectrum boosts."""

    MORNING = "morning"  # 06:00-12:00
    MIDDAY = "midday"  # 12:00-18:00
    EVENING = "evening"  # 18:00-22:00
    NIGHT = "night"  # 22:00-06:00

    @property
    def hours(self) -> tuple[int, int]:
        """Start and end hour of the band (end exclusive, may wrap)."""
        return _BAND_HOURS[self]

    @property
    def boost(self) -> int:
        """Amount added to a channel while this band is active."""
        return _BAND_BOOST[self]

    def contains(self, hour: float) -> bool:
        """Check whether an hour of the day falls in this band."""
        start, end = self.hours
        if start < end:
            return start <= hour < end
        return hour >= start or hour < end


_BAND_HOURS = {
    TimeBand.MORNING: (6, 12),
    TimeBand.MIDDAY: (12, 18),
    TimeBand.EVENING: (18, 22),
    TimeBand.NIGHT: (22, 6),
}

_BAND_BOOST = {
    TimeBand.MORNING: 50,
    TimeBand.MIDDAY: 50,
    TimeBand.EVENING: 30,
    TimeBand.NIGHT: 10,
}


class ClockState(str, Enum):
    """Schedule clock states."""

    PAUSED = "paused"
    PLAYING = "playing"


class ConnectionStatus(str, Enum):
    """Hardware link status."""

    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    ERROR = "error"


class SpectrumClass(str, Enum):
    """Dominant-channel classification of a resolved grid."""

    OFF = "Off"
    RED_DOMINANT = "Red Dominant"
    GREEN_DOMINANT = "Green Dominant"
    BLUE_DOMINANT = "Blue Dominant"
    FULL_SPECTRUM = "Full Spectrum (White)"
    BALANCED = "Balanced Mix"


class Intensity(str, Enum):
    """Requested light intensity for generated recipes."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    VERY_HIGH = "Very High"


class Pulsing(str, Enum):
    """Requested pulsing behaviour for generated recipes."""

    NONE = "None"
    SLOW = "Slow Pulses"
    FAST = "Fast Pulses"
