"""Scheduled per-channel boost program."""

from pydantic import BaseModel, Field

from .enums import Channel, TimeBand


class BandSelection(BaseModel):
    """Which time bands boost one colour channel."""

    morning: bool = False
    midday: bool = False
    evening: bool = False
    night: bool = False

    def is_enabled(self, band: TimeBand) -> bool:
        """Check whether a band is switched on."""
        return getattr(self, band.value)


class SpectrumProgram(BaseModel):
    """Per-channel time-of-day boosts layered on top of interpolation."""

    red: BandSelection = Field(default_factory=BandSelection)
    green: BandSelection = Field(default_factory=BandSelection)
    blue: BandSelection = Field(default_factory=BandSelection)

    def for_channel(self, channel: Channel) -> BandSelection:
        """Get the band selection for a channel."""
        return getattr(self, channel.value)

    @property
    def is_empty(self) -> bool:
        """True when no band is enabled on any channel."""
        return not any(
            sel.is_enabled(band)
            for sel in (self.red, self.green, self.blue)
            for band in TimeBand
        )

    def enable(self, channel: Channel, band: TimeBand, enabled: bool = True) -> None:
        """Switch a band on or off for a channel."""
        setattr(self.for_channel(channel), band.value, enabled)
