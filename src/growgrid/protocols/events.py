"""Domain events for observer pattern.

- Edit events: persistent schedule mutations
- Clock events: playback cursor changes
- Transport events: hardware link changes
"""

from enum import Enum


class EditEvent(Enum):
    """
    Events that occur during editing operations.

    These events represent PERSISTENT state changes (saved to recipes).
    """

    KEYFRAME_ADDED = "keyframe_added"  # New keyframe captured
    KEYFRAME_DELETED = "keyframe_deleted"  # Keyframe removed
    KEYFRAME_RETIMED = "keyframe_retimed"  # Keyframe time changed
    KEYFRAME_RENAMED = "keyframe_renamed"  # Keyframe name changed
    KEYFRAME_PAINTED = "keyframe_painted"  # Cell colours of a keyframe changed
    DAY_REPLACED = "day_replaced"  # A day's keyframes were replaced wholesale
    GRID_RESIZED = "grid_resized"  # Grid dimension changed for every keyframe
    DAYS_CHANGED = "days_changed"  # Total day count changed
    SCHEDULE_REPLACED = "schedule_replaced"  # Whole schedule swapped (recipe load)


class ClockEvent(Enum):
    """Events from the schedule clock."""

    TICK = "tick"  # Cursor advanced by playback
    SEEK = "seek"  # Cursor moved by scrub / day selection
    STATE_CHANGED = "state_changed"  # Paused <-> playing


class TransportEvent(Enum):
    """Events from the hardware link."""

    CONNECTED = "connected"  # Port opened
    DISCONNECTED = "disconnected"  # Port closed (by user or after a write failure)
    ERROR = "error"  # Connect attempt failed
