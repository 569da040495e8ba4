"""Protocol definitions for domain-specific observer patterns."""

from .events import ClockEvent, EditEvent, TransportEvent
from .observers import ClockObserver, EditObserver, TransportObserver

__all__ = [
    # Events
    "ClockEvent",
    "EditEvent",
    "TransportEvent",
    # Observers
    "ClockObserver",
    "EditObserver",
    "TransportObserver",
]
