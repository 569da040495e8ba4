"""Observer protocol definitions for domain-specific events."""

from typing import Protocol, runtime_checkable

from .events import ClockEvent, EditEvent, TransportEvent


@runtime_checkable
class EditObserver(Protocol):
    """
    Observer that receives editing events from the keyframe store.

    Observers never receive cached interpolation state; anything derived
    from keyframes must be resampled after an edit.
    """

    def on_edit_event(self, event: EditEvent, day: int | None, keyframe_ids: list[str]) -> None:
        """
        Handle editing events.

        Args:
            event: The type of editing event
            day: Index of the affected day, or None for schedule-wide edits
            keyframe_ids: Ids of the affected keyframes (may be empty)
        """
        ...


@runtime_checkable
class ClockObserver(Protocol):
    """Observer that receives schedule clock events."""

    def on_clock_event(self, event: ClockEvent, absolute_time: float) -> None:
        """
        Handle clock changes.

        Args:
            event: The type of clock event
            absolute_time: Cursor position in minutes since the start of day 0
        """
        ...


@runtime_checkable
class TransportObserver(Protocol):
    """Observer that receives hardware link status changes."""

    def on_transport_event(self, event: TransportEvent, message: str | None = None) -> None:
        """
        Handle link status changes.

        Args:
            event: The type of transport event
            message: User-facing detail (e.g. why the link dropped)
        """
        ...
