"""Fan-out of events to a list of observers.

The keyframe store, the schedule clock and the frame streamer each own one
``ObserverManager`` and only decide *which* callback to fire.
"""

import logging
from threading import Lock
from typing import Any, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=object)


class ObserverManager(Generic[T]):
    """
    Thread-safe observer list.

    Registering the same observer twice keeps a single entry. Callbacks run
    on a snapshot of the list taken under the lock, so an observer may
    unregister itself (or others) while it is being notified. A callback
    that raises is logged and skipped; the rest still run.
    """

    def __init__(self, observer_type_name: str = "observer"):
        self._observers: list[T] = []
        self._lock = Lock()
        self._kind = observer_type_name

    def register(self, observer: T) -> None:
        with self._lock:
            if observer in self._observers:
                return
            self._observers.append(observer)
        logger.debug(f"{self._kind} observer added: {observer!r}")

    def unregister(self, observer: T) -> None:
        with self._lock:
            try:
                self._observers.remove(observer)
            except ValueError:
                logger.warning(f"{self._kind} observer was not registered: {observer!r}")
                return
        logger.debug(f"{self._kind} observer removed: {observer!r}")

    def notify(self, callback_name: str, *args: Any, **kwargs: Any) -> None:
        """Invoke ``callback_name(*args, **kwargs)`` on each observer."""
        with self._lock:
            snapshot = tuple(self._observers)

        for observer in snapshot:
            try:
                getattr(observer, callback_name)(*args, **kwargs)
            except Exception:
                logger.exception(f"{self._kind} observer {observer!r} failed in {callback_name}")

    def clear(self) -> None:
        with self._lock:
            self._observers.clear()

    def __contains__(self, observer: T) -> bool:
        with self._lock:
            return observer in self._observers

    def __len__(self) -> int:
        with self._lock:
            return len(self._observers)
