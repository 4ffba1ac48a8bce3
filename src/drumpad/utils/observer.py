"""Generic observer list with exception-isolated notification."""

import logging
from threading import Lock
from typing import Any

logger = logging.getLogger(__name__)


class ObserverManager[T: object]:
    """
    Thread-safe observer registration and notification.

    Used by PadSession (playback events) and PadSettings (mode/tempo events).
    The lock only guards the observer list; callbacks run after it is
    released so an observer may register or unregister from inside a
    notification.

    Example:
        ```python
        self._observers = ObserverManager[StateObserver](observer_type_name="state")
        self._observers.notify("on_playback_event", PlaybackEvent.PAD_TRIGGERED, key)
        ```
    """

    def __init__(self, observer_type_name: str = "observer"):
        """
        Initialize the observer manager.

        Args:
            observer_type_name: Name of the observer type for logging (e.g., "state")
        """
        self._observers: list[T] = []
        self._lock = Lock()
        self._observer_type_name = observer_type_name

    def register(self, observer: T) -> None:
        """Register an observer (idempotent - won't add duplicates)."""
        with self._lock:
            if observer in self._observers:
                logger.debug(f"{self._observer_type_name} observer already registered: {observer}")
                return
            self._observers.append(observer)
        logger.debug(f"Registered {self._observer_type_name} observer: {observer}")

    def unregister(self, observer: T) -> None:
        """Unregister an observer. Unknown observers are ignored with a warning."""
        with self._lock:
            if observer not in self._observers:
                logger.warning(
                    f"Attempted to unregister unknown {self._observer_type_name} observer: {observer}"
                )
                return
            self._observers.remove(observer)
        logger.debug(f"Unregistered {self._observer_type_name} observer: {observer}")

    def notify(self, callback_name: str, *args: Any, **kwargs: Any) -> None:
        """
        Call `callback_name` on every observer.

        Exceptions in one observer are logged and don't affect the others.

        Args:
            callback_name: Name of the callback method (e.g., 'on_playback_event')
            *args: Positional arguments to pass to the callback
            **kwargs: Keyword arguments to pass to the callback
        """
        with self._lock:
            observers = list(self._observers)

        for observer in observers:
            try:
                getattr(observer, callback_name)(*args, **kwargs)
            except Exception as e:
                logger.error(
                    f"Error notifying {self._observer_type_name} observer {observer} "
                    f"via {callback_name}: {e}",
                    exc_info=True,
                )

    def clear(self) -> None:
        """Remove all registered observers."""
        with self._lock:
            self._observers.clear()

    def __contains__(self, observer: T) -> bool:
        with self._lock:
            return observer in self._observers

    def __len__(self) -> int:
        with self._lock:
            return len(self._observers)
