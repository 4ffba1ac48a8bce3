"""Observer protocol definitions for domain events."""

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from .events import PlaybackEvent, SettingsEvent

if TYPE_CHECKING:
    from drumpad.core.settings import PadSettings
    from drumpad.models import PadKey


@runtime_checkable
class StateObserver(Protocol):
    """
    Observer that receives playback events for individual pads.

    Visual layers use this to light pads up; the core never depends on it.
    """

    def on_playback_event(self, event: PlaybackEvent, key: "PadKey") -> None:
        """
        Handle a playback state change.

        Args:
            event: The type of playback event
            key: The pad the event concerns

        Note:
            Called on the session's event loop thread, interleaved with
            input events and retrigger ticks.
        """
        ...


@runtime_checkable
class SettingsObserver(Protocol):
    """Observer that receives mode/tempo changes."""

    def on_settings_event(self, event: SettingsEvent, settings: "PadSettings") -> None:
        """
        Handle a settings change.

        Args:
            event: Which setting changed
            settings: The settings object after the change
        """
        ...
