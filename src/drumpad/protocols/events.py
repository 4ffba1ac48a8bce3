"""Domain events for observer pattern.

- Playback events: pad press state and sounding state changes
- Settings events: mode and tempo changes from the UI controls
"""

from enum import Enum


class PlaybackEvent(Enum):
    """Events from the playback core."""

    PAD_PRESSED = "pad_pressed"      # Pad entered the pressed set (hold mode)
    PAD_RELEASED = "pad_released"    # Pad left the pressed set (hold mode)
    PAD_TRIGGERED = "pad_triggered"  # A new sound started for the pad
    PAD_FINISHED = "pad_finished"    # The pad's last sound ended naturally


class SettingsEvent(Enum):
    """Events from the mode/tempo state."""

    MODE_CHANGED = "mode_changed"    # Hold mode flag toggled
    TEMPO_CHANGED = "tempo_changed"  # BPM changed (affects the next tick only)
