"""Protocol definitions for observers and playback collaborators.

- Events: playback and settings events
- Observers: protocols for components that react to these events
- Playback: audio source / renderer contracts used by the core
"""

from .events import PlaybackEvent, SettingsEvent
from .observers import SettingsObserver, StateObserver
from .playback import AudioRenderer, AudioSource

__all__ = [
    "AudioRenderer",
    "AudioSource",
    # Events
    "PlaybackEvent",
    "SettingsEvent",
    # Observers
    "SettingsObserver",
    "StateObserver",
]
