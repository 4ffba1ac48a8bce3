"""Starting a single sound for a pad."""

import logging
from typing import TYPE_CHECKING

from drumpad.models import PadKey
from drumpad.protocols import AudioRenderer, AudioSource, PlaybackEvent, StateObserver
from drumpad.utils import ObserverManager

from .registry import SourceRegistry

if TYPE_CHECKING:
    from drumpad.audio.data import AudioData

logger = logging.getLogger(__name__)


class SourceLauncher:
    """
    Creates, registers and starts one source per call.

    Shared by the one-shot path and the retrigger loop. The source's end
    notification unregisters it, and PAD_FINISHED is published once the
    last sound of a pad has ended on its own.
    """

    def __init__(
        self,
        renderer: AudioRenderer,
        registry: SourceRegistry,
        observers: ObserverManager[StateObserver],
    ):
        self._renderer = renderer
        self._registry = registry
        self._observers = observers

    def play(self, key: PadKey, buffer: "AudioData") -> AudioSource:
        """
        Start one new sound for `key`. Does not stop existing ones.

        Returns:
            The started source
        """
        source = self._renderer.create_source(buffer)
        source.on_ended(lambda: self._on_source_ended(key, source))
        self._registry.register(key, source)
        source.start()

        logger.debug(f"Triggered {key} ({self._registry.active_count(key)} active)")
        self._observers.notify("on_playback_event", PlaybackEvent.PAD_TRIGGERED, key)
        return source

    def _on_source_ended(self, key: PadKey, source: AudioSource) -> None:
        if self._registry.unregister(key, source) and key not in self._registry:
            self._observers.notify("on_playback_event", PlaybackEvent.PAD_FINISHED, key)
