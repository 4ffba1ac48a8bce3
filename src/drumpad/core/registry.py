"""Bookkeeping for sources that are currently sounding."""

import logging

from drumpad.models import PadKey
from drumpad.protocols import AudioSource

logger = logging.getLogger(__name__)


class SourceRegistry:
    """
    Tracks in-flight sources per pad so they can be force-stopped by key.

    A key maps to a non-empty set of sources; the entry disappears as soon
    as its last source is unregistered or stopped.
    """

    def __init__(self) -> None:
        self._sources: dict[PadKey, set[AudioSource]] = {}

    def register(self, key: PadKey, source: AudioSource) -> None:
        """Add a newly started source under `key`."""
        self._sources.setdefault(key, set()).add(source)

    def unregister(self, key: PadKey, source: AudioSource) -> bool:
        """
        Remove a source that ended on its own.

        Unknown keys or sources (e.g. already force-stopped) are ignored.

        Returns:
            True if the source was registered
        """
        sources = self._sources.get(key)
        if sources is None or source not in sources:
            return False

        sources.discard(source)
        if not sources:
            del self._sources[key]
        return True

    def stop_all(self, key: PadKey) -> int:
        """
        Stop and forget every source registered under `key`.

        Safe on keys with no sources and on sources that already finished:
        errors raised by stop() are swallowed.

        Returns:
            Number of sources that were removed
        """
        sources = self._sources.pop(key, None)
        if not sources:
            return 0

        for source in sources:
            try:
                source.stop()
            except Exception as e:
                logger.debug(f"Ignoring error stopping source for {key}: {e}")
        return len(sources)

    def stop_everything(self) -> int:
        """Stop every source of every pad. Returns the number stopped."""
        return sum(self.stop_all(key) for key in list(self._sources))

    def active_count(self, key: PadKey) -> int:
        """Number of sources registered under `key`."""
        return len(self._sources.get(key, ()))

    def keys(self) -> list[PadKey]:
        """Pads with at least one registered source."""
        return list(self._sources)

    def __contains__(self, key: object) -> bool:
        return key in self._sources

    def __len__(self) -> int:
        return sum(len(sources) for sources in self._sources.values())
