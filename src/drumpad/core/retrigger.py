"""Tempo-locked repeating playback for held pads."""

import logging
from collections.abc import Set
from enum import Enum
from functools import partial
from typing import TYPE_CHECKING

from drumpad.models import PadKey

from .clock import CancelHandle, Scheduler
from .launcher import SourceLauncher
from .registry import SourceRegistry
from .settings import PadSettings

if TYPE_CHECKING:
    from drumpad.audio.data import AudioData

logger = logging.getLogger(__name__)


class LoopPhase(Enum):
    """Per-pad retrigger state: IDLE, or LOOPING with a pending tick handle."""

    IDLE = "idle"
    LOOPING = "looping"


class RetriggerScheduler:
    """
    Owns one self-rescheduling retrigger loop per held pad.

    Each tick re-checks that the pad is still pressed, replaces the pad's
    sound with a fresh one, and schedules the next tick 60/bpm seconds out
    using the tempo at that moment. Release cancels the pending tick; if
    the cancel loses a race with the tick firing, the tick's own pressed
    check ends the loop instead.

    A pad is LOOPING exactly while a handle is stored for it.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        launcher: SourceLauncher,
        registry: SourceRegistry,
        pressed: Set[PadKey],
        settings: PadSettings,
    ):
        """
        Args:
            scheduler: Timed-callback source
            launcher: Starts and registers sources
            registry: Sounding sources per pad
            pressed: Live view of the pressed set (read only)
            settings: Live tempo
        """
        self._scheduler = scheduler
        self._launcher = launcher
        self._registry = registry
        self._pressed = pressed
        self._settings = settings
        self._loops: dict[PadKey, CancelHandle] = {}

    def start(self, key: PadKey, buffer: "AudioData") -> None:
        """
        Start the loop for `key` with an immediate first hit.

        Any loop already running for the key is cancelled first, and all
        of its sounds are stopped.
        """
        self._cancel(key)
        self._registry.stop_all(key)
        logger.debug(f"Retrigger started for {key} at {self._settings.bpm:g} BPM")
        self._tick(key, buffer)

    def stop(self, key: PadKey) -> None:
        """Cancel the pending tick for `key` and stop its sounds. Safe to repeat."""
        if self._cancel(key):
            logger.debug(f"Retrigger stopped for {key}")
        self._registry.stop_all(key)

    def stop_all_loops(self) -> list[PadKey]:
        """
        Stop every loop and its sounds.

        Returns:
            Keys whose loops were running
        """
        keys = list(self._loops)
        for key in keys:
            self.stop(key)
        return keys

    def phase(self, key: PadKey) -> LoopPhase:
        return LoopPhase.LOOPING if key in self._loops else LoopPhase.IDLE

    def handle(self, key: PadKey) -> CancelHandle | None:
        """Pending tick handle for `key`, or None when idle."""
        return self._loops.get(key)

    def looping_keys(self) -> list[PadKey]:
        return list(self._loops)

    def _cancel(self, key: PadKey) -> bool:
        handle = self._loops.pop(key, None)
        if handle is None:
            return False
        handle.cancel()
        return True

    def _tick(self, key: PadKey, buffer: "AudioData") -> None:
        # The handle that got us here has been consumed.
        self._loops.pop(key, None)

        if key not in self._pressed:
            logger.debug(f"Retrigger tick for released {key} ignored")
            return

        self._registry.stop_all(key)
        self._launcher.play(key, buffer)

        interval = self._settings.beat_duration
        if interval is None:
            logger.warning(
                f"Not rescheduling {key}: tempo {self._settings.bpm!r} BPM is not a positive number"
            )
            return

        self._loops[key] = self._scheduler.schedule(interval, partial(self._tick, key, buffer))
