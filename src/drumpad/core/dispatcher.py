"""Single entry point turning pad actions into playback."""

import logging
from collections.abc import MutableSet
from typing import TYPE_CHECKING

from drumpad.models import PadAction, PadKey, PlayMode

from .launcher import SourceLauncher
from .registry import SourceRegistry
from .retrigger import RetriggerScheduler

if TYPE_CHECKING:
    from drumpad.audio.data import AudioData

logger = logging.getLogger(__name__)


class PlaybackDispatcher:
    """
    Interprets press/release under the current mode.

    Hold mode:
        press   -> add to the pressed set and start retriggering
                   (ignored if the pad is already pressed)
        release -> remove from the pressed set and stop retriggering
    One-shot mode:
        press   -> stop the pad's sounds, then play exactly one new one
        release -> nothing

    A missing buffer makes any action a no-op, and no error escapes to
    the input layer.
    """

    def __init__(
        self,
        pressed: MutableSet[PadKey],
        retrigger: RetriggerScheduler,
        launcher: SourceLauncher,
        registry: SourceRegistry,
    ):
        self._pressed = pressed
        self._retrigger = retrigger
        self._launcher = launcher
        self._registry = registry

    def dispatch(
        self,
        key: PadKey,
        buffer: "AudioData | None",
        action: PadAction,
        mode: PlayMode,
    ) -> bool:
        """
        Route one pad action.

        Args:
            key: The pad
            buffer: Its decoded sample, or None if not loaded
            action: PRESS or RELEASE
            mode: Current play mode

        Returns:
            True if the action changed anything, False if it was ignored
        """
        if buffer is None:
            logger.debug(f"No sample loaded for {key}, ignoring {action.value}")
            return False

        try:
            if mode is PlayMode.HOLD:
                return self._dispatch_hold(key, buffer, action)
            return self._dispatch_one_shot(key, buffer, action)
        except Exception as e:
            logger.error(f"Error dispatching {action.value} for {key}: {e}", exc_info=True)
            return False

    def _dispatch_hold(self, key: PadKey, buffer: "AudioData", action: PadAction) -> bool:
        if action is PadAction.PRESS:
            if key in self._pressed:
                logger.debug(f"{key} already held, ignoring press")
                return False
            self._pressed.add(key)
            try:
                self._retrigger.start(key, buffer)
            except Exception:
                # No loop survived the failed first hit; don't leave the pad held
                self._pressed.discard(key)
                self._retrigger.stop(key)
                raise
            return True

        was_pressed = key in self._pressed
        self._pressed.discard(key)
        self._retrigger.stop(key)
        return was_pressed

    def _dispatch_one_shot(self, key: PadKey, buffer: "AudioData", action: PadAction) -> bool:
        if action is PadAction.RELEASE:
            return False

        self._registry.stop_all(key)
        self._launcher.play(key, buffer)
        return True
