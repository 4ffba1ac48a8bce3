"""Computer keyboard and pointer input for the pad grid."""

import logging
from collections.abc import Mapping

from drumpad.core.session import PadSession
from drumpad.models import Category, PadAction, PadKey

logger = logging.getLogger(__name__)

# One keyboard row per category, left to right = variant 0..7
KEY_ROWS: dict[Category, str] = {
    Category.KICK: "12345678",
    Category.HIHAT: "qwertyui",
    Category.SYNTH: "asdfghjk",
    Category.CLAP: "zxcvbnm,",
}

DEFAULT_KEYMAP: dict[str, PadKey] = {
    char: PadKey(category=category, index=index)
    for category, row in KEY_ROWS.items()
    for index, char in enumerate(row)
}


class KeyboardInput:
    """
    Forwards key presses to a session, dropping auto-repeat.

    A key-down counts as a new press only if the platform did not flag it
    as a repeat and the key is not already held. Unmapped keys are ignored.
    """

    def __init__(self, session: PadSession, keymap: Mapping[str, PadKey] | None = None):
        self._session = session
        self._keymap = {k.lower(): v for k, v in (keymap or DEFAULT_KEYMAP).items()}
        self._held: set[str] = set()

    def key_down(self, key: str, repeat: bool = False) -> bool:
        """
        Handle a key-down event.

        Args:
            key: Key character as reported by the platform (case-insensitive)
            repeat: True if the platform marked this as an auto-repeat

        Returns:
            True if the press reached the session and changed playback
        """
        name = key.lower()
        pad = self._keymap.get(name)
        if pad is None:
            return False

        if repeat or name in self._held:
            return False

        self._held.add(name)
        return self._session.trigger_key(pad, PadAction.PRESS)

    def key_up(self, key: str) -> bool:
        """Handle a key-up event."""
        name = key.lower()
        self._held.discard(name)
        pad = self._keymap.get(name)
        if pad is None:
            return False
        return self._session.trigger_key(pad, PadAction.RELEASE)

    @property
    def held_keys(self) -> frozenset[str]:
        return frozenset(self._held)


class PointerInput:
    """
    Mouse/touch input.

    A pointer-down presses the pad under the pointer; a pointer-up
    anywhere releases every pad the pointer pressed.
    """

    def __init__(self, session: PadSession):
        self._session = session
        self._down: list[PadKey] = []

    def pointer_down(self, category: Category | str, index: int) -> bool:
        """Press the pad at (category, index)."""
        key = PadKey.resolve(category, index)
        if key is None:
            return False
        if key not in self._down:
            self._down.append(key)
        return self._session.trigger_key(key, PadAction.PRESS)

    def pointer_up(self) -> list[PadKey]:
        """
        Release every pad pressed by the pointer.

        Returns:
            Keys that were released
        """
        released, self._down = self._down, []
        for key in released:
            self._session.trigger_key(key, PadAction.RELEASE)
        return released
