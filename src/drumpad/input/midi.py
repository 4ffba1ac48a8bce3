"""MIDI pad controller input."""

import logging
from collections.abc import Callable

import mido

from drumpad.exceptions import MidiPortNotFoundError
from drumpad.models import VARIANTS_PER_CATEGORY, Category, PadAction, PadKey

logger = logging.getLogger(__name__)

PadHandler = Callable[[PadKey, PadAction], None]

_CATEGORIES = list(Category)


def note_to_pad(note: int, base_note: int = 36) -> PadKey | None:
    """
    Map a MIDI note to a pad.

    Notes are laid out in rows of 8 per category starting at `base_note`
    (kick-0 = base_note, hihat-0 = base_note + 8, ...).

    Returns:
        The pad, or None for notes outside the grid
    """
    offset = note - base_note
    if offset < 0 or offset >= len(_CATEGORIES) * VARIANTS_PER_CATEGORY:
        return None
    row, index = divmod(offset, VARIANTS_PER_CATEGORY)
    return PadKey(category=_CATEGORIES[row], index=index)


def pad_to_note(key: PadKey, base_note: int = 36) -> int:
    """Inverse of note_to_pad."""
    return base_note + _CATEGORIES.index(key.category) * VARIANTS_PER_CATEGORY + key.index


class MidiPadInput:
    """
    Turns note on/off messages into pad presses and releases.

    handle() runs on mido's I/O thread. It never touches a session
    directly: each action goes to `deliver`, which for a live session
    hands it to the event loop, e.g.
    `lambda key, action: loop.call_soon_threadsafe(session.trigger_key, key, action)`.

    A note-on for a note that is already down (no note-off in between)
    is dropped, so controllers that resend note-on don't double-press.
    """

    def __init__(self, deliver: PadHandler, base_note: int = 36):
        """
        Args:
            deliver: Receives (PadKey, PadAction) for every accepted message
            base_note: MIDI note mapped to kick-0
        """
        self._deliver = deliver
        self._base_note = base_note
        self._held: set[int] = set()
        self._port: mido.ports.BaseInput | None = None

    def handle(self, msg: mido.Message) -> None:
        """Process one MIDI message."""
        if msg.type not in ("note_on", "note_off"):
            return

        key = note_to_pad(msg.note, self._base_note)
        if key is None:
            return

        if msg.type == "note_on" and msg.velocity > 0:
            if msg.note in self._held:
                logger.debug(f"Dropping repeated note_on {msg.note} ({key})")
                return
            self._held.add(msg.note)
            action = PadAction.PRESS
        else:
            self._held.discard(msg.note)
            action = PadAction.RELEASE

        try:
            self._deliver(key, action)
        except Exception as e:
            logger.error(f"Error delivering {action.value} for {key}: {e}")

    @staticmethod
    def list_ports() -> list[str]:
        """Names of available MIDI input ports."""
        return mido.get_input_names()

    def open(self, port_name: str | None = None) -> str:
        """
        Open a MIDI input port and start receiving messages.

        Args:
            port_name: Port to open (None = first available)

        Returns:
            Name of the opened port

        Raises:
            MidiPortNotFoundError: If the port does not exist or none are available
        """
        available = self.list_ports()
        if port_name is None:
            if not available:
                raise MidiPortNotFoundError(None, available)
            port_name = available[0]
        elif port_name not in available:
            raise MidiPortNotFoundError(port_name, available)

        self._port = mido.open_input(port_name, callback=self.handle)
        logger.info(f"Opened MIDI input: {port_name}")
        return port_name

    def close(self) -> None:
        """Close the port if open."""
        if self._port is not None:
            self._port.close()
            self._port = None
            logger.info("Closed MIDI input")

    @property
    def is_open(self) -> bool:
        return self._port is not None
