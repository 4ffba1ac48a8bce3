"""Input collaborators that feed pad actions into a session."""

from .keyboard import DEFAULT_KEYMAP, KeyboardInput, PointerInput
from .midi import MidiPadInput, note_to_pad, pad_to_note

__all__ = [
    "DEFAULT_KEYMAP",
    "KeyboardInput",
    "MidiPadInput",
    "PointerInput",
    "note_to_pad",
    "pad_to_note",
]
