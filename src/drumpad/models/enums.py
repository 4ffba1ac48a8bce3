"""Enumerations for the drum pad grid."""

from enum import Enum


class Category(str, Enum):
    """Sample categories, one row of pads each (grid order)."""

    KICK = "kick"
    HIHAT = "hihat"
    SYNTH = "synth"
    CLAP = "clap"


class PadAction(str, Enum):
    """What the input layer did to a pad."""

    PRESS = "press"      # Pointer down / key down / MIDI note on
    RELEASE = "release"  # Pointer up / key up / MIDI note off


class PlayMode(str, Enum):
    """Session-wide playback mode."""

    HOLD = "hold"          # Retrigger on every beat while held, stop on release
    ONE_SHOT = "one_shot"  # Play once per press, replacing the previous sound


VARIANTS_PER_CATEGORY = 8
