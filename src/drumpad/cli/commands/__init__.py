"""CLI commands for drumpad."""

from .audio import audio_group
from .config import config
from .midi import midi_group
from .pads import bounce, pads, play
from .run import run

__all__ = ["audio_group", "bounce", "config", "midi_group", "pads", "play", "run"]
