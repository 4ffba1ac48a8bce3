"""Audio rendering and sample loading for the drum pad.

AudioDevice lives in `drumpad.audio.device` and is imported on demand:
sounddevice needs the PortAudio shared library at import time, and offline
rendering and the tests don't.
"""

from .data import AudioData
from .loader import KitLoader, SampleLoader
from .mixer import AudioMixer
from .renderer import MixerRenderer
from .voice import Voice, VoiceState

__all__ = [
    "AudioData",
    "AudioMixer",
    "KitLoader",
    "MixerRenderer",
    "SampleLoader",
    "Voice",
    "VoiceState",
]
