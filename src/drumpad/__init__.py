"""Drumpad - tempo-locked drum pad sampler."""

from drumpad.core import ManualScheduler, PadSession, PadSettings, SampleStore
from drumpad.models import Category, DrumpadConfig, PadAction, PadKey, PlayMode

__version__ = "0.1.0"

__all__ = [
    "Category",
    "DrumpadConfig",
    "ManualScheduler",
    "PadAction",
    "PadKey",
    "PadSession",
    "PadSettings",
    "PlayMode",
    "SampleStore",
    "__version__",
]
