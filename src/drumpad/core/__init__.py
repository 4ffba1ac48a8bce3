"""Playback scheduling core."""

from .clock import AsyncioScheduler, CancelHandle, ManualScheduler, Scheduler
from .dispatcher import PlaybackDispatcher
from .launcher import SourceLauncher
from .registry import SourceRegistry
from .retrigger import LoopPhase, RetriggerScheduler
from .sample_store import SampleStore
from .session import PadSession
from .settings import PadSettings, beat_duration

__all__ = [
    "AsyncioScheduler",
    "CancelHandle",
    "LoopPhase",
    "ManualScheduler",
    "PadSession",
    "PadSettings",
    "PlaybackDispatcher",
    "RetriggerScheduler",
    "SampleStore",
    "Scheduler",
    "SourceLauncher",
    "SourceRegistry",
    "beat_duration",
]
