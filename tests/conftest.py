"""Pytest fixtures for tests."""

from pathlib import Path
from tempfile import TemporaryDirectory

import numpy as np
import pytest
import soundfile as sf

from drumpad.audio.data import AudioData
from drumpad.core import ManualScheduler, PadSession, PadSettings, SampleStore
from drumpad.models import Category, PadKey


class FakeSource:
    """
    AudioSource double.

    Like a real one-shot playback node, calling stop() on a source that
    already played to the end raises.
    """

    def __init__(self, buffer):
        self.buffer = buffer
        self.started = False
        self.stopped = False
        self.finished = False
        self.stop_calls = 0
        self._ended = None

    def start(self):
        self.started = True

    def stop(self):
        self.stop_calls += 1
        if self.finished:
            raise RuntimeError("source already finished")
        self.stopped = True

    def on_ended(self, callback):
        self._ended = callback

    def finish(self):
        """Simulate the sample playing to its end."""
        self.finished = True
        if self._ended is not None:
            self._ended()

    @property
    def sounding(self) -> bool:
        return self.started and not self.stopped and not self.finished


class FakeRenderer:
    """AudioRenderer double recording every source it creates."""

    def __init__(self):
        self.sources: list[FakeSource] = []

    def create_source(self, buffer):
        source = FakeSource(buffer)
        self.sources.append(source)
        return source

    def sounding(self) -> list[FakeSource]:
        return [source for source in self.sources if source.sounding]


class EventRecorder:
    """StateObserver collecting (event, key) pairs and the clock time of each."""

    def __init__(self, scheduler: ManualScheduler | None = None):
        self.events = []
        self.times = []
        self._scheduler = scheduler

    def on_playback_event(self, event, key):
        self.events.append((event, key))
        if self._scheduler is not None:
            self.times.append((event, self._scheduler.now()))

    def of(self, event) -> list[PadKey]:
        return [key for e, key in self.events if e is event]

    def times_of(self, event) -> list[float]:
        return [t for e, t in self.times if e is event]


@pytest.fixture
def temp_dir():
    """Create a temporary directory that gets cleaned up."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_audio_array():
    """Generate sample audio data as NumPy array."""
    sample_rate = 44100
    duration = 0.1
    t = np.linspace(0, duration, int(sample_rate * duration), dtype=np.float32)
    return (0.5 * np.sin(2 * np.pi * 440 * t)).astype(np.float32)


@pytest.fixture
def sample_audio_file(temp_dir, sample_audio_array):
    """Create a simple test audio file."""
    file_path = temp_dir / "test.wav"
    sf.write(str(file_path), sample_audio_array, 44100)
    return file_path


@pytest.fixture
def buffer(sample_audio_array):
    """Decoded sample shared by every loaded pad."""
    return AudioData.from_array(sample_audio_array, 44100)


@pytest.fixture
def kick():
    return PadKey(category=Category.KICK, index=0)


@pytest.fixture
def hihat():
    return PadKey(category=Category.HIHAT, index=3)


@pytest.fixture
def unloaded():
    """A pad that never gets a sample."""
    return PadKey(category=Category.CLAP, index=7)


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def renderer():
    return FakeRenderer()


@pytest.fixture
def store(buffer, unloaded):
    """Store with every pad loaded except clap-7."""
    store = SampleStore()
    for key in PadKey.all():
        if key != unloaded:
            store.put(key, buffer)
    return store


@pytest.fixture
def session(renderer, scheduler, store):
    """Hold-mode session at 120 BPM."""
    return PadSession(renderer, scheduler, settings=PadSettings(hold_mode=True, bpm=120), store=store)


@pytest.fixture
def recorder(session, scheduler):
    recorder = EventRecorder(scheduler)
    session.register_observer(recorder)
    return recorder


@pytest.fixture
def make_source():
    """Factory for standalone FakeSource objects."""
    return FakeSource
