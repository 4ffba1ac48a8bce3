"""Voice-based implementation of the AudioRenderer protocol."""

import logging
from collections.abc import Callable
from threading import Lock

import numpy as np
import numpy.typing as npt

from .data import AudioData
from .mixer import AudioMixer
from .voice import Voice, VoiceState

logger = logging.getLogger(__name__)


def _call_now(callback: Callable[[], None]) -> None:
    callback()


class MixerRenderer:
    """
    Creates voices and mixes the active ones block by block.

    render_block() is driven either by an AudioDevice callback (live) or
    by a loop writing to a file (offline bounce). End-of-playback
    callbacks are not run on the audio thread: they are handed to
    `notify`, which for a live session is `loop.call_soon_threadsafe`
    so the registry is only ever touched from the event loop.
    """

    def __init__(
        self,
        num_channels: int = 2,
        master_volume: float = 1.0,
        notify: Callable[[Callable[[], None]], object] | None = None,
    ):
        """
        Args:
            num_channels: Output channel count
            master_volume: Output gain (0.0-1.0)
            notify: Scheduler for end callbacks; defaults to calling them inline
        """
        self._mixer = AudioMixer(num_channels=num_channels)
        self._voices: list[Voice] = []
        self._lock = Lock()
        self._notify = notify or _call_now
        self.master_volume = master_volume

    @property
    def num_channels(self) -> int:
        return self._mixer.num_channels

    def create_source(self, buffer: AudioData) -> Voice:
        """Create an unstarted voice bound to this renderer."""
        return Voice(audio_data=buffer, _renderer=self)

    def activate(self, voice: Voice) -> None:
        """Add a started voice to the mix (called by Voice.start)."""
        with self._lock:
            self._voices.append(voice)

    def render_block(self, num_frames: int) -> npt.NDArray[np.float32]:
        """
        Mix the next block of all active voices.

        Args:
            num_frames: Frames to render

        Returns:
            Output block shaped for num_channels
        """
        with self._lock:
            voices = list(self._voices)

        mixed = self._mixer.mix(voices, num_frames)

        done = [voice for voice in voices if not voice.is_playing]
        if done:
            with self._lock:
                self._voices = [voice for voice in self._voices if voice.is_playing]
            for voice in done:
                if voice.state is VoiceState.FINISHED:
                    self._notify(voice.fire_ended)

        self._mixer.apply_master_volume(mixed, self.master_volume)
        self._mixer.soft_clip(mixed)
        return mixed

    def audio_callback(self, outdata: np.ndarray, frames: int) -> None:
        """AudioDevice callback: render into the device buffer, silence on error."""
        try:
            block = self.render_block(frames)
            if block.ndim == 1:
                outdata[:, 0] = block
            else:
                outdata[:] = block
        except Exception as e:
            logger.exception(f"Error in audio callback: {e}")
            outdata.fill(0.0)

    def stop_all(self) -> None:
        """Stop every active voice."""
        with self._lock:
            voices = list(self._voices)
        for voice in voices:
            voice.stop()

    @property
    def active_voices(self) -> int:
        """Number of voices currently playing."""
        with self._lock:
            return sum(1 for voice in self._voices if voice.is_playing)
