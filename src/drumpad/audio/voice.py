"""A single playback of a sample buffer."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Optional

import numpy as np
import numpy.typing as npt

from .data import AudioData

if TYPE_CHECKING:
    from .renderer import MixerRenderer

logger = logging.getLogger(__name__)


class VoiceState(Enum):
    """Lifecycle of a voice."""

    CREATED = "created"
    PLAYING = "playing"
    STOPPED = "stopped"    # Force-stopped by the core
    FINISHED = "finished"  # Played to the end of the buffer


@dataclass(slots=True, eq=False)
class Voice:
    """
    One sounding instance of an AudioData buffer.

    Implements the AudioSource protocol. start()/stop() run on the event
    loop thread while read() runs on the audio thread; each side only
    flips the state field, so no lock is taken here.
    """

    audio_data: AudioData
    volume: float = 1.0
    position: int = 0
    state: VoiceState = VoiceState.CREATED
    _renderer: Optional["MixerRenderer"] = field(default=None, repr=False)
    _ended_callback: Callable[[], None] | None = field(default=None, repr=False)

    def start(self) -> None:
        """Start playback from the beginning of the buffer."""
        if self.state is not VoiceState.CREATED:
            logger.debug(f"Ignoring start() on {self.state.value} voice")
            return
        self.position = 0
        self.state = VoiceState.PLAYING
        if self._renderer is not None:
            self._renderer.activate(self)

    def stop(self) -> None:
        """Stop playback. Stopping a stopped or finished voice does nothing."""
        if self.state in (VoiceState.CREATED, VoiceState.PLAYING):
            self.state = VoiceState.STOPPED

    def on_ended(self, callback: Callable[[], None]) -> None:
        """Register the callback fired once when the buffer plays to the end."""
        self._ended_callback = callback

    def fire_ended(self) -> None:
        """Invoke the end callback (renderer calls this on the event loop)."""
        callback, self._ended_callback = self._ended_callback, None
        if callback is not None:
            callback()

    @property
    def is_playing(self) -> bool:
        return self.state is VoiceState.PLAYING

    def read(self, num_frames: int) -> npt.NDArray[np.float32] | None:
        """
        Return the next block of frames and advance the position.

        Marks the voice FINISHED once the end of the buffer is reached.

        Args:
            num_frames: Number of frames requested

        Returns:
            Up to num_frames frames (volume applied), or None when not playing
        """
        if not self.is_playing:
            return None

        start = self.position
        end = min(start + num_frames, self.audio_data.num_frames)
        frames = self.audio_data.data[start:end]
        self.position = end

        if end >= self.audio_data.num_frames:
            self.state = VoiceState.FINISHED

        if self.volume != 1.0:
            frames = frames * self.volume
        return frames
