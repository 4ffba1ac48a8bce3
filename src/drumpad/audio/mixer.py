"""Audio mixer for summing active voices into an output block."""

from collections.abc import Iterable

import numpy as np
import numpy.typing as npt

from .voice import Voice


class AudioMixer:
    """
    Sum voices into a single output buffer.

    Safe to call from the audio callback: allocates one output block per
    call and touches nothing but the voices it is given.
    """

    def __init__(self, num_channels: int = 2):
        """
        Args:
            num_channels: Number of output channels (1=mono, 2=stereo)
        """
        self.num_channels = num_channels

    def silence(self, num_frames: int) -> npt.NDArray[np.float32]:
        """Allocate an empty output block."""
        if self.num_channels == 1:
            return np.zeros(num_frames, dtype=np.float32)
        return np.zeros((num_frames, self.num_channels), dtype=np.float32)

    def mix(self, voices: Iterable[Voice], num_frames: int) -> npt.NDArray[np.float32]:
        """
        Mix the next block of every playing voice.

        Each voice is advanced by the frames it contributed.

        Args:
            voices: Voices to mix (non-playing voices are skipped)
            num_frames: Number of frames to generate

        Returns:
            Mixed buffer, (num_frames,) for mono or (num_frames, num_channels)
        """
        output = self.silence(num_frames)

        for voice in voices:
            frames = voice.read(num_frames)
            if frames is None or len(frames) == 0:
                continue

            frames = self._match_channels(frames, voice.audio_data.num_channels)
            output[: len(frames)] += frames

        return output

    def _match_channels(
        self, frames: npt.NDArray[np.float32], source_channels: int
    ) -> npt.NDArray[np.float32]:
        """Convert frames from the source channel layout to the output layout."""
        if source_channels == self.num_channels:
            return frames

        if source_channels == 1:
            return np.repeat(frames[:, np.newaxis], self.num_channels, axis=1)

        if self.num_channels == 1:
            return np.mean(frames, axis=1, dtype=np.float32)

        if source_channels > self.num_channels:
            return frames[:, : self.num_channels]

        # Fewer source channels than outputs: pad with silence
        padded = np.zeros((len(frames), self.num_channels), dtype=np.float32)
        padded[:, :source_channels] = frames
        return padded

    @staticmethod
    def apply_master_volume(buffer: npt.NDArray[np.float32], volume: float) -> None:
        """Apply master volume to buffer in-place."""
        if volume != 1.0:
            buffer *= volume

    @staticmethod
    def soft_clip(buffer: npt.NDArray[np.float32]) -> None:
        """Apply soft clipping (tanh) in-place to avoid harsh distortion."""
        np.tanh(buffer, out=buffer)
