"""Decoded sample buffers.

AudioData is a plain slots dataclass rather than a Pydantic model: it holds
a NumPy array, is read from the audio thread, and never gets serialized.
"""

from dataclasses import dataclass

import numpy as np
import numpy.typing as npt


@dataclass(slots=True, eq=False)
class AudioData:
    """
    Decoded audio for one pad.

    Shared read-only by every source that plays it; nothing mutates it
    once it is in the sample store.
    """

    data: npt.NDArray[np.float32]  # (frames,) mono or (frames, channels)
    sample_rate: int
    num_channels: int
    num_frames: int

    @classmethod
    def from_array(cls, data: npt.NDArray, sample_rate: int) -> "AudioData":
        """
        Create AudioData from a NumPy array.

        Args:
            data: Shape (num_frames,) for mono or (num_frames, num_channels)
            sample_rate: Sample rate in Hz

        Raises:
            ValueError: If the array is not 1D or 2D
        """
        if data.ndim == 1:
            num_channels = 1
            num_frames = len(data)
        elif data.ndim == 2 and data.shape[1] == 1:
            data = data[:, 0]
            num_channels = 1
            num_frames = len(data)
        elif data.ndim == 2:
            num_frames, num_channels = data.shape
        else:
            raise ValueError(f"Audio data must be 1D or 2D, got {data.ndim}D")

        if data.dtype != np.float32:
            data = data.astype(np.float32)

        return cls(data=data, sample_rate=sample_rate, num_channels=num_channels, num_frames=num_frames)

    @property
    def duration(self) -> float:
        """Duration in seconds."""
        return self.num_frames / self.sample_rate

    def normalize(self, target_level: float = 0.95) -> None:
        """Scale in place so the peak sits at `target_level`. Only used before storing."""
        peak = np.abs(self.data).max() if self.num_frames else 0.0
        if peak > 0:
            self.data *= target_level / peak
