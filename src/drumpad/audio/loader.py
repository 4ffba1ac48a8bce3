"""Sample decoding and kit loading."""

import asyncio
import logging
from pathlib import Path
from typing import Optional

import numpy as np
import soundfile as sf

from drumpad.core.sample_store import SampleStore
from drumpad.exceptions import ErrorCollector, SampleLoadError, collect_errors
from drumpad.models import DrumpadConfig, PadKey

from .data import AudioData

logger = logging.getLogger(__name__)


class SampleLoader:
    """
    Decode audio files into AudioData.

    Handles WAV, FLAC, OGG and other formats supported by soundfile.
    """

    def __init__(self, target_sample_rate: Optional[int] = None, normalize: bool = True):
        """
        Args:
            target_sample_rate: Resample everything to this rate (None keeps the file rate)
            normalize: Peak-normalize each decoded sample
        """
        self.target_sample_rate = target_sample_rate
        self.normalize = normalize

    def load(self, path: Path) -> AudioData:
        """
        Load one audio file.

        Raises:
            SampleLoadError: If the file is missing, empty or cannot be decoded
        """
        if not path.exists():
            raise SampleLoadError(path, "file not found")

        try:
            data, sample_rate = sf.read(str(path), dtype="float32")
        except Exception as e:
            raise SampleLoadError(path, str(e)) from e

        if len(data) == 0:
            raise SampleLoadError(path, "file is empty")

        if self.target_sample_rate and sample_rate != self.target_sample_rate:
            data = self._resample(data, sample_rate, self.target_sample_rate)
            sample_rate = self.target_sample_rate

        audio = AudioData.from_array(data, sample_rate)
        if self.normalize:
            audio.normalize()
        return audio

    @staticmethod
    def _resample(data: np.ndarray, orig_sr: int, target_sr: int) -> np.ndarray:
        """Linear-interpolation resample, per channel."""
        new_length = max(1, int(round(len(data) * target_sr / orig_sr)))
        x_old = np.linspace(0.0, 1.0, len(data))
        x_new = np.linspace(0.0, 1.0, new_length)

        if data.ndim == 1:
            return np.interp(x_new, x_old, data).astype(np.float32)

        return np.stack(
            [np.interp(x_new, x_old, data[:, ch]) for ch in range(data.shape[1])], axis=1
        ).astype(np.float32)


class KitLoader:
    """
    Populate a SampleStore with every pad of the configured kit.

    Each pad loads independently: a failure is logged, collected and
    leaves that slot absent while the rest of the kit keeps loading.
    """

    def __init__(self, config: DrumpadConfig, loader: Optional[SampleLoader] = None):
        self._config = config
        self._loader = loader or SampleLoader(
            target_sample_rate=config.sample_rate, normalize=config.normalize
        )

    def load_into(self, store: SampleStore) -> ErrorCollector:
        """
        Load the whole kit synchronously.

        Returns:
            The collector holding per-pad failures
        """
        collector = collect_errors("load kit")
        for key in PadKey.all():
            if key in store:
                continue
            with collector.try_operation(f"load {key}"):
                store.put(key, self._loader.load(self._config.sample_path(key)))

        self._log_summary(collector)
        return collector

    async def load_into_async(self, store: SampleStore) -> ErrorCollector:
        """
        Load the kit without blocking the event loop.

        Decoding runs in a worker thread; each buffer is stored back on the
        loop as soon as it is ready, so pads become playable one by one.
        """
        collector = collect_errors("load kit")
        for key in PadKey.all():
            if key in store:
                continue
            with collector.try_operation(f"load {key}"):
                audio = await asyncio.to_thread(self._loader.load, self._config.sample_path(key))
                store.put(key, audio)

        self._log_summary(collector)
        return collector

    @staticmethod
    def _log_summary(collector: ErrorCollector) -> None:
        if collector.has_errors:
            logger.warning(collector.get_summary())
        else:
            logger.info(f"Loaded {collector.success_count} samples")
