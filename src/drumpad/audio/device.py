"""Audio output device and stream management."""

import logging
import sys
from typing import Callable, Optional

import numpy as np
import sounddevice as sd

from drumpad.exceptions import wrap_audio_device_error

logger = logging.getLogger(__name__)


class AudioDevice:
    """
    Output stream lifecycle around sounddevice.

    Knows nothing about pads: it pulls blocks from a callback
    (normally MixerRenderer.audio_callback) and writes them out.
    """

    def __init__(
        self,
        sample_rate: int = 44100,
        buffer_size: int = 256,
        num_channels: int = 2,
        device: Optional[int] = None,
    ):
        """
        Args:
            sample_rate: Stream sample rate in Hz
            buffer_size: Frames per callback block (lower = less latency)
            num_channels: Output channels (1=mono, 2=stereo)
            device: Output device ID (None for the system default)
        """
        self.sample_rate = sample_rate
        self.buffer_size = buffer_size
        self.num_channels = num_channels
        self.device = device

        self._stream: Optional[sd.OutputStream] = None
        self._callback: Optional[Callable[[np.ndarray, int], None]] = None

    def set_callback(self, callback: Callable[[np.ndarray, int], None]) -> None:
        """
        Set the block callback, called as callback(outdata, frames).
        """
        self._callback = callback

    def start(self) -> None:
        """
        Open and start the output stream.

        Raises:
            RuntimeError: If no callback was set
            AudioDeviceError: If PortAudio refuses the stream
        """
        if self._stream is not None:
            return

        if self._callback is None:
            raise RuntimeError("No audio callback set. Call set_callback() first.")

        try:
            self._stream = sd.OutputStream(
                samplerate=self.sample_rate,
                blocksize=self.buffer_size,
                channels=self.num_channels,
                device=self.device,
                dtype=np.float32,
                callback=self._audio_callback,
            )
            self._stream.start()
        except Exception as e:
            self._stream = None
            raise wrap_audio_device_error(e, device_id=self.device) from e

        buffer_ms = self.buffer_size / self.sample_rate * 1000
        logger.info(f"Audio stream started on {self.device_name}")
        logger.info(f"  Buffer size: {self.buffer_size} frames ({buffer_ms:.1f}ms)")
        logger.info(f"  Total latency: {self.latency * 1000:.1f}ms")

    def stop(self) -> None:
        """Stop and close the output stream."""
        if self._stream is None:
            return

        self._stream.stop()
        self._stream.close()
        self._stream = None
        logger.info("Audio stream stopped")

    def _audio_callback(self, outdata: np.ndarray, frames: int, time_info, status) -> None:
        """sounddevice callback; delegates to the block callback."""
        if status:
            logger.warning(f"Audio callback status: {status}")

        if self._callback:
            self._callback(outdata, frames)
        else:
            outdata.fill(0)

    @property
    def is_running(self) -> bool:
        return self._stream is not None

    @property
    def latency(self) -> float:
        """Current stream latency in seconds."""
        if self._stream:
            return self._stream.latency
        return 0.0

    @property
    def device_name(self) -> str:
        """Name of the output device in use."""
        try:
            if self.device is not None:
                return sd.query_devices(self.device)["name"]
            default_device = sd.default.device[1]
            if default_device is not None and default_device >= 0:
                return f"{sd.query_devices(default_device)['name']} (default)"
            return "Default Device"
        except Exception:
            return "Unknown Device"

    @staticmethod
    def _get_platform_apis() -> list[str]:
        """Host APIs preferred for low-latency playback on this platform."""
        if sys.platform == "win32":
            return ["ASIO", "WASAPI"]
        if sys.platform == "darwin":
            return ["Core Audio"]
        return ["ALSA", "JACK"]

    @staticmethod
    def list_output_devices(low_latency_only: bool = False) -> list[tuple[int, str, str]]:
        """
        List output-capable devices.

        Args:
            low_latency_only: Keep only devices on the platform's low-latency host APIs

        Returns:
            List of (device_id, device_name, host_api_name)
        """
        hostapis = sd.query_hostapis()
        preferred = AudioDevice._get_platform_apis()
        devices = []

        for i, device in enumerate(sd.query_devices()):
            if device["max_output_channels"] <= 0:
                continue
            hostapi_name = hostapis[device["hostapi"]]["name"]
            if low_latency_only and not any(api in hostapi_name for api in preferred):
                continue
            devices.append((i, device["name"], hostapi_name))

        return devices

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()
