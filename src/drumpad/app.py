"""
Live drum pad application.

Wires the output device, a PadSession and the MIDI pad input onto one
asyncio event loop. Everything that touches the session runs on that
loop: the audio thread hands voice end callbacks over with
`loop.call_soon_threadsafe`, and so does the MIDI input thread for pad
actions.
"""

import asyncio
import logging
from typing import TYPE_CHECKING, Optional

from drumpad.audio import KitLoader, MixerRenderer, SampleLoader
from drumpad.core import AsyncioScheduler, PadSession
from drumpad.exceptions import ErrorCollector
from drumpad.input import MidiPadInput
from drumpad.models import DrumpadConfig, PadAction, PadKey
from drumpad.protocols import StateObserver

if TYPE_CHECKING:
    from drumpad.audio.device import AudioDevice

logger = logging.getLogger(__name__)


class DrumpadApp:
    """
    Orchestrates one live session.

    Usage:
        ```python
        async def main():
            app = DrumpadApp(config)
            await app.start()
            try:
                app.open_midi()
                await app.load_kit()
                await asyncio.Event().wait()
            finally:
                app.shutdown()
        ```
    """

    def __init__(
        self,
        config: DrumpadConfig,
        hold_mode: Optional[bool] = None,
        bpm: Optional[float] = None,
        num_channels: int = 2,
    ):
        """
        Args:
            config: Application configuration
            hold_mode: Override the configured start mode
            bpm: Override the configured start tempo
            num_channels: Output channel count
        """
        self.config = config
        self.num_channels = num_channels
        self._hold_mode = hold_mode
        self._bpm = bpm

        self.session: Optional[PadSession] = None
        self._device: Optional["AudioDevice"] = None
        self._midi: Optional[MidiPadInput] = None
        self._observers: list[StateObserver] = []

    def register_observer(self, observer: StateObserver) -> None:
        """Register a playback observer (attached to the session on start)."""
        self._observers.append(observer)
        if self.session is not None:
            self.session.register_observer(observer)

    async def start(self) -> PadSession:
        """
        Create the session and start the audio stream.

        Raises:
            AudioDeviceError: If the output device cannot be opened
        """
        # sounddevice loads PortAudio on import
        from drumpad.audio.device import AudioDevice

        loop = asyncio.get_running_loop()
        renderer = MixerRenderer(
            num_channels=self.num_channels,
            master_volume=self.config.master_volume,
            notify=loop.call_soon_threadsafe,
        )
        session = PadSession.from_config(self.config, renderer, AsyncioScheduler(loop))
        if self._hold_mode is not None:
            session.set_hold_mode(self._hold_mode)
        if self._bpm is not None:
            applied = session.set_bpm(self._bpm)
            if applied != self._bpm:
                logger.warning(f"Tempo {self._bpm:g} BPM clamped to {applied:g} BPM")

        for observer in self._observers:
            session.register_observer(observer)

        device = AudioDevice(
            sample_rate=self.config.sample_rate,
            buffer_size=self.config.buffer_size,
            num_channels=self.num_channels,
            device=self.config.audio_device,
        )
        device.set_callback(renderer.audio_callback)
        device.start()

        self.session = session
        self._device = device
        logger.info(f"Session started in {session.settings.mode.value} mode at {session.settings.bpm:g} BPM")
        return session

    async def load_kit(self) -> ErrorCollector:
        """Load every pad in the background; pads become playable as they land."""
        return await KitLoader(self.config).load_into_async(self._require_session().store)

    async def load_pad(self, key: PadKey) -> None:
        """
        Load a single pad.

        Raises:
            SampleLoadError: If the pad's sample cannot be decoded
        """
        session = self._require_session()
        if key in session.store:
            return
        loader = SampleLoader(target_sample_rate=self.config.sample_rate, normalize=self.config.normalize)
        audio = await asyncio.to_thread(loader.load, self.config.sample_path(key))
        session.store.put(key, audio)

    def open_midi(self, port_name: Optional[str] = None) -> str:
        """
        Open the MIDI pad input. Must be called from the running loop.

        Args:
            port_name: Port to open (defaults to the configured port, then the first available)

        Returns:
            Name of the opened port

        Raises:
            MidiPortNotFoundError: If no matching port exists
        """
        session = self._require_session()
        loop = asyncio.get_running_loop()

        def deliver(key: PadKey, action: PadAction) -> None:
            loop.call_soon_threadsafe(session.trigger_key, key, action)

        self._midi = MidiPadInput(deliver, base_note=self.config.midi_base_note)
        return self._midi.open(port_name or self.config.midi_port)

    async def play_pad(self, key: PadKey, hold: float, tail: float) -> bool:
        """
        Press a pad, hold it for `hold` seconds, release it and wait `tail` seconds.

        Returns:
            True if the press started playback
        """
        session = self._require_session()
        played = session.trigger_key(key, PadAction.PRESS)
        await asyncio.sleep(hold)
        session.trigger_key(key, PadAction.RELEASE)
        await asyncio.sleep(tail)
        return played

    def shutdown(self) -> None:
        """Close MIDI, silence everything and stop the stream. Safe to repeat."""
        if self._midi is not None:
            self._midi.close()
            self._midi = None

        if self.session is not None:
            self.session.panic()

        if self._device is not None:
            self._device.stop()
            self._device = None

        logger.info("Drumpad shut down")

    def _require_session(self) -> PadSession:
        if self.session is None:
            raise RuntimeError("DrumpadApp.start() has not been called")
        return self.session
