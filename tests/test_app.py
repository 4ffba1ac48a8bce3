"""Tests for the live application wiring, with the audio device mocked."""

import asyncio
import sys
from unittest.mock import MagicMock, patch

import mido
import pytest
import soundfile as sf

from drumpad.app import DrumpadApp
from drumpad.exceptions import SampleLoadError
from drumpad.models import DrumpadConfig, PlayMode
from drumpad.protocols import PlaybackEvent

from conftest import EventRecorder


@pytest.fixture
def device_module():
    """Stand-in for drumpad.audio.device so no PortAudio stream is opened."""
    module = MagicMock()
    with patch.dict(sys.modules, {"drumpad.audio.device": module}):
        yield module


@pytest.fixture
def kit_config(temp_dir, sample_audio_array):
    sf.write(str(temp_dir / "kick1.wav"), sample_audio_array, 44100)
    sf.write(str(temp_dir / "clap2.wav"), sample_audio_array, 44100)
    return DrumpadConfig(sounds_dir=temp_dir, buffer_size=128)


@pytest.mark.integration
class TestDrumpadApp:
    """Test the live session lifecycle."""

    def test_start_opens_device(self, device_module, kit_config):
        app = DrumpadApp(kit_config)

        async def main():
            await app.start()
            app.shutdown()

        asyncio.run(main())

        device_module.AudioDevice.assert_called_once_with(
            sample_rate=44100, buffer_size=128, num_channels=2, device=None
        )
        device = device_module.AudioDevice.return_value
        device.set_callback.assert_called_once()
        device.start.assert_called_once()
        device.stop.assert_called_once()

    def test_overrides(self, device_module, kit_config):
        app = DrumpadApp(kit_config, hold_mode=False, bpm=500)

        async def main():
            return await app.start()

        session = asyncio.run(main())
        assert session.settings.mode is PlayMode.ONE_SHOT
        assert session.settings.bpm == kit_config.bpm_max

    def test_play_pad(self, device_module, kit_config, kick):
        app = DrumpadApp(kit_config, bpm=120)
        recorder = EventRecorder()
        app.register_observer(recorder)

        async def main():
            session = await app.start()
            try:
                await app.load_pad(kick)
                played = await app.play_pad(kick, hold=0.05, tail=0.0)
                return session, played
            finally:
                app.shutdown()

        session, played = asyncio.run(main())

        assert played
        assert recorder.of(PlaybackEvent.PAD_PRESSED) == [kick]
        assert recorder.of(PlaybackEvent.PAD_RELEASED) == [kick]
        assert session.pressed == frozenset()
        assert len(session.registry) == 0

    def test_load_pad_missing_sample(self, device_module, kit_config, hihat):
        app = DrumpadApp(kit_config)

        async def main():
            await app.start()
            try:
                await app.load_pad(hihat)
            finally:
                app.shutdown()

        with pytest.raises(SampleLoadError):
            asyncio.run(main())

    def test_load_kit(self, device_module, kit_config):
        app = DrumpadApp(kit_config)

        async def main():
            session = await app.start()
            collector = await app.load_kit()
            app.shutdown()
            return session, collector

        session, collector = asyncio.run(main())
        assert len(session.store) == 2
        assert collector.error_count == 30

    def test_midi_reaches_session_on_loop(self, device_module, kit_config, kick):
        app = DrumpadApp(kit_config)

        async def main():
            session = await app.start()
            await app.load_pad(kick)
            with patch("drumpad.input.midi.mido") as mock_mido:
                mock_mido.get_input_names.return_value = ["Pads"]
                assert app.open_midi() == "Pads"
                handle = mock_mido.open_input.call_args.kwargs["callback"]

            handle(mido.Message("note_on", note=36, velocity=100))
            # Delivered through call_soon_threadsafe, not inline
            pressed_inline = session.is_pressed(kick)
            await asyncio.sleep(0)
            pressed_on_loop = session.is_pressed(kick)
            app.shutdown()
            return pressed_inline, pressed_on_loop

        assert asyncio.run(main()) == (False, True)

    def test_requires_start(self, kit_config):
        with pytest.raises(RuntimeError, match="start"):
            asyncio.run(DrumpadApp(kit_config).load_kit())
