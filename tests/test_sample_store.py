"""Tests for the sample store and kit loading."""

import asyncio
from unittest.mock import Mock

import numpy as np
import pytest
import soundfile as sf

from drumpad.audio import AudioData, KitLoader, SampleLoader
from drumpad.core import SampleStore
from drumpad.exceptions import SampleLoadError, SampleStoreError
from drumpad.models import Category, DrumpadConfig, PadKey


@pytest.mark.unit
class TestSampleStore:
    """Test buffer lookup by pad."""

    def test_absent_slot(self):
        store = SampleStore()
        assert store.get("kick", 0) is None
        assert store.get_key(PadKey(category=Category.KICK, index=0)) is None

    def test_invalid_pad_is_absent(self, buffer, kick):
        store = SampleStore()
        store.put(kick, buffer)
        assert store.get("kick", 8) is None
        assert store.get("tom", 0) is None

    def test_put_and_get(self, buffer, kick):
        store = SampleStore()
        store.put(kick, buffer)
        assert store.get("kick", 0) is buffer
        assert store.get(Category.KICK, 0) is buffer
        assert kick in store
        assert len(store) == 1

    def test_put_twice_raises(self, buffer, kick):
        store = SampleStore()
        store.put(kick, buffer)
        with pytest.raises(SampleStoreError):
            store.put(kick, buffer)
        assert store.get_key(kick) is buffer

    def test_loaded_keys_in_grid_order(self, buffer, kick, hihat):
        store = SampleStore()
        store.put(hihat, buffer)
        store.put(kick, buffer)
        assert store.loaded_keys() == [kick, hihat]
        assert list(store) == [kick, hihat]


@pytest.mark.unit
class TestSampleLoader:
    """Test decoding single files."""

    def test_load_mono(self, sample_audio_file):
        audio = SampleLoader(normalize=False).load(sample_audio_file)
        assert isinstance(audio, AudioData)
        assert audio.sample_rate == 44100
        assert audio.num_channels == 1
        assert audio.num_frames == 4410
        assert audio.data.dtype == np.float32

    def test_normalize(self, sample_audio_file):
        audio = SampleLoader(normalize=True).load(sample_audio_file)
        assert np.abs(audio.data).max() == pytest.approx(0.95, abs=1e-3)

    def test_resample(self, sample_audio_file):
        audio = SampleLoader(target_sample_rate=22050, normalize=False).load(sample_audio_file)
        assert audio.sample_rate == 22050
        assert audio.num_frames == 2205

    def test_stereo(self, temp_dir):
        path = temp_dir / "stereo.wav"
        sf.write(str(path), np.full((100, 2), 0.25, dtype=np.float32), 44100)
        audio = SampleLoader(normalize=False).load(path)
        assert audio.num_channels == 2
        assert audio.data.shape == (100, 2)

    def test_missing_file(self, temp_dir):
        with pytest.raises(SampleLoadError, match="file not found"):
            SampleLoader().load(temp_dir / "missing.wav")

    def test_undecodable_file(self, temp_dir):
        path = temp_dir / "broken.wav"
        path.write_text("not audio")
        with pytest.raises(SampleLoadError) as exc_info:
            SampleLoader().load(path)
        assert exc_info.value.path == path


@pytest.mark.unit
class TestKitLoader:
    """Test loading the whole kit into a store."""

    @pytest.fixture
    def kit_config(self, temp_dir, sample_audio_array):
        for name in ("kick1.wav", "hihat4.wav", "stab8.wav"):
            sf.write(str(temp_dir / name), sample_audio_array, 44100)
        return DrumpadConfig(sounds_dir=temp_dir)

    def test_failures_do_not_stop_other_pads(self, kit_config):
        store = SampleStore()
        collector = KitLoader(kit_config).load_into(store)

        assert store.loaded_keys() == [
            PadKey(category=Category.KICK, index=0),
            PadKey(category=Category.HIHAT, index=3),
            PadKey(category=Category.SYNTH, index=7),
        ]
        assert collector.success_count == 3
        assert collector.error_count == 29
        assert all(isinstance(error, SampleLoadError) for _, error in collector.errors)

    def test_skips_loaded_pads(self, buffer, kick):
        loader = Mock(spec=SampleLoader)
        loader.load.return_value = buffer
        store = SampleStore()
        store.put(kick, buffer)

        collector = KitLoader(DrumpadConfig(), loader=loader).load_into(store)

        assert loader.load.call_count == 31
        assert collector.success_count == 31
        assert len(store) == 32

    def test_async_load(self, kit_config):
        store = SampleStore()
        collector = asyncio.run(KitLoader(kit_config).load_into_async(store))

        assert len(store) == 3
        assert collector.error_count == 29
        assert store.get("synth", 7) is not None
        assert store.get("synth", 6) is None
