"""Tests for pad keys and the configuration model."""

import json

import pytest
from pydantic import ValidationError

from drumpad.exceptions import ConfigFileInvalidError, ConfigValidationError
from drumpad.models import (
    VARIANTS_PER_CATEGORY,
    Category,
    DrumpadConfig,
    PadAction,
    PadKey,
    PlayMode,
)


@pytest.mark.unit
class TestPadKey:
    """Test pad identity."""

    def test_str(self):
        assert str(PadKey(category=Category.HIHAT, index=3)) == "hihat-3"

    def test_equal_keys_hash_equal(self):
        a = PadKey(category="kick", index=2)
        b = PadKey(category=Category.KICK, index=2)
        assert a == b
        assert len({a, b}) == 1

    def test_frozen(self):
        key = PadKey(category=Category.KICK, index=0)
        with pytest.raises(ValidationError):
            key.index = 1

    def test_resolve_valid(self):
        assert PadKey.resolve("synth", 7) == PadKey(category=Category.SYNTH, index=7)

    @pytest.mark.parametrize(
        "category,index",
        [("cowbell", 0), ("kick", 8), ("kick", -1), ("clap", True), (None, 0)],
    )
    def test_resolve_invalid_returns_none(self, category, index):
        assert PadKey.resolve(category, index) is None

    def test_all_in_grid_order(self):
        keys = list(PadKey.all())
        assert len(keys) == 4 * VARIANTS_PER_CATEGORY
        assert keys[0] == PadKey(category=Category.KICK, index=0)
        assert keys[8] == PadKey(category=Category.HIHAT, index=0)
        assert keys[-1] == PadKey(category=Category.CLAP, index=7)
        assert len(set(keys)) == len(keys)


@pytest.mark.unit
class TestEnums:
    """Test enum values used by input collaborators."""

    def test_category_order(self):
        assert [c.value for c in Category] == ["kick", "hihat", "synth", "clap"]

    def test_action_from_string(self):
        assert PadAction("press") is PadAction.PRESS
        assert PadAction("release") is PadAction.RELEASE

    def test_play_mode_values(self):
        assert PlayMode.HOLD.value == "hold"
        assert PlayMode.ONE_SHOT.value == "one_shot"


@pytest.mark.unit
class TestDrumpadConfig:
    """Test configuration defaults and validation."""

    def test_defaults(self):
        config = DrumpadConfig()
        assert config.bpm == 130
        assert config.bpm_min == 60
        assert config.bpm_max == 300
        assert config.hold_mode is True
        assert config.sample_files[Category.SYNTH][0] == "stab1.wav"
        assert config.sample_files[Category.CLAP][7] == "clap8.wav"

    def test_sample_path(self, temp_dir):
        config = DrumpadConfig(sounds_dir=temp_dir)
        key = PadKey(category=Category.HIHAT, index=2)
        assert config.sample_path(key) == temp_dir / "hihat3.wav"

    def test_bpm_range_inverted(self):
        with pytest.raises(ValidationError, match="bpm_min"):
            DrumpadConfig(bpm_min=200, bpm_max=100)

    def test_bpm_outside_range(self):
        with pytest.raises(ValidationError):
            DrumpadConfig(bpm=400)

    def test_non_positive_bpm_min(self):
        with pytest.raises(ValidationError):
            DrumpadConfig(bpm_min=0)

    def test_wrong_number_of_sample_files(self):
        files = DrumpadConfig().sample_files
        files[Category.KICK] = files[Category.KICK][:3]
        with pytest.raises(ValidationError, match="exactly 8"):
            DrumpadConfig(sample_files=files)


@pytest.mark.unit
class TestConfigPersistence:
    """Test loading and saving the configuration file."""

    def test_save_and_load(self, temp_dir):
        path = temp_dir / "config.json"
        DrumpadConfig(bpm=140, hold_mode=False, sounds_dir=temp_dir / "kit").save(path)

        loaded = DrumpadConfig.load_or_default(path)
        assert loaded.bpm == 140
        assert loaded.hold_mode is False
        assert loaded.sounds_dir == temp_dir / "kit"

    def test_saved_file_uses_category_names(self, temp_dir):
        path = temp_dir / "config.json"
        DrumpadConfig().save(path)
        data = json.loads(path.read_text())
        assert set(data["sample_files"]) == {"kick", "hihat", "synth", "clap"}

    def test_missing_file_gives_defaults(self, temp_dir):
        config = DrumpadConfig.load_or_default(temp_dir / "nope.json")
        assert config == DrumpadConfig()

    def test_invalid_json(self, temp_dir):
        path = temp_dir / "config.json"
        path.write_text('{"bpm": 140,,}')
        with pytest.raises(ConfigFileInvalidError):
            DrumpadConfig.load_or_default(path)

    def test_invalid_value(self, temp_dir):
        path = temp_dir / "config.json"
        path.write_text('{"master_volume": 3.0}')
        with pytest.raises(ConfigValidationError) as exc_info:
            DrumpadConfig.load_or_default(path)
        assert exc_info.value.field == "master_volume"
        assert exc_info.value.recoverable
