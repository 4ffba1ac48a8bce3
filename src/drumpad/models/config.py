"""Application configuration model."""

from pathlib import Path

from pydantic import BaseModel, Field, field_serializer, model_validator

from drumpad.utils.persistence import PydanticPersistence

from .enums import VARIANTS_PER_CATEGORY, Category
from .pad_key import PadKey

DEFAULT_CONFIG_PATH = Path.home() / ".drumpad" / "config.json"


def _default_sample_files() -> dict[Category, list[str]]:
    stems = {
        Category.KICK: "kick",
        Category.HIHAT: "hihat",
        Category.SYNTH: "stab",
        Category.CLAP: "clap",
    }
    return {
        category: [f"{stem}{i}.wav" for i in range(1, VARIANTS_PER_CATEGORY + 1)]
        for category, stem in stems.items()
    }


class DrumpadConfig(BaseModel):
    """Drum pad configuration and settings."""

    # Samples
    sounds_dir: Path = Field(default=Path("sounds"), description="Directory holding the kit samples")
    sample_files: dict[Category, list[str]] = Field(
        default_factory=_default_sample_files,
        description="Sample file names per category, one per pad variant",
    )
    normalize: bool = Field(default=True, description="Peak-normalize samples after loading")

    # Mode / tempo
    hold_mode: bool = Field(default=True, description="Start in hold (retrigger) mode")
    bpm: float = Field(default=130.0, description="Initial retrigger tempo in beats per minute")
    bpm_min: float = Field(default=60.0, gt=0, description="Lowest tempo the controls may set")
    bpm_max: float = Field(default=300.0, gt=0, description="Highest tempo the controls may set")

    # Audio output
    audio_device: int | None = Field(default=None, description="Output device ID (None = system default)")
    sample_rate: int = Field(default=44100, gt=0, description="Output sample rate in Hz")
    buffer_size: int = Field(default=256, gt=0, description="Audio buffer size in frames")
    master_volume: float = Field(default=0.9, ge=0.0, le=1.0, description="Master output volume")

    # MIDI input
    midi_port: str | None = Field(default=None, description="MIDI input port name (None = first available)")
    midi_base_note: int = Field(
        default=36, ge=0, le=127 - 4 * VARIANTS_PER_CATEGORY + 1,
        description="MIDI note of kick-0; each category occupies the next 8 notes",
    )

    @model_validator(mode="after")
    def _check_ranges(self) -> "DrumpadConfig":
        if self.bpm_min > self.bpm_max:
            raise ValueError(f"bpm_min ({self.bpm_min}) must not exceed bpm_max ({self.bpm_max})")
        if not self.bpm_min <= self.bpm <= self.bpm_max:
            raise ValueError(f"bpm ({self.bpm}) must be within [{self.bpm_min}, {self.bpm_max}]")
        for category in Category:
            files = self.sample_files.get(category)
            if files is None or len(files) != VARIANTS_PER_CATEGORY:
                raise ValueError(
                    f"sample_files['{category.value}'] must list exactly {VARIANTS_PER_CATEGORY} files"
                )
        return self

    @field_serializer("sounds_dir")
    def serialize_path(self, path: Path) -> str:
        """Serialize Path to string using forward slashes for portability."""
        return path.as_posix()

    def sample_path(self, key: PadKey) -> Path:
        """Path of the sample file assigned to a pad."""
        return self.sounds_dir / self.sample_files[key.category][key.index]

    @classmethod
    def load_or_default(cls, path: Path | None = None) -> "DrumpadConfig":
        """
        Load config from file or return defaults.

        Args:
            path: Path to config file. If None, uses ~/.drumpad/config.json.

        Raises:
            ConfigFileInvalidError: If config file has invalid JSON syntax
            ConfigValidationError: If config values fail validation
        """
        return PydanticPersistence.load_or_default(path or DEFAULT_CONFIG_PATH, cls)

    def save(self, path: Path | None = None) -> None:
        """Save config to file (with .bak backup of the previous version)."""
        PydanticPersistence.save_json(self, path or DEFAULT_CONFIG_PATH)
