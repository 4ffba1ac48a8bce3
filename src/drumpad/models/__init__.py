"""Data models for the drum pad."""

from .config import DEFAULT_CONFIG_PATH, DrumpadConfig
from .enums import VARIANTS_PER_CATEGORY, Category, PadAction, PlayMode
from .pad_key import PadKey

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "VARIANTS_PER_CATEGORY",
    # Enums
    "Category",
    # Models
    "DrumpadConfig",
    "PadAction",
    "PadKey",
    "PlayMode",
]
