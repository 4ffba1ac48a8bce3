"""Pad identity shared by every stateful map in the playback core."""

import logging
from collections.abc import Iterator

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .enums import VARIANTS_PER_CATEGORY, Category

logger = logging.getLogger(__name__)


class PadKey(BaseModel):
    """
    Identifies one pad as (category, index).

    Frozen and hashable, so it can key the pressed set, the source
    registry and the retrigger loops directly.
    """

    model_config = ConfigDict(frozen=True)

    category: Category = Field(description="Sample category (grid row)")
    index: int = Field(ge=0, lt=VARIANTS_PER_CATEGORY, description="Variant index (0-7)")

    def __str__(self) -> str:
        return f"{self.category.value}-{self.index}"

    @classmethod
    def resolve(cls, category: Category | str, index: int) -> "PadKey | None":
        """
        Build a key from raw input, or None when it names no pad.

        Unknown categories and out-of-range indices are a normal outcome of
        a malformed input mapping, so they are not reported as errors.

        Args:
            category: Category enum or its string value (e.g. "kick")
            index: Variant index

        Returns:
            The PadKey, or None if (category, index) is outside the grid
        """
        if isinstance(index, bool):
            return None
        try:
            return cls(category=category, index=index)
        except ValidationError:
            logger.debug(f"Ignoring unknown pad ({category!r}, {index!r})")
            return None

    @classmethod
    def all(cls) -> Iterator["PadKey"]:
        """Iterate over every pad in grid order (category rows, then index)."""
        for category in Category:
            for index in range(VARIANTS_PER_CATEGORY):
                yield cls(category=category, index=index)
