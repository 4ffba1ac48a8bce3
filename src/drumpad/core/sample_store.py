"""Decoded sample buffers keyed by pad."""

import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING

from drumpad.exceptions import SampleStoreError
from drumpad.models import Category, PadKey

if TYPE_CHECKING:
    from drumpad.audio.data import AudioData

logger = logging.getLogger(__name__)


class SampleStore:
    """
    Holds one decoded buffer per pad.

    Populated once by the kit loader. A slot that is not loaded yet, failed
    to load, or names no pad at all reads back as None.
    """

    def __init__(self) -> None:
        self._buffers: dict[PadKey, "AudioData"] = {}

    def get(self, category: Category | str, index: int) -> "AudioData | None":
        """
        Look up the buffer for (category, index).

        Returns:
            The buffer, or None if absent or the pad does not exist
        """
        key = PadKey.resolve(category, index)
        if key is None:
            return None
        return self._buffers.get(key)

    def get_key(self, key: PadKey) -> "AudioData | None":
        """Look up the buffer for an already resolved key."""
        return self._buffers.get(key)

    def put(self, key: PadKey, buffer: "AudioData") -> None:
        """
        Populate a slot.

        Raises:
            SampleStoreError: If the slot already holds a buffer
        """
        if key in self._buffers:
            raise SampleStoreError(str(key))
        self._buffers[key] = buffer
        logger.debug(f"Stored sample for {key}")

    def loaded_keys(self) -> list[PadKey]:
        """Keys of every loaded pad, in grid order."""
        return [key for key in PadKey.all() if key in self._buffers]

    def __contains__(self, key: object) -> bool:
        return key in self._buffers

    def __len__(self) -> int:
        return len(self._buffers)

    def __iter__(self) -> Iterator[PadKey]:
        return iter(self.loaded_keys())
