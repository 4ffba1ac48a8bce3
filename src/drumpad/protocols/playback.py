"""Contracts between the playback core and the audio rendering collaborator."""

from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from drumpad.audio.data import AudioData


@runtime_checkable
class AudioSource(Protocol):
    """One in-flight sounding instance of a sample buffer."""

    def start(self) -> None:
        """Begin playback from the start of the buffer."""
        ...

    def stop(self) -> None:
        """
        Stop playback.

        Idempotent. Implementations may raise when stopping a source that
        already finished; the core swallows such errors.
        """
        ...

    def on_ended(self, callback: Callable[[], None]) -> None:
        """
        Register the end-of-playback notification.

        The callback fires at most once, after the buffer played to the end.
        It may also fire after a stop(); the registry tolerates that.
        """
        ...


@runtime_checkable
class AudioRenderer(Protocol):
    """Factory for sources bound to an output."""

    def create_source(self, buffer: "AudioData") -> AudioSource:
        """Create an unstarted source that will play `buffer`."""
        ...
