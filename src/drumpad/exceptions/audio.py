"""Audio-related exceptions.

- AudioDeviceError: Output device could not be opened or driven
- AudioDeviceInUseError: Device is held by another application
- AudioDeviceNotFoundError: Requested device id does not exist
- SampleLoadError: A single sample file could not be decoded
- SampleStoreError: Attempt to re-populate an already loaded pad slot
"""

from pathlib import Path

from .base import DrumpadError


class AudioDeviceError(DrumpadError):
    """Audio device initialization or operation failed."""

    def __init__(self, user_message: str, device_id: int | None = None, **kwargs):
        """
        Initialize audio device error.

        Args:
            user_message: User-friendly error message
            device_id: The device ID that failed (if applicable)
        """
        super().__init__(user_message, **kwargs)
        self.device_id = device_id


class AudioDeviceInUseError(AudioDeviceError):
    """Audio device is already in use by another application."""

    def __init__(self, device_id: int | None = None, original_error: str | None = None):
        user_msg = "Audio device is already in use by another application."
        tech_msg = user_msg
        if original_error:
            tech_msg += f"\nOriginal error: {original_error}"

        super().__init__(
            user_message=user_msg,
            technical_message=tech_msg,
            device_id=device_id,
            recoverable=True,
            recovery_hint=(
                "Close other audio applications or pick another output. "
                "Run 'drumpad audio list' to see available devices."
            ),
        )


class AudioDeviceNotFoundError(AudioDeviceError):
    """Requested audio device was not found."""

    def __init__(self, device_id: int):
        super().__init__(
            user_message=f"Audio device {device_id} not found.",
            device_id=device_id,
            recoverable=True,
            recovery_hint="Run 'drumpad audio list' to see available devices.",
        )


class SampleLoadError(DrumpadError):
    """A sample file is missing, empty or cannot be decoded."""

    def __init__(self, path: Path, reason: str):
        """
        Initialize sample load error.

        Args:
            path: Path of the sample that failed
            reason: Why loading failed
        """
        super().__init__(
            user_message=f"Could not load sample '{path.name}': {reason}",
            technical_message=f"Sample load failed for {path}: {reason}",
            recoverable=True,
            recovery_hint="Check the file exists under the configured sounds directory.",
        )
        self.path = path
        self.reason = reason


class SampleStoreError(DrumpadError):
    """A pad slot was populated twice."""

    def __init__(self, key: str):
        super().__init__(
            user_message=f"Pad {key} already has a sample loaded",
            recoverable=False,
        )
        self.key = key
