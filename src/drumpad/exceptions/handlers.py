"""
Centralized error handling utilities.

| Scenario | Use This |
|----------|----------|
| Load every pad, collect failures | `collector = collect_errors("load kit")` |
| Pydantic failure while reading config | `raise wrap_pydantic_error(e, path) from e` |
| PortAudio failure while opening output | `raise wrap_audio_device_error(e, device_id)` |
| Show any error to a CLI user | `message, hint = format_error_for_display(e)` |
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Optional

from .audio import AudioDeviceError, AudioDeviceInUseError, AudioDeviceNotFoundError
from .base import DrumpadError
from .config import ConfigFileInvalidError, ConfigValidationError

logger = logging.getLogger(__name__)


def wrap_pydantic_error(error: Exception, file_path: str) -> DrumpadError:
    """
    Convert Pydantic validation errors to drumpad exceptions.

    Args:
        error: The Pydantic ValidationError
        file_path: Path to the config file that failed validation

    Returns:
        A ConfigurationError with appropriate type and message
    """
    from pydantic import ValidationError

    error_msg = str(error)

    if "Invalid JSON" in error_msg or "json_invalid" in error_msg:
        if "Invalid JSON:" in error_msg:
            parse_error = error_msg.split("Invalid JSON:")[1].split("[type=")[0].strip()
        else:
            parse_error = error_msg
        return ConfigFileInvalidError(file_path, parse_error)

    if isinstance(error, ValidationError):
        errors = error.errors()
        if len(errors) == 1:
            first_error = errors[0]
            field = ".".join(str(loc) for loc in first_error.get("loc", ())) or "config"
            return ConfigValidationError(
                field=field,
                value=first_error.get("input"),
                error_msg=first_error.get("msg", "validation failed"),
                file_path=file_path,
            )
        if errors:
            error_lines = []
            for err in errors:
                field = ".".join(str(loc) for loc in err.get("loc", ())) or "config"
                error_lines.append(f"  - {field}: {err.get('msg', 'validation failed')}")
            return ConfigValidationError(
                field="multiple fields",
                value=None,
                error_msg=f"{len(errors)} validation errors:\n" + "\n".join(error_lines),
                file_path=file_path,
            )

    return ConfigValidationError(field="unknown", value=None, error_msg=error_msg, file_path=file_path)


def wrap_audio_device_error(error: Exception, device_id: Optional[int] = None) -> DrumpadError:
    """
    Convert low-level PortAudio/sounddevice errors to drumpad exceptions.

    Args:
        error: The original exception from the audio library
        device_id: The device ID involved in the error

    Returns:
        An AudioDeviceError subclass with a user-facing message
    """
    error_msg = str(error)

    if "PaErrorCode -9996" in error_msg or "Device unavailable" in error_msg:
        return AudioDeviceInUseError(device_id=device_id, original_error=error_msg)

    if device_id is not None and "device" in error_msg.lower() and (
        "not found" in error_msg.lower() or "invalid" in error_msg.lower()
    ):
        return AudioDeviceNotFoundError(device_id)

    return AudioDeviceError(
        user_message=f"Audio device error: {error_msg}",
        technical_message=f"Audio device {device_id} error: {error_msg}",
        device_id=device_id,
    )


def format_error_for_display(error: Exception) -> tuple[str, Optional[str]]:
    """
    Format an exception for user display.

    Returns:
        Tuple of (user_message, recovery_hint or None)
    """
    if isinstance(error, DrumpadError):
        return error.user_message, error.recovery_hint

    return f"{type(error).__name__}: {error}", None


def collect_errors(operation: str) -> "ErrorCollector":
    """
    Start collecting failures for a batch such as loading a whole kit.

    Example:
        ```python
        collector = collect_errors("load kit")
        for key, path in kit:
            with collector.try_operation(f"load {key}"):
                store.put(key, loader.load(path))
        ```
    """
    return ErrorCollector(operation)


class ErrorCollector:
    """
    Keeps a batch going past individual failures.

    One missing sample should not stop the other 31 pads from loading, so
    each step runs inside try_operation(); a failing step is logged and
    recorded as (step, error) in `errors`. KeyboardInterrupt and other
    BaseExceptions are never caught.
    """

    def __init__(self, operation: str):
        self.operation = operation
        self.errors: list[tuple[str, Exception]] = []
        self.success_count = 0

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @contextmanager
    def try_operation(self, step: str) -> Iterator[None]:
        """Run one step of the batch, recording its failure instead of raising."""
        try:
            yield
        except DrumpadError as e:
            logger.error(f"Failed to {step}: {e.technical_message}")
            self.errors.append((step, e))
        except Exception as e:
            logger.error(f"Failed to {step}: {e}", exc_info=True)
            self.errors.append((step, e))
        else:
            self.success_count += 1

    def get_summary(self) -> str:
        """One line per failed step, headed by the failure count."""
        total = self.error_count + self.success_count
        if not self.errors:
            return f"{self.operation}: all {total} steps succeeded"

        lines = [f"Failed {self.error_count} of {total} steps in {self.operation}:"]
        for step, error in self.errors:
            lines.append(f"  - {step}: {error}")
        return "\n".join(lines)
