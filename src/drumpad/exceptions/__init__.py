"""
Custom exception hierarchy for drumpad.

```
DrumpadError (base)
├── AudioDeviceError
│   ├── AudioDeviceInUseError
│   └── AudioDeviceNotFoundError
├── SampleLoadError
├── SampleStoreError
├── MidiPortNotFoundError
└── ConfigurationError
    ├── ConfigFileInvalidError
    └── ConfigValidationError
```

The playback core never raises for missing samples, invalid pads or
redundant stop/release operations; those degrade to "nothing happens".
These exceptions cover the edges around it: decoding sample files,
opening the output device and reading the configuration file.
"""

from .audio import (
    AudioDeviceError,
    AudioDeviceInUseError,
    AudioDeviceNotFoundError,
    SampleLoadError,
    SampleStoreError,
)
from .base import DrumpadError
from .config import ConfigFileInvalidError, ConfigurationError, ConfigValidationError
from .midi import MidiPortNotFoundError
from .handlers import (
    ErrorCollector,
    collect_errors,
    format_error_for_display,
    wrap_audio_device_error,
    wrap_pydantic_error,
)

__all__ = [
    "AudioDeviceError",
    "AudioDeviceInUseError",
    "AudioDeviceNotFoundError",
    "ConfigFileInvalidError",
    "ConfigValidationError",
    "ConfigurationError",
    "DrumpadError",
    "ErrorCollector",
    "MidiPortNotFoundError",
    "SampleLoadError",
    "SampleStoreError",
    "collect_errors",
    "format_error_for_display",
    "wrap_audio_device_error",
    "wrap_pydantic_error",
]
