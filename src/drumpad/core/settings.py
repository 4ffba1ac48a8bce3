"""Process-wide mode and tempo state of a session."""

import logging
import math

from drumpad.models import PlayMode
from drumpad.protocols import SettingsEvent, SettingsObserver
from drumpad.utils import ObserverManager

logger = logging.getLogger(__name__)


class PadSettings:
    """
    Hold-mode flag and tempo.

    Written by the UI controls, read by the dispatcher and the retrigger
    scheduler. A tempo change only affects intervals computed after it;
    a tick that is already scheduled keeps its delay.
    """

    def __init__(
        self,
        hold_mode: bool = True,
        bpm: float = 130.0,
        bpm_min: float = 60.0,
        bpm_max: float = 300.0,
    ):
        """
        Args:
            hold_mode: Start in hold mode (True) or one-shot mode (False)
            bpm: Initial tempo, clamped into [bpm_min, bpm_max]
            bpm_min: Lowest tempo the setter accepts
            bpm_max: Highest tempo the setter accepts
        """
        if bpm_min > bpm_max:
            raise ValueError(f"bpm_min ({bpm_min}) must not exceed bpm_max ({bpm_max})")
        self.bpm_min = bpm_min
        self.bpm_max = bpm_max
        self._hold_mode = hold_mode
        self._bpm = self.clamp_bpm(bpm)
        self._observers = ObserverManager[SettingsObserver](observer_type_name="settings")

    def register_observer(self, observer: SettingsObserver) -> None:
        self._observers.register(observer)

    def unregister_observer(self, observer: SettingsObserver) -> None:
        self._observers.unregister(observer)

    @property
    def hold_mode(self) -> bool:
        return self._hold_mode

    @hold_mode.setter
    def hold_mode(self, value: bool) -> None:
        value = bool(value)
        if value == self._hold_mode:
            return
        self._hold_mode = value
        logger.info(f"Mode changed to {self.mode.value}")
        self._observers.notify("on_settings_event", SettingsEvent.MODE_CHANGED, self)

    @property
    def mode(self) -> PlayMode:
        return PlayMode.HOLD if self._hold_mode else PlayMode.ONE_SHOT

    def toggle_mode(self) -> PlayMode:
        """Flip between hold and one-shot mode. Returns the new mode."""
        self.hold_mode = not self._hold_mode
        return self.mode

    def clamp_bpm(self, bpm: float) -> float:
        """Clamp a tempo into the configured range."""
        if math.isnan(bpm):
            raise ValueError("bpm must be a number")
        return max(self.bpm_min, min(self.bpm_max, float(bpm)))

    @property
    def bpm(self) -> float:
        return self._bpm

    @bpm.setter
    def bpm(self, value: float) -> None:
        value = self.clamp_bpm(value)
        if value == self._bpm:
            return
        self._bpm = value
        logger.debug(f"Tempo changed to {value:g} BPM")
        self._observers.notify("on_settings_event", SettingsEvent.TEMPO_CHANGED, self)

    @property
    def beat_duration(self) -> float | None:
        """
        Seconds between retrigger ticks (60 / bpm).

        None when the tempo is not a finite positive number, in which case
        nothing may be scheduled.
        """
        return beat_duration(self._bpm)


def beat_duration(bpm: float) -> float | None:
    """Seconds per beat at `bpm`, or None for a non-positive or non-finite tempo."""
    if not math.isfinite(bpm) or bpm <= 0:
        return None
    return 60.0 / bpm
