"""Session context wiring the playback core together."""

import logging

from drumpad.models import Category, DrumpadConfig, PadAction, PadKey, PlayMode
from drumpad.protocols import AudioRenderer, PlaybackEvent, SettingsEvent, StateObserver
from drumpad.utils import ObserverManager

from .clock import Scheduler
from .dispatcher import PlaybackDispatcher
from .launcher import SourceLauncher
from .registry import SourceRegistry
from .retrigger import LoopPhase, RetriggerScheduler
from .sample_store import SampleStore
from .settings import PadSettings

logger = logging.getLogger(__name__)


class PadSession:
    """
    One independent drum pad instance.

    Owns the pressed set, source registry, retrigger loops, settings and
    sample store that make up a playing session, so several sessions can
    run side by side (and tests get a fresh one each time).

    All methods must be called from the thread that drives `scheduler`
    (the event loop for AsyncioScheduler). Input collaborators on other
    threads hand their events over with `loop.call_soon_threadsafe`.

    Switching from hold to one-shot mode force-releases every held pad:
    no release event would ever reach those loops in one-shot mode.
    """

    def __init__(
        self,
        renderer: AudioRenderer,
        scheduler: Scheduler,
        settings: PadSettings | None = None,
        store: SampleStore | None = None,
    ):
        """
        Args:
            renderer: Audio rendering collaborator
            scheduler: Timed callbacks for the retrigger loops
            settings: Mode/tempo state (defaults to hold mode, 130 BPM)
            store: Sample buffers (defaults to an empty store)
        """
        self.settings = settings or PadSettings()
        self.store = store if store is not None else SampleStore()
        self.registry = SourceRegistry()
        self._pressed: set[PadKey] = set()
        self._observers = ObserverManager[StateObserver](observer_type_name="state")

        self.launcher = SourceLauncher(renderer, self.registry, self._observers)
        self.retrigger = RetriggerScheduler(
            scheduler, self.launcher, self.registry, self._pressed, self.settings
        )
        self.dispatcher = PlaybackDispatcher(
            self._pressed, self.retrigger, self.launcher, self.registry
        )

        self.settings.register_observer(self)

    @classmethod
    def from_config(
        cls,
        config: DrumpadConfig,
        renderer: AudioRenderer,
        scheduler: Scheduler,
        store: SampleStore | None = None,
    ) -> "PadSession":
        """Create a session whose settings start from `config`."""
        settings = PadSettings(
            hold_mode=config.hold_mode,
            bpm=config.bpm,
            bpm_min=config.bpm_min,
            bpm_max=config.bpm_max,
        )
        return cls(renderer, scheduler, settings=settings, store=store)

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def trigger(self, category: Category | str, index: int, action: PadAction | str) -> bool:
        """
        Handle a raw (category, index, action) triple from an input collaborator.

        Unknown pads, unknown actions and unloaded samples are ignored.

        Returns:
            True if the action changed playback state
        """
        try:
            action = PadAction(action)
        except ValueError:
            logger.debug(f"Ignoring unknown pad action {action!r}")
            return False

        key = PadKey.resolve(category, index)
        if key is None:
            return False
        return self.trigger_key(key, action)

    def trigger_key(self, key: PadKey, action: PadAction) -> bool:
        """Handle an action for an already resolved pad."""
        was_pressed = key in self._pressed
        changed = self.dispatcher.dispatch(key, self.store.get_key(key), action, self.settings.mode)
        is_pressed = key in self._pressed

        if is_pressed and not was_pressed:
            self._observers.notify("on_playback_event", PlaybackEvent.PAD_PRESSED, key)
        elif was_pressed and not is_pressed:
            self._observers.notify("on_playback_event", PlaybackEvent.PAD_RELEASED, key)
        return changed

    def press(self, category: Category | str, index: int) -> bool:
        return self.trigger(category, index, PadAction.PRESS)

    def release(self, category: Category | str, index: int) -> bool:
        return self.trigger(category, index, PadAction.RELEASE)

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    def set_hold_mode(self, enabled: bool) -> None:
        self.settings.hold_mode = enabled

    def toggle_mode(self) -> PlayMode:
        return self.settings.toggle_mode()

    def set_bpm(self, bpm: float) -> float:
        """Set the tempo (clamped). Returns the tempo actually applied."""
        self.settings.bpm = bpm
        return self.settings.bpm

    def on_settings_event(self, event: SettingsEvent, settings: PadSettings) -> None:
        """Release held pads when leaving hold mode."""
        if event is SettingsEvent.MODE_CHANGED and not settings.hold_mode:
            released = self.release_all()
            if released:
                logger.info(f"Left hold mode, released {len(released)} held pad(s)")

    # ------------------------------------------------------------------
    # Bulk operations
    # ------------------------------------------------------------------

    def release_all(self) -> list[PadKey]:
        """
        Release every held pad and stop its loop.

        Returns:
            Keys that were held
        """
        held = sorted(self._pressed, key=str)
        self._pressed.clear()
        for key in held:
            self.retrigger.stop(key)
        self.retrigger.stop_all_loops()

        for key in held:
            self._observers.notify("on_playback_event", PlaybackEvent.PAD_RELEASED, key)
        return held

    def panic(self) -> int:
        """
        Stop everything: all loops and every sounding source.

        Returns:
            Number of sources that were stopped
        """
        stopped = len(self.registry)
        self.release_all()
        self.registry.stop_everything()
        logger.info(f"Panic: stopped {stopped} source(s)")
        return stopped

    # ------------------------------------------------------------------
    # Queries and observers
    # ------------------------------------------------------------------

    @property
    def pressed(self) -> frozenset[PadKey]:
        """Snapshot of the pressed set."""
        return frozenset(self._pressed)

    def is_pressed(self, key: PadKey) -> bool:
        return key in self._pressed

    def is_looping(self, key: PadKey) -> bool:
        return self.retrigger.phase(key) is LoopPhase.LOOPING

    def register_observer(self, observer: StateObserver) -> None:
        self._observers.register(observer)

    def unregister_observer(self, observer: StateObserver) -> None:
        self._observers.unregister(observer)
