"""MIDI input exceptions."""

from .base import DrumpadError


class MidiPortNotFoundError(DrumpadError):
    """No usable MIDI input port."""

    def __init__(self, port_name: str | None, available: list[str]):
        if port_name is None:
            user_msg = "No MIDI input ports available."
        else:
            user_msg = f"MIDI input port '{port_name}' not found."

        hint = "Connect a pad controller and run 'drumpad midi list'."
        if available:
            hint = "Available ports: " + ", ".join(available)

        super().__init__(user_message=user_msg, recoverable=True, recovery_hint=hint)
        self.port_name = port_name
        self.available = available
