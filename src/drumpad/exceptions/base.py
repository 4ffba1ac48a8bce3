"""Root of the drumpad exception tree.

Everything drumpad raises on purpose derives from DrumpadError, so the CLI
can tell "a pad or device problem we can explain" apart from a bug. Each
error carries two texts: `user_message` is what the performer sees in the
terminal, `technical_message` is what goes to the log file. An optional
`recovery_hint` is shown under the message.
"""

from typing import Optional


class DrumpadError(Exception):
    """
    An error drumpad knows how to explain.

    `recoverable` marks errors after which the session can keep playing,
    such as a single sample failing to load or the audio device being busy.
    """

    def __init__(
        self,
        user_message: str,
        technical_message: Optional[str] = None,
        recoverable: bool = False,
        recovery_hint: Optional[str] = None,
    ):
        super().__init__(user_message)
        self.user_message = user_message
        self.technical_message = technical_message or user_message
        self.recoverable = recoverable
        self.recovery_hint = recovery_hint

    def __str__(self) -> str:
        return self.user_message

    def get_full_message(self) -> str:
        """Message plus its hint, as printed by the CLI."""
        if not self.recovery_hint:
            return self.user_message
        return f"{self.user_message}\n\nSuggestion: {self.recovery_hint}"
