"""Dialog state enumeration."""
from enum import Enum


class DialogState(str, Enum):
    """Turn-taking states of a single call."""

    GREETING = "greeting"  # Call just answered, welcome being spoken
    LISTENING = "listening"  # Waiting for the caller's next utterance
    REPROMPTING = "reprompting"  # Speech was missing or too uncertain to act on
    RESPONDING = "responding"  # Reply being generated and synthesized
    ENDED = "ended"  # Goodbye spoken, call hung up

    def __str__(self) -> str:
        """Return the string value of the state."""
        return self.value
