"""Call session models."""
from typing import List, Literal

from pydantic import BaseModel

from app.services.agent.stages import DialogState


class Message(BaseModel):
    """One entry of a call's conversation history."""

    role: Literal["user", "assistant"]
    content: str


class CallSession(BaseModel):
    """Conversation record tied to one phone call."""

    call_sid: str
    caller: str = ""
    started_at: float  # Cache clock reading, basis for expiry
    history: List[Message] = []
    dialog_state: DialogState = DialogState.GREETING

    def add_message(self, role: str, content: str) -> None:
        """Append an entry to the history."""
        self.history.append(Message(role=role, content=content))

    def recent_history(self, limit: int) -> List[Message]:
        """Return at most the last ``limit`` history entries, oldest first."""
        if limit <= 0:
            return []
        return self.history[-limit:]
