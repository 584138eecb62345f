"""Agent prompt templates."""
from typing import Dict, List

from app.services.agent.constants import HISTORY_WINDOW
from app.services.call_session.models import CallSession

SYSTEM_PROMPT = (
    "You are Grok, a helpful and maximally truthful AI built by xAI. "
    "You are having a voice conversation, so keep your responses conversational, "
    "concise, and natural. Avoid long explanations unless asked. "
    "Be friendly and engaging."
)


def get_system_prompt() -> str:
    """Return the fixed persona and brevity instruction."""
    return SYSTEM_PROMPT


def build_messages(
    session: CallSession, window: int = HISTORY_WINDOW
) -> List[Dict[str, str]]:
    """
    Build the completion request messages for a session.

    The system prompt comes first, followed by the last ``window`` history
    entries. Older entries stay in the session but are not sent.
    """
    messages = [{"role": "system", "content": get_system_prompt()}]
    messages.extend(
        {"role": message.role, "content": message.content}
        for message in session.recent_history(window)
    )
    return messages
