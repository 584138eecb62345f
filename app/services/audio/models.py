"""Audio artifact models."""
from pydantic import BaseModel


class AudioArtifact(BaseModel):
    """One synthesized reply, served back to Twilio for playback."""

    audio_id: str
    payload: bytes
    content_type: str = "audio/mpeg"
    created_at: float
