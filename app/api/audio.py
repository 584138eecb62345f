"""Playback endpoint for synthesized audio."""
import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from app.core.config import settings
from app.core.dependencies import get_audio_store
from app.services.audio.store import AudioStore

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/audio/{audio_id}")
async def get_audio(
    audio_id: str,
    audio_store: AudioStore = Depends(get_audio_store),
):
    """Serve a generated audio file to Twilio."""
    artifact = audio_store.get(audio_id)
    if artifact is None:
        logger.warning(f"[AUDIO] Audio not found - AudioId: {audio_id}")
        raise HTTPException(status_code=404, detail="Audio file not found")

    return Response(
        content=artifact.payload,
        media_type=artifact.content_type,
        headers={
            "Cache-Control": f"public, max-age={int(settings.audio_max_age_seconds)}",
        },
    )
