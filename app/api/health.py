"""Health check endpoint."""
import logging
import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request

from app.core.config import settings
from app.core.dependencies import get_audio_store, get_conversation_store
from app.services.audio.store import AudioStore
from app.services.call_session.store import ConversationStore

router = APIRouter()
logger = logging.getLogger(__name__)

_process_started = time.monotonic()


@router.get("/health")
async def health_check(
    request: Request,
    conversation_store: ConversationStore = Depends(get_conversation_store),
    audio_store: AudioStore = Depends(get_audio_store),
):
    """Report uptime plus session and audio counts."""
    logger.debug(
        f"[HEALTH] Health check requested - Client: {request.client.host if request.client else 'unknown'}"
    )
    stats = conversation_store.stats(settings.conversation_timeout_seconds)
    return {
        "status": "OK",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": round(time.monotonic() - _process_started),
        "conversations": stats.model_dump(),
        "audio_files": audio_store.size(),
    }
