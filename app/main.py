"""Main FastAPI application."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import Response

from app.core.logging import setup_logging
from app.core.dependencies import create_reaper
from app.api import audio, health
from app.api.webhooks import voice
from app.services.agent.constants import UNEXPECTED_ERROR_MESSAGE
from app.services.agent.directives import Speak
from app.services.speech.twiml import render_twiml

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    setup_logging()
    reaper = create_reaper()
    reaper.start()
    app.state.reaper = reaper
    logger.info("Voice Grok Assistant started")
    yield
    # Shutdown
    await reaper.stop()


app = FastAPI(
    title="Voice Grok Assistant",
    description="Phone call relay between Twilio, Grok and ElevenLabs",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(health.router, tags=["health"])
app.include_router(audio.router, tags=["audio"])
app.include_router(voice.router, prefix="/webhooks", tags=["webhooks"])


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Answer any unhandled error with speakable TwiML."""
    logger.error(f"Unhandled error: {type(exc).__name__}: {str(exc)}", exc_info=exc)
    twiml = render_twiml([Speak(text=UNEXPECTED_ERROR_MESSAGE)])
    return Response(content=twiml, media_type="application/xml")


@app.get("/")
async def root():
    return {
        "message": "Voice Grok Assistant",
        "version": "0.1.0",
    }
