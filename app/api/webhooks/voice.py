"""Twilio voice webhook endpoints."""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import Response

from app.core.config import settings
from app.core.dependencies import get_dialog_controller
from app.services.agent.constants import APOLOGY_MESSAGE
from app.services.agent.dialog import DialogController, gather_url
from app.services.agent.directives import Listen, Speak
from app.services.speech.twiml import render_twiml

router = APIRouter()
logger = logging.getLogger(__name__)

# Call statuses that mean the call is over
TERMINAL_CALL_STATUSES = ["completed", "failed", "busy", "no-answer", "canceled"]


def get_base_url(request: Request) -> str:
    """
    Get the base URL for constructing absolute URLs.

    Uses BASE_URL environment variable if set, otherwise constructs from request.
    """
    if settings.base_url:
        return settings.base_url.rstrip('/')

    return str(request.base_url).rstrip('/')


def twiml_response(twiml: str) -> Response:
    return Response(content=twiml, media_type="application/xml")


@router.post("/voice/incoming")
async def handle_incoming_call(
    request: Request,
    CallSid: str = Form(...),
    From: str = Form(""),
    controller: DialogController = Depends(get_dialog_controller),
):
    """
    Handle incoming call from Twilio.

    This endpoint is called when a call comes in.
    """
    logger.info(f"[INCOMING CALL] Incoming call from {From}, CallSid: {CallSid}")

    directives = controller.start_call(CallSid, From, base_url=get_base_url(request))
    twiml = render_twiml(directives)

    logger.info(
        f"[INCOMING CALL] Greeting sent - CallSid: {CallSid}, TwiML length: {len(twiml)} bytes"
    )
    return twiml_response(twiml)


@router.post("/voice/gather")
async def handle_gather(
    request: Request,
    CallSid: str = Form(...),
    SpeechResult: Optional[str] = Form(None),
    Confidence: Optional[str] = Form(None),
    controller: DialogController = Depends(get_dialog_controller),
):
    """
    Handle gathered speech from Twilio.

    This endpoint is called after Twilio collects user speech.
    """
    logger.info(
        f"[GATHER] Speech received - CallSid: {CallSid}, "
        f"Text: '{(SpeechResult or '')[:100]}', Confidence: {Confidence}"
    )
    base_url = get_base_url(request)

    try:
        directives = await controller.handle_speech(
            CallSid, SpeechResult, Confidence, base_url=base_url
        )
    except Exception as e:
        logger.error(
            f"[GATHER] Error processing speech input - CallSid: {CallSid}, "
            f"Error: {type(e).__name__}: {str(e)}",
            exc_info=True
        )
        # Keep the call alive with an apology and another gather
        directives = [Speak(text=APOLOGY_MESSAGE), Listen(action_url=gather_url(base_url))]

    return twiml_response(render_twiml(directives))


@router.post("/voice/status")
async def handle_call_status(
    request: Request,
    CallSid: str = Form(...),
    CallStatus: Optional[str] = Form(None),
    controller: DialogController = Depends(get_dialog_controller),
):
    """
    Handle call status updates from Twilio.

    Terminal statuses (or a bare end-of-call notification) drop the
    conversation immediately instead of waiting for the reaper.
    """
    logger.info(f"[CALL STATUS] Received status update - CallSid: {CallSid}, CallStatus: {CallStatus}")

    if CallStatus is None or CallStatus in TERMINAL_CALL_STATUSES:
        controller.end_call(CallSid)
    else:
        logger.debug(
            f"[CALL STATUS] No action needed - CallSid: {CallSid}, CallStatus: {CallStatus}"
        )

    return Response(content="OK", media_type="text/plain")
