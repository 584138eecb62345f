"""Text-to-speech service."""
import logging
from abc import ABC, abstractmethod
from typing import Optional

import httpx

from app.core.config import settings
from app.services.agent.errors import SynthesisError

logger = logging.getLogger(__name__)


class SpeechSynthesizer(ABC):
    """Abstract base class for speech synthesis providers."""

    content_type: str = "audio/mpeg"

    @abstractmethod
    async def synthesize(self, text: str) -> bytes:
        """
        Synthesize speech from text.

        Raises:
            SynthesisError: no audio could be produced
        """
        pass


class ElevenLabsSynthesizer(SpeechSynthesizer):
    """Speech synthesis through the ElevenLabs text-to-speech API."""

    content_type = "audio/mpeg"

    def __init__(
        self,
        api_key: Optional[str] = None,
        voice_id: Optional[str] = None,
        base_url: Optional[str] = None,
        model_id: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key or settings.elevenlabs_api_key
        self.voice_id = voice_id or settings.elevenlabs_voice_id
        self.base_url = (base_url or settings.elevenlabs_base_url).rstrip("/")
        self.model_id = model_id or settings.elevenlabs_model_id
        self.timeout = timeout or settings.synthesis_timeout_seconds
        self.transport = transport

    def _voice_settings(self) -> dict:
        return {
            "stability": settings.voice_stability,
            "similarity_boost": settings.voice_similarity_boost,
            "style": settings.voice_style,
        }

    async def synthesize(self, text: str) -> bytes:
        """
        Synthesize speech using ElevenLabs.

        Args:
            text: Text to convert to speech

        Returns:
            Audio bytes (MP3 format)
        """
        logger.info(f"[TTS] Generating speech for: '{text[:50]}'")
        url = f"{self.base_url}/text-to-speech/{self.voice_id}"
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.post(
                    url,
                    json={
                        "text": text,
                        "model_id": self.model_id,
                        "voice_settings": self._voice_settings(),
                    },
                    headers={
                        "Accept": self.content_type,
                        "Content-Type": "application/json",
                        "xi-api-key": self.api_key,
                    },
                )
                response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"[TTS] ElevenLabs error: {type(e).__name__}: {str(e)}")
            raise SynthesisError(f"Failed to generate speech: {str(e)}") from e

        if not response.content:
            raise SynthesisError("Failed to generate speech: empty audio")
        return response.content
