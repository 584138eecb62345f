"""Chat completion providers."""
import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from openai import APITimeoutError, AsyncOpenAI, OpenAIError

from app.core.config import settings
from app.services.agent.errors import CompletionProviderError, CompletionTimeout

logger = logging.getLogger(__name__)


class CompletionProvider(ABC):
    """Abstract base class for completion providers."""

    @abstractmethod
    async def complete(self, messages: List[Dict[str, str]]) -> str:
        """
        Get the assistant reply for a list of role-tagged messages.

        Raises:
            CompletionTimeout: the request exceeded its timeout
            CompletionProviderError: any other failure, including no candidates
        """
        pass


class XAICompletionProvider(CompletionProvider):
    """Grok completions through xAI's OpenAI-compatible endpoint."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        timeout: Optional[float] = None,
        client: Optional[AsyncOpenAI] = None,
    ):
        self.model = model or settings.xai_model
        self.temperature = (
            temperature if temperature is not None else settings.completion_temperature
        )
        self.max_tokens = max_tokens or settings.completion_max_tokens
        self.timeout = timeout or settings.completion_timeout_seconds
        self.client = client or AsyncOpenAI(
            api_key=api_key or settings.xai_api_key,
            base_url=base_url or settings.xai_base_url,
            max_retries=0,
        )

    async def complete(self, messages: List[Dict[str, str]]) -> str:
        """Send the messages to Grok and return the trimmed reply text."""
        try:
            response = await asyncio.wait_for(
                self.client.chat.completions.create(
                    model=self.model,
                    messages=messages,
                    temperature=self.temperature,
                    max_tokens=self.max_tokens,
                    stream=False,
                ),
                timeout=self.timeout,
            )
        except (asyncio.TimeoutError, APITimeoutError) as e:
            logger.warning(f"[COMPLETION] Request timed out after {self.timeout}s")
            raise CompletionTimeout(f"Completion timed out after {self.timeout}s") from e
        except OpenAIError as e:
            logger.error(f"[COMPLETION] API error: {type(e).__name__}: {str(e)}")
            raise CompletionProviderError(f"Completion failed: {str(e)}") from e

        if not response.choices:
            raise CompletionProviderError("No response from Grok API")

        try:
            content = (response.choices[0].message.content or "").strip()
        except (AttributeError, TypeError) as e:
            raise CompletionProviderError(f"Malformed response from Grok API: {str(e)}") from e
        if not content:
            raise CompletionProviderError("Empty response from Grok API")
        return content
