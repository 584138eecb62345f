"""Application configuration."""
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # xAI (OpenAI-compatible chat completions)
    xai_api_key: str
    xai_base_url: str = "https://api.x.ai/v1"
    xai_model: str = "grok-beta"
    completion_temperature: float = 0.7
    completion_max_tokens: int = 150  # Keep replies short for voice
    completion_timeout_seconds: float = 10.0

    # ElevenLabs
    elevenlabs_api_key: str
    elevenlabs_voice_id: str
    elevenlabs_base_url: str = "https://api.elevenlabs.io/v1"
    elevenlabs_model_id: str = "eleven_monolingual_v1"
    voice_stability: float = 0.5
    voice_similarity_boost: float = 0.8
    voice_style: float = 0.5
    synthesis_timeout_seconds: float = 30.0

    # Session housekeeping
    conversation_timeout_seconds: float = 30 * 60
    audio_max_age_seconds: float = 10 * 60
    cleanup_interval_seconds: float = 5 * 60

    # Logging
    log_level: str = "INFO"

    # Server
    base_url: Optional[str] = None
    host: str = "0.0.0.0"
    port: int = 8000

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )


settings = Settings()
