"""
Generation gateway configuration settings.

Connection parameters for the OpenAI-compatible chat completions gateway
that streams answers.

Dependencies: pydantic, pydantic_settings
System role: LLM gateway configuration
"""

from pydantic import Field, SecretStr
from pydantic_settings import SettingsConfigDict

from legally.configs.base import BaseSettings


class GenerationSettings(BaseSettings):
    """Streaming generation gateway configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="GENERATION_",
        case_sensitive=False,
        extra="ignore",
    )

    base_url: str = Field(
        default="https://ai.gateway.lovable.dev/v1",
        description="Base URL of the OpenAI-compatible gateway",
    )
    api_key: SecretStr = Field(default=SecretStr(""), description="Gateway bearer token")
    model: str = Field(default="google/gemini-2.5-flash", description="Model identifier")
    connect_timeout: float = Field(default=10.0, description="Connect timeout in seconds")
    stream_idle_timeout: float = Field(
        default=30.0,
        description="Seconds without a streamed chunk before the answer is treated as done",
        gt=0,
    )
    history_window: int = Field(
        default=20,
        description="Most recent conversation turns sent with each request",
        ge=0,
    )
