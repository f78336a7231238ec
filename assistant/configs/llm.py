"""
LLM configuration settings.

Gemini chat model parameters for the assistant answer and for the two-step
diagram component extraction.

Dependencies: pydantic, pydantic_settings
System role: LLM provider configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LLMSettings(BaseSettings):
    """Google Gemini chat model configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="LLM_",
        case_sensitive=False,
        extra="ignore",
    )

    google_api_key: str = Field(default="", description="Google API key for Gemini access")
    model_id: str = Field(default="gemini-2.5-flash", description="Gemini chat model ID")

    enrichment_temperature: float = Field(
        default=1.0,
        description="Temperature for the broad technical explanation call (high for variety)",
    )
    extraction_temperature: float = Field(
        default=0.9,
        description="Temperature for the structured component extraction call",
    )
    chat_temperature: float = Field(
        default=0.3,
        description="Temperature for knowledge-base answers",
    )
    max_tokens: int = Field(default=2048, description="Maximum output tokens per call")
    timeout_seconds: float = Field(default=60.0, description="Per-call timeout in seconds")
