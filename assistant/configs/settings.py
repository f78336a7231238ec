"""
Application settings.

Top-level values (log level, route prefix, CORS) plus one nested group per
subsystem. Cached so the environment is read once per process.

Dependencies: pydantic, all settings groups
System role: Single configuration object handed to the API layer
"""

from functools import lru_cache

from pydantic import Field

from assistant.configs.base import BaseSettings
from assistant.configs.diagram import DiagramSettings
from assistant.configs.llm import LLMSettings
from assistant.configs.vector_store import VectorStoreSettings


class Settings(BaseSettings):
    """Application settings."""

    log_level: str = Field(default="INFO", description="Root log level (DEBUG, INFO, WARNING, ERROR)")
    api_prefix: str = Field(default="/api", description="Prefix shared by every HTTP route")
    cors_origins: list[str] = Field(default=["*"], description="Origins allowed to call the API")

    llm: LLMSettings = Field(default_factory=LLMSettings)
    diagram: DiagramSettings = Field(default_factory=DiagramSettings)
    vector_store: VectorStoreSettings = Field(default_factory=VectorStoreSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get the process-wide settings.

    Returns:
        Settings: Loaded once, then served from cache
    """
    return Settings()
