"""
Shared settings base.

Every settings group reads the same ``.env`` file and differs only by its
environment prefix (``LLM_``, ``DIAGRAM_``, ``VECTOR_STORE_``).

Dependencies: pydantic_settings
System role: Common loader configuration for all settings groups
"""

from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict


class BaseSettings(PydanticBaseSettings):
    """Settings loaded from the environment and an optional ``.env`` file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
