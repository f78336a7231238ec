"""
Diagram pipeline configuration settings.

Generated-files location, primary entity name, and render backend limits.

Dependencies: pydantic, pydantic_settings
System role: Diagram synthesis and rendering configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DiagramSettings(BaseSettings):
    """Diagram synthesis and render backend configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="DIAGRAM_",
        case_sensitive=False,
        extra="ignore",
    )

    output_dir: str = Field(
        default="uploads",
        description="Root directory; documents are written under <output_dir>/generated",
    )
    primary_node: str = Field(
        default="RiverMeadow Platform",
        description="Entity always present as the centre node of extracted diagrams",
    )

    d2_binary: str = Field(default="d2", description="Path or name of the D2 CLI executable")
    d2_theme: int = Field(default=3, description="D2 theme ID passed as --theme")
    d2_layout: str = Field(default="dagre", description="D2 layout engine passed as --layout")
    d2_pad: int = Field(default=30, description="D2 padding passed as --pad")

    render_timeout_seconds: float = Field(
        default=15.0,
        description="Upper bound for a single CLI or headless browser render",
    )
    screenshot_scale: int = Field(
        default=2,
        description="Device scale factor for headless browser screenshots",
    )
