"""Configuration management for scad2trotec."""

from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="TROTEC_",
        extra="ignore",
    )

    # External tools
    openscad: Optional[str] = Field(default=None, description="Path to the OpenSCAD executable")
    inkscape: Optional[str] = Field(default=None, description="Path to the Inkscape executable")

    # Layer selection
    layer_variable: str = Field(default="layer", description="OpenSCAD variable selecting the rendered layer")
    cut_layer: int = Field(default=1, description="Layer value that renders the cut geometry")
    engrave_layer: int = Field(default=2, description="Layer value that renders the engrave geometry")

    # Output
    output_suffix: str = Field(default="_trotec", description="Suffix appended to the source base name")
    page_format: Literal["eps", "pdf"] = Field(default="eps", description="Final page-description format")
    export_margin: float = Field(default=0, ge=0, description="Margin around the drawing in the converted file")

    # Subprocess limits (seconds)
    render_timeout: float = Field(default=300.0, gt=0, description="Timeout for each OpenSCAD render")
    convert_timeout: float = Field(default=120.0, gt=0, description="Timeout for the Inkscape export")

    log_level: str = Field(default="INFO", description="Logging level")


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def configure(settings: Settings) -> None:
    """Override global settings."""
    global _settings
    _settings = settings
