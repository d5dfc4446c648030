"""Configuration models for tubeaudio.

This module contains the Pydantic models loaded from the YAML configuration file.
"""

import re

from pydantic import BaseModel, Field, field_validator


class LoggingConfig(BaseModel):
    """Structlog-based logging configuration."""

    level: str = "INFO"
    json_logs: bool | None = None  # None = auto-detect based on environment
    include_caller: bool = False  # Include file:line info (useful for debugging)
    extra_fields: dict[str, str] = Field(default_factory=lambda: {"service": "tubeaudio"})


class ConversionConfig(BaseModel):
    """External tool and conversion pipeline settings."""

    extractor_candidates: list[str] = Field(default_factory=lambda: ["yt-dlp", "youtube-dl"])
    transcoder_candidates: list[str] = Field(default_factory=lambda: ["ffmpeg"])
    audio_format: str = "mp3"
    audio_quality: str = "192K"
    metadata_timeout_seconds: float = 30.0
    conversion_timeout_seconds: float = 300.0
    max_output_bytes: int = 10 * 1024 * 1024
    title_max_length: int = 50
    max_concurrent_jobs: int = 2
    max_retained_jobs: int = 100

    @field_validator("audio_format")
    @classmethod
    def validate_audio_format(cls, v: str) -> str:
        """Validate audio format is a bare codec name."""
        if not re.match(r"^[a-z0-9]+$", v):
            raise ValueError(
                f"Invalid audio format '{v}'. Must contain only lowercase letters and digits."
            )
        return v

    @field_validator("extractor_candidates", "transcoder_candidates")
    @classmethod
    def validate_candidates(cls, v: list[str]) -> list[str]:
        """Require at least one tool name to probe for."""
        if not v:
            raise ValueError("At least one tool candidate is required")
        return v


class TubeAudioConfig(BaseModel):
    """Configuration settings for the tubeaudio service."""

    site_name: str = "tubeaudio"

    # Catalog
    default_category: str = "Uncategorized"
    all_categories_label: str = "All"
    unknown_title: str = "Unknown"

    # Byte streaming
    stream_chunk_size: int = 64 * 1024

    # Web
    cors_allow_origins: list[str] = Field(default_factory=lambda: ["*"])

    conversion: ConversionConfig = Field(default_factory=ConversionConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("stream_chunk_size")
    @classmethod
    def validate_chunk_size(cls, v: int) -> int:
        """Keep streaming windows positive."""
        if v <= 0:
            raise ValueError("stream_chunk_size must be positive")
        return v
