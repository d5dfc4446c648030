"""tubeaudio configuration package.

This package provides configuration management with:
- Pydantic models with validated defaults
- YAML parsing and serialization
"""

from .manager import ConfigManager
from .models import ConversionConfig, LoggingConfig, TubeAudioConfig

__all__ = [
    "ConfigManager",
    "ConversionConfig",
    "LoggingConfig",
    "TubeAudioConfig",
]
