"""Configuration loading for the web application."""

from tubeaudio.config import ConfigManager, TubeAudioConfig
from tubeaudio.system.path_resolver import PathResolver


def get_config(path_resolver: PathResolver | None = None) -> TubeAudioConfig:
    """Load tubeaudio configuration.

    Args:
        path_resolver: Optional PathResolver instance. If not provided,
                      creates a new PathResolver instance.

    Returns:
        TubeAudioConfig: The loaded and validated configuration.
    """
    if path_resolver is None:
        path_resolver = PathResolver()
    return ConfigManager(path_resolver).load()
