import os
from pathlib import Path


class PathResolver:
    """Central authority for all file path resolution in tubeaudio.

    Uses environment variables for configuration with sensible defaults.
    """

    def __init__(self) -> None:
        """Initialize PathResolver with environment-based configuration."""
        self.app_dir = Path(os.getenv("TUBEAUDIO_APP", "/opt/tubeaudio"))
        self.data_dir = Path(os.getenv("TUBEAUDIO_DATA", "/var/lib/tubeaudio"))

    def get_config_path(self) -> Path:
        """Get the path to the main configuration file.

        Checks TUBEAUDIO_CONFIG environment variable first, then falls back to default.
        """
        config_path = os.getenv("TUBEAUDIO_CONFIG")
        if config_path:
            return Path(config_path)
        return self.data_dir / "config" / "tubeaudio.yaml"

    def get_repo_path(self) -> Path:
        """Get the path to the application checkout."""
        return self.app_dir

    def get_data_dir(self) -> Path:
        """Get the data directory path."""
        return self.data_dir

    def get_audio_dir(self) -> Path:
        """Get the directory holding one file per stored audio asset."""
        return self.data_dir / "audio"

    def get_audio_path(self, stored_filename: str) -> Path:
        """Get the full path of a stored audio file.

        Only the final path component of ``stored_filename`` is used so catalog
        entries can never point outside the audio directory.
        """
        return self.get_audio_dir() / Path(stored_filename).name

    def get_catalog_path(self) -> Path:
        """Get the path to the JSON catalog of audio assets and playlists."""
        return self.get_audio_dir() / "metadata.json"
