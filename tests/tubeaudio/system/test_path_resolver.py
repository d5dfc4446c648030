"""Tests for PathResolver."""

from pathlib import Path

from tubeaudio.system.path_resolver import PathResolver


class TestPathResolver:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("TUBEAUDIO_APP", raising=False)
        monkeypatch.delenv("TUBEAUDIO_DATA", raising=False)
        monkeypatch.delenv("TUBEAUDIO_CONFIG", raising=False)

        resolver = PathResolver()

        assert resolver.get_repo_path() == Path("/opt/tubeaudio")
        assert resolver.get_data_dir() == Path("/var/lib/tubeaudio")
        assert resolver.get_config_path() == Path("/var/lib/tubeaudio/config/tubeaudio.yaml")

    def test_environment_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("TUBEAUDIO_DATA", str(tmp_path))
        monkeypatch.setenv("TUBEAUDIO_CONFIG", str(tmp_path / "custom.yaml"))

        resolver = PathResolver()

        assert resolver.get_audio_dir() == tmp_path / "audio"
        assert resolver.get_catalog_path() == tmp_path / "audio" / "metadata.json"
        assert resolver.get_config_path() == tmp_path / "custom.yaml"

    def test_audio_path_keeps_only_file_name(self, path_resolver):
        audio_dir = path_resolver.get_audio_dir()

        assert path_resolver.get_audio_path("song.mp3") == audio_dir / "song.mp3"
        assert path_resolver.get_audio_path("../../etc/passwd") == audio_dir / "passwd"
