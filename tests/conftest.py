import json
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest
from dependency_injector import providers
from fastapi.testclient import TestClient

from tubeaudio.catalog.models import AudioAsset, Playlist
from tubeaudio.catalog.playlists import PlaylistResolver
from tubeaudio.catalog.store import MetadataStore
from tubeaudio.config.models import TubeAudioConfig
from tubeaudio.conversion.orchestrator import ConversionOrchestrator
from tubeaudio.media.range_server import MediaRangeServer
from tubeaudio.system.path_resolver import PathResolver
from tubeaudio.system.process_runner import ProcessResult
from tubeaudio.system.tool_probe import ToolProbe, ToolStatus
from tubeaudio.web.core.container import Container
from tubeaudio.web.core.factory import create_app

FIXED_NOW = datetime(2024, 5, 1, 12, 0, 0, tzinfo=UTC)


class FakeProcessRunner:
    """Stands in for ProcessRunner without touching the host.

    ``--dump-json`` calls answer with ``metadata``; conversion calls write
    ``output_bytes`` to the requested output template unless told otherwise.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[list[str], float]] = []
        self.metadata: dict[str, Any] = {
            "title": "Never Gonna Give You Up",
            "duration": 213,
            "thumbnail": "https://i.ytimg.com/vi/dQw4w9WgXcQ/hqdefault.jpg",
        }
        self.metadata_error: Exception | None = None
        self.metadata_returncode = 0
        self.convert_error: Exception | None = None
        self.convert_returncode = 0
        self.convert_stderr = ""
        self.produce_output = True
        self.output_bytes = b"ID3" + bytes(range(256)) * 4

    def run(self, command: list[str], timeout: float) -> ProcessResult:
        self.calls.append((command, timeout))
        if "--dump-json" in command:
            if self.metadata_error is not None:
                raise self.metadata_error
            return ProcessResult(self.metadata_returncode, json.dumps(self.metadata), "")

        if self.convert_error is not None:
            raise self.convert_error
        if self.produce_output:
            template = command[command.index("-o") + 1]
            audio_format = command[command.index("--audio-format") + 1]
            Path(template.replace("%(ext)s", audio_format)).write_bytes(self.output_bytes)
        return ProcessResult(self.convert_returncode, "", self.convert_stderr)


@pytest.fixture
def path_resolver(tmp_path: Path) -> PathResolver:
    """Provide a PathResolver whose data lives under the test's temp directory."""
    resolver = PathResolver()
    resolver.app_dir = tmp_path / "app"
    resolver.data_dir = tmp_path / "data"
    config_path = tmp_path / "config" / "tubeaudio.yaml"
    resolver.get_config_path = lambda: config_path
    resolver.get_audio_dir().mkdir(parents=True)
    return resolver


@pytest.fixture
def config() -> TubeAudioConfig:
    return TubeAudioConfig(stream_chunk_size=64)


@pytest.fixture
def metadata_store(path_resolver: PathResolver) -> MetadataStore:
    return MetadataStore(path_resolver)


@pytest.fixture
def fake_runner() -> FakeProcessRunner:
    return FakeProcessRunner()


@pytest.fixture
def tool_probe() -> MagicMock:
    """A ToolProbe reporting both tools as installed."""
    probe = MagicMock(spec=ToolProbe)
    probe.extractor_candidates = ("yt-dlp", "youtube-dl")
    probe.transcoder_candidates = ("ffmpeg",)
    probe.detect_extractor.return_value = "yt-dlp"
    probe.detect_transcoder.return_value = True
    probe.find_transcoder.return_value = "ffmpeg"
    probe.status.return_value = ToolStatus(extractor="yt-dlp", transcoder="ffmpeg")
    return probe


@pytest.fixture
def orchestrator(
    tool_probe: MagicMock,
    fake_runner: FakeProcessRunner,
    metadata_store: MetadataStore,
    path_resolver: PathResolver,
    config: TubeAudioConfig,
) -> ConversionOrchestrator:
    return ConversionOrchestrator(
        tool_probe=tool_probe,
        process_runner=fake_runner,  # type: ignore[arg-type]
        metadata_store=metadata_store,
        path_resolver=path_resolver,
        config=config.conversion,
        clock=lambda: FIXED_NOW,
    )


@pytest.fixture
def media_server(metadata_store: MetadataStore, path_resolver: PathResolver) -> MediaRangeServer:
    return MediaRangeServer(metadata_store, path_resolver, chunk_size=64)


@pytest.fixture
def playlist_resolver(metadata_store: MetadataStore) -> PlaylistResolver:
    return PlaylistResolver(metadata_store)


@pytest.fixture
def make_audio(
    metadata_store: MetadataStore, path_resolver: PathResolver
) -> Callable[..., AudioAsset]:
    """Factory that catalogues an asset and, by default, writes its backing file."""

    def _make(
        title: str = "Track",
        category: str = "Music",
        size: int = 1000,
        duration: float = 60.0,
        created_at: datetime = FIXED_NOW,
        with_file: bool = True,
        **kwargs: Any,
    ) -> AudioAsset:
        audio = AudioAsset(
            source_id=kwargs.pop("source_id", "abc123"),
            title=title,
            stored_filename=kwargs.pop("stored_filename", f"{title}_{len(title)}_{size}.mp3"),
            source_url=kwargs.pop("source_url", "https://www.youtube.com/watch?v=abc123"),
            category=category,
            duration_seconds=duration,
            file_size_bytes=size,
            created_at=created_at,
            **kwargs,
        )
        if with_file:
            path = path_resolver.get_audio_path(audio.stored_filename)
            path.write_bytes(bytes(i % 256 for i in range(size)))
        metadata_store.add_audio(audio)
        return audio

    return _make


@pytest.fixture
def make_playlist(metadata_store: MetadataStore) -> Callable[..., Playlist]:
    def _make(name: str = "Mix", audio_ids: list[str] | None = None) -> Playlist:
        playlist = metadata_store.create_playlist(name)
        if audio_ids is not None:
            playlist = metadata_store.patch_playlist(playlist.id, audio_ids=audio_ids)
        return playlist

    return _make


@pytest.fixture
def container(
    path_resolver: PathResolver,
    config: TubeAudioConfig,
    fake_runner: FakeProcessRunner,
    tool_probe: MagicMock,
) -> Container:
    """Application container with host-facing services replaced by test doubles."""
    container = Container()
    container.path_resolver.override(providers.Object(path_resolver))
    container.config.override(providers.Object(config))
    container.process_runner.override(providers.Object(fake_runner))
    container.tool_probe.override(providers.Object(tool_probe))
    return container


@pytest.fixture
def client(container: Container) -> TestClient:
    """TestClient for the full application, sharing the metadata_store fixture's files."""
    app = create_app(container)
    return TestClient(app)
