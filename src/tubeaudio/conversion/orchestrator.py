"""Conversion of a remote video reference into a stored, catalogued audio file."""

import json
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

import structlog

from tubeaudio.catalog.models import DEFAULT_CATEGORY, AudioAsset
from tubeaudio.catalog.store import MetadataStore
from tubeaudio.config.models import ConversionConfig
from tubeaudio.conversion.naming import build_file_stem, extract_source_id, timestamp_millis
from tubeaudio.exceptions import (
    ConversionFailedError,
    ProcessNotFoundError,
    ProcessTimeoutError,
    ToolUnavailableError,
    TubeAudioError,
    ValidationError,
)
from tubeaudio.system.path_resolver import PathResolver
from tubeaudio.system.process_runner import ProcessRunner
from tubeaudio.system.tool_probe import (
    EXTRACTOR_INSTALL_HINT,
    TRANSCODER_INSTALL_HINT,
    ToolProbe,
)

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class SourceMetadata:
    """Descriptive fields reported by the extractor for a source reference."""

    title: str
    duration_seconds: float = 0.0
    thumbnail_url: str | None = None


@dataclass(frozen=True)
class ConversionResult:
    """A newly catalogued asset and the file backing it."""

    audio: AudioAsset
    file_path: Path


class ConversionOrchestrator:
    """Drives extractor and transcoder to produce one new catalog entry.

    Nothing is written to the catalog unless the pipeline produced a file.
    """

    def __init__(
        self,
        tool_probe: ToolProbe,
        process_runner: ProcessRunner,
        metadata_store: MetadataStore,
        path_resolver: PathResolver,
        config: ConversionConfig | None = None,
        default_category: str = DEFAULT_CATEGORY,
        unknown_title: str = "Unknown",
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.tool_probe = tool_probe
        self.process_runner = process_runner
        self.metadata_store = metadata_store
        self.path_resolver = path_resolver
        self.config = config or ConversionConfig()
        self.default_category = default_category
        self.unknown_title = unknown_title
        self.clock = clock or (lambda: datetime.now(UTC))

    def convert(self, source_url: str | None, category: str | None = None) -> ConversionResult:
        """Convert ``source_url`` into a stored audio asset.

        Args:
            source_url: Reference passed verbatim to the extractor
            category: Catalog category; the default category when empty

        Returns:
            ConversionResult with the new asset and the path of its file

        Raises:
            ValidationError: If ``source_url`` is empty
            ToolUnavailableError: If the extractor or transcoder is missing
            ConversionFailedError: If the pipeline fails, times out or writes nothing
            CatalogIOError: If the catalog cannot be saved
        """
        if not source_url or not source_url.strip():
            raise ValidationError("Missing url")
        source_url = source_url.strip()

        extractor = self.require_tools()
        metadata = self.fetch_metadata(extractor, source_url)

        now = self.clock()
        source_id = extract_source_id(source_url) or str(timestamp_millis(now))
        stem = build_file_stem(metadata.title, source_id, now, self.config.title_max_length)

        audio_dir = self.path_resolver.get_audio_dir()
        audio_dir.mkdir(parents=True, exist_ok=True)
        output_path = audio_dir / f"{stem}.{self.config.audio_format}"
        if output_path.exists():
            output_path.unlink()

        log = logger.bind(source_url=source_url, output=output_path.name)
        log.info("Starting conversion", extractor=extractor)
        try:
            self._run_pipeline(extractor, source_url, audio_dir / f"{stem}.%(ext)s")
            if not output_path.is_file():
                raise ConversionFailedError("Conversion failed: no audio file was produced")

            audio = AudioAsset(
                source_id=source_id,
                title=metadata.title,
                stored_filename=output_path.name,
                source_url=source_url,
                category=category or self.default_category,
                duration_seconds=metadata.duration_seconds,
                file_size_bytes=output_path.stat().st_size,
                created_at=now,
                thumbnail_url=metadata.thumbnail_url,
            )
            self.metadata_store.add_audio(audio)
        except Exception:
            output_path.unlink(missing_ok=True)
            log.warning("Conversion aborted")
            raise

        log.info("Conversion finished", audio_id=audio.id, size_bytes=audio.file_size_bytes)
        return ConversionResult(audio=audio, file_path=output_path)

    def require_tools(self) -> str:
        """Return the extractor to use, failing when either tool is missing."""
        extractor = self.tool_probe.detect_extractor()
        if extractor is None:
            raise ToolUnavailableError(
                " or ".join(self.tool_probe.extractor_candidates), EXTRACTOR_INSTALL_HINT
            )
        if not self.tool_probe.detect_transcoder():
            raise ToolUnavailableError(
                " or ".join(self.tool_probe.transcoder_candidates), TRANSCODER_INSTALL_HINT
            )
        return extractor

    def fetch_metadata(self, extractor: str, source_url: str) -> SourceMetadata:
        """Ask the extractor for title, duration and thumbnail.

        Any failure degrades to placeholder metadata instead of aborting.
        """
        command = [extractor, "--dump-json", "--no-playlist", source_url]
        try:
            result = self.process_runner.run(command, timeout=self.config.metadata_timeout_seconds)
            if not result.ok:
                raise ConversionFailedError(result.stderr.strip() or "metadata probe failed")
            info = json.loads(result.stdout)
        except (TubeAudioError, json.JSONDecodeError) as e:
            logger.warning(
                "Metadata probe failed, using defaults", source_url=source_url, error=str(e)
            )
            return SourceMetadata(title=self.unknown_title)

        if not isinstance(info, dict):
            return SourceMetadata(title=self.unknown_title)
        duration = info.get("duration")
        return SourceMetadata(
            title=str(info.get("title") or self.unknown_title),
            duration_seconds=float(duration) if isinstance(duration, int | float) else 0.0,
            thumbnail_url=info.get("thumbnail") or None,
        )

    def _run_pipeline(self, extractor: str, source_url: str, output_template: Path) -> None:
        command = [
            extractor,
            "--no-playlist",
            "-x",
            "--audio-format",
            self.config.audio_format,
            "--audio-quality",
            self.config.audio_quality,
            "-o",
            str(output_template),
            source_url,
        ]
        try:
            result = self.process_runner.run(
                command, timeout=self.config.conversion_timeout_seconds
            )
        except ProcessTimeoutError as e:
            raise ConversionFailedError(f"Conversion failed: {e.message}") from e
        except ProcessNotFoundError as e:
            raise ToolUnavailableError(extractor, EXTRACTOR_INSTALL_HINT) from e

        if not result.ok:
            detail = result.stderr.strip().splitlines()[-1:] or [f"exit code {result.returncode}"]
            raise ConversionFailedError(f"Conversion failed: {detail[0]}")
