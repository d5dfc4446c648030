"""Byte delivery of stored audio files with single-range support.

Only ``bytes=<start>-<end>`` and ``bytes=<start>-`` are honoured. Any other
Range header (multiple ranges, suffix ranges, other units) is ignored and the
whole file is served, which is what HTTP allows a server to do.
"""

import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import quote

from tubeaudio.catalog.store import MetadataStore
from tubeaudio.exceptions import NotFoundError, RangeNotSatisfiableError
from tubeaudio.system.path_resolver import PathResolver

logger = logging.getLogger(__name__)

RANGE_PATTERN = re.compile(r"^\s*bytes\s*=\s*(\d+)\s*-\s*(\d*)\s*$")
DEFAULT_CHUNK_SIZE = 64 * 1024

MEDIA_TYPES = {
    "mp3": "audio/mpeg",
    "m4a": "audio/mp4",
    "aac": "audio/aac",
    "opus": "audio/ogg",
    "flac": "audio/flac",
    "wav": "audio/wav",
}


def media_type_for(audio_format: str) -> str:
    """Content type served for files produced in ``audio_format``."""
    return MEDIA_TYPES.get(audio_format, "application/octet-stream")


def parse_range(range_header: str | None, total_size: int) -> tuple[int, int] | None:
    """Resolve a Range header against a file of ``total_size`` bytes.

    Returns:
        Inclusive ``(start, end)`` offsets, or None to serve the whole file

    Raises:
        RangeNotSatisfiableError: If the range starts past the end of the file
    """
    if not range_header:
        return None
    match = RANGE_PATTERN.match(range_header)
    if match is None:
        return None

    start = int(match.group(1))
    end = int(match.group(2)) if match.group(2) else total_size - 1
    end = min(end, total_size - 1)
    if start >= total_size or start > end:
        raise RangeNotSatisfiableError(range_header, total_size)
    return start, end


def content_disposition(disposition: str, filename: str) -> str:
    """Build a Content-Disposition value that survives non-ASCII filenames."""
    quoted = quote(filename)
    if quoted != filename:
        return f"{disposition}; filename*=utf-8''{quoted}"
    return f'{disposition}; filename="{filename}"'


@dataclass(frozen=True)
class ByteWindow:
    """The slice of a stored file a response will carry."""

    path: Path
    start: int
    end: int
    total_size: int
    partial: bool
    media_type: str = "audio/mpeg"

    @property
    def length(self) -> int:
        return max(self.end - self.start + 1, 0)

    @property
    def status_code(self) -> int:
        return 206 if self.partial else 200

    def headers(self, disposition: str = "inline") -> dict[str, str]:
        headers = {
            "Accept-Ranges": "bytes",
            "Content-Length": str(self.length),
            "Content-Disposition": content_disposition(disposition, self.path.name),
        }
        if self.partial:
            headers["Content-Range"] = f"bytes {self.start}-{self.end}/{self.total_size}"
        return headers


class MediaRangeServer:
    """Looks up assets in the catalog and streams their bytes."""

    def __init__(
        self,
        metadata_store: MetadataStore,
        path_resolver: PathResolver,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        media_type: str = "audio/mpeg",
    ) -> None:
        self.metadata_store = metadata_store
        self.path_resolver = path_resolver
        self.chunk_size = chunk_size
        self.media_type = media_type

    def open(self, audio_id: str, range_header: str | None = None) -> ByteWindow:
        """Work out which bytes of an asset's file to send.

        Raises:
            NotFoundError: ``kind="audio"`` for an unknown id, ``kind="file"``
                when the catalog entry has no file on disk
            RangeNotSatisfiableError: If the range lies outside the file
        """
        audio = self.metadata_store.get_audio(audio_id)
        path = self.path_resolver.get_audio_path(audio.stored_filename)
        if not path.is_file():
            logger.error("Audio file missing on disk for %s: %s", audio_id, path)
            raise NotFoundError("file", audio_id, "Audio file not found on disk")
        return self.window_for(path, range_header)

    def window_for(self, path: Path, range_header: str | None = None) -> ByteWindow:
        total_size = path.stat().st_size
        byte_range = parse_range(range_header, total_size)
        if byte_range is None:
            return ByteWindow(path, 0, total_size - 1, total_size, False, self.media_type)
        start, end = byte_range
        return ByteWindow(path, start, end, total_size, True, self.media_type)

    def iter_bytes(self, window: ByteWindow) -> Iterator[bytes]:
        """Yield the window's bytes, never holding more than one chunk in memory."""
        remaining = window.length
        with window.path.open("rb") as handle:
            handle.seek(window.start)
            while remaining > 0:
                chunk = handle.read(min(self.chunk_size, remaining))
                if not chunk:
                    break
                remaining -= len(chunk)
                yield chunk

    def serve(
        self, audio_id: str, range_header: str | None = None
    ) -> tuple[ByteWindow, Iterator[bytes]]:
        """Resolve the window for an asset and return it with its byte stream."""
        window = self.open(audio_id, range_header)
        return window, self.iter_bytes(window)
