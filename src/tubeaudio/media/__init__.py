"""Media delivery package."""

from tubeaudio.media.range_server import ByteWindow, MediaRangeServer, media_type_for, parse_range

__all__ = [
    "ByteWindow",
    "MediaRangeServer",
    "media_type_for",
    "parse_range",
]
