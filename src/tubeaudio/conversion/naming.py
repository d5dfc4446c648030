"""Source id extraction and output filename derivation."""

import re
from datetime import datetime

SOURCE_ID_PATTERN = re.compile(
    r"(?:youtube\.com/watch\?(?:.*&)?v=|youtu\.be/|youtube\.com/shorts/)([^&\n?#/]+)"
)
UNSAFE_CHARS = re.compile(r"[^\w\s-]")


def extract_source_id(source_url: str) -> str | None:
    """Pull the video id out of a YouTube style reference, if there is one."""
    match = SOURCE_ID_PATTERN.search(source_url)
    if match is None:
        return None
    return UNSAFE_CHARS.sub("", match.group(1)) or None


def timestamp_millis(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


def sanitize_title(title: str, max_length: int = 50) -> str:
    """Drop characters that are not word characters, spaces or hyphens."""
    return UNSAFE_CHARS.sub("", title)[:max_length].strip()


def build_file_stem(
    title: str, source_id: str, moment: datetime, max_title_length: int = 50
) -> str:
    """Combine title fragment, source id and millisecond timestamp into a file stem.

    Path separators never survive sanitising, so the stem is always a single
    path component.
    """
    parts = [
        sanitize_title(title, max_title_length),
        UNSAFE_CHARS.sub("", source_id),
        str(timestamp_millis(moment)),
    ]
    return "_".join(part for part in parts if part)
