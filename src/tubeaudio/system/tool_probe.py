"""Presence checks for the external extraction and transcoding tools."""

import logging
import shutil
from collections.abc import Sequence
from dataclasses import dataclass

logger = logging.getLogger(__name__)

EXTRACTOR_INSTALL_HINT = "install with: pip install yt-dlp"
TRANSCODER_INSTALL_HINT = "install with: apt-get install ffmpeg (Linux) or brew install ffmpeg"


@dataclass(frozen=True)
class ToolStatus:
    """Snapshot of which external tools were found on the host."""

    extractor: str | None
    transcoder: str | None

    @property
    def extractor_present(self) -> bool:
        return self.extractor is not None

    @property
    def transcoder_present(self) -> bool:
        return self.transcoder is not None

    @property
    def ready(self) -> bool:
        return self.extractor_present and self.transcoder_present


class ToolProbe:
    """Detects the first available extractor and transcoder on ``PATH``.

    Candidates are tried in the given priority order. Lookups only inspect the
    filesystem, nothing is executed.
    """

    def __init__(
        self,
        extractor_candidates: Sequence[str] = ("yt-dlp", "youtube-dl"),
        transcoder_candidates: Sequence[str] = ("ffmpeg",),
    ) -> None:
        self.extractor_candidates = tuple(extractor_candidates)
        self.transcoder_candidates = tuple(transcoder_candidates)

    def detect_extractor(self) -> str | None:
        """Return the name of the first installed extractor, or None."""
        return self._first_available(self.extractor_candidates)

    def detect_transcoder(self) -> bool:
        """Return whether any transcoder candidate is installed."""
        return self.find_transcoder() is not None

    def find_transcoder(self) -> str | None:
        """Return the name of the first installed transcoder, or None."""
        return self._first_available(self.transcoder_candidates)

    def status(self) -> ToolStatus:
        """Probe both tools at once."""
        return ToolStatus(extractor=self.detect_extractor(), transcoder=self.find_transcoder())

    @staticmethod
    def _first_available(candidates: Sequence[str]) -> str | None:
        for name in candidates:
            if shutil.which(name) is not None:
                return name
        logger.debug("None of %s found on PATH", ", ".join(candidates))
        return None
