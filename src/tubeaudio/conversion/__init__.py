"""Conversion domain package.

- ConversionOrchestrator: runs the external pipeline and catalogues the result
- ConversionJobManager: background variant returning a pollable job record
"""

from tubeaudio.conversion.jobs import ConversionJob, ConversionJobManager, JobStatus
from tubeaudio.conversion.orchestrator import (
    ConversionOrchestrator,
    ConversionResult,
    SourceMetadata,
)

__all__ = [
    "ConversionJob",
    "ConversionJobManager",
    "ConversionOrchestrator",
    "ConversionResult",
    "JobStatus",
    "SourceMetadata",
]
