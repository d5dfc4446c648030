"""System domain package.

This package contains host-level components:
- PathResolver: Path resolution and management
- ProcessRunner: Bounded execution of external tools
- ToolProbe: Detection of the extractor and transcoder binaries
- SystemUtils: System utility functions
"""

from tubeaudio.system.path_resolver import PathResolver
from tubeaudio.system.process_runner import ProcessResult, ProcessRunner
from tubeaudio.system.system_utils import SystemUtils
from tubeaudio.system.tool_probe import ToolProbe, ToolStatus

__all__ = [
    "PathResolver",
    "ProcessResult",
    "ProcessRunner",
    "SystemUtils",
    "ToolProbe",
    "ToolStatus",
]
