"""Exception hierarchy for tubeaudio.

Every error raised by the catalog, conversion and media layers inherits from
TubeAudioError. The web layer maps each class onto an HTTP status code.
"""


class TubeAudioError(Exception):
    """Base exception for all tubeaudio errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TubeAudioError):
    """A required field is missing or empty."""

    pass


class NotFoundError(TubeAudioError):
    """An asset, playlist, job or backing file could not be found."""

    def __init__(self, kind: str, identifier: str, message: str | None = None):
        self.kind = kind
        self.identifier = identifier
        super().__init__(message or f"{kind.capitalize()} {identifier} not found")


class ConversionError(TubeAudioError):
    """Base class for failures of the conversion pipeline."""

    pass


class ToolUnavailableError(ConversionError):
    """A required external tool is not installed on the host."""

    def __init__(self, tool: str, install_hint: str | None = None):
        self.tool = tool
        self.install_hint = install_hint
        message = f"Required tool not available: {tool}"
        if install_hint:
            message = f"{message} ({install_hint})"
        super().__init__(message)


class ConversionFailedError(ConversionError):
    """The external pipeline ran but did not produce a usable audio file."""

    pass


class CatalogIOError(TubeAudioError):
    """The catalog or an asset file could not be written or removed."""

    pass


class RangeNotSatisfiableError(TubeAudioError):
    """A byte range lies outside the stored file."""

    def __init__(self, range_header: str, total_size: int):
        self.range_header = range_header
        self.total_size = total_size
        super().__init__(f"Range {range_header!r} not satisfiable for {total_size} bytes")


class ProcessTimeoutError(TubeAudioError):
    """An external process exceeded its time budget and was killed."""

    def __init__(self, command: list[str], timeout: float):
        self.command = command
        self.timeout = timeout
        super().__init__(f"{command[0]} timed out after {timeout:g}s")


class ProcessNotFoundError(TubeAudioError):
    """The executable of an external process does not exist."""

    def __init__(self, executable: str):
        self.executable = executable
        super().__init__(f"Executable not found: {executable}")
