"""Bounded execution of external command-line tools."""

import logging
import os
import signal
import subprocess
import tempfile
from dataclasses import dataclass
from typing import IO

from tubeaudio.exceptions import ProcessNotFoundError, ProcessTimeoutError

logger = logging.getLogger(__name__)

DEFAULT_MAX_OUTPUT_BYTES = 10 * 1024 * 1024


@dataclass(frozen=True)
class ProcessResult:
    """Outcome of one external process invocation."""

    returncode: int
    stdout: str
    stderr: str
    truncated: bool = False

    @property
    def ok(self) -> bool:
        """Whether the process exited with status zero."""
        return self.returncode == 0


class ProcessRunner:
    """Runs external commands with a timeout and a cap on captured output.

    Output is spooled to temporary files rather than pipes, so memory use is
    bounded by ``max_output_bytes`` no matter how chatty the tool is.
    """

    def __init__(self, max_output_bytes: int = DEFAULT_MAX_OUTPUT_BYTES) -> None:
        self.max_output_bytes = max_output_bytes

    def run(self, command: list[str], timeout: float) -> ProcessResult:
        """Run ``command`` to completion or until ``timeout`` seconds elapse.

        Args:
            command: Executable followed by its arguments (never a shell string)
            timeout: Wall-clock budget in seconds; the child and its own children
                are killed when exceeded

        Returns:
            ProcessResult with decoded stdout/stderr

        Raises:
            ProcessTimeoutError: If the process did not finish in time
            ProcessNotFoundError: If the executable does not exist
        """
        logger.debug("Running %s (timeout %ss)", command[0], timeout)
        with tempfile.TemporaryFile() as stdout_file, tempfile.TemporaryFile() as stderr_file:
            try:
                process = subprocess.Popen(
                    command,
                    stdin=subprocess.DEVNULL,
                    stdout=stdout_file,
                    stderr=stderr_file,
                    start_new_session=True,
                )
            except FileNotFoundError as e:
                raise ProcessNotFoundError(command[0]) from e

            try:
                returncode = process.wait(timeout=timeout)
            except subprocess.TimeoutExpired as e:
                self._kill_group(process)
                logger.warning("%s timed out after %ss", command[0], timeout)
                raise ProcessTimeoutError(command, timeout) from e

            stdout, stdout_truncated = self._read_bounded(stdout_file)
            stderr, stderr_truncated = self._read_bounded(stderr_file)

        truncated = stdout_truncated or stderr_truncated
        if truncated:
            logger.warning(
                "Output of %s exceeded %d bytes and was truncated",
                command[0],
                self.max_output_bytes,
            )
        return ProcessResult(
            returncode=returncode,
            stdout=stdout,
            stderr=stderr,
            truncated=truncated,
        )

    @staticmethod
    def _kill_group(process: subprocess.Popen) -> None:
        """Kill the process and anything it spawned, such as a transcoder child."""
        try:
            os.killpg(process.pid, signal.SIGKILL)
        except ProcessLookupError:
            pass
        process.wait()

    def _read_bounded(self, handle: IO[bytes]) -> tuple[str, bool]:
        """Read at most ``max_output_bytes`` from a spooled output file."""
        size = handle.seek(0, 2)
        handle.seek(0)
        data = handle.read(self.max_output_bytes)
        return data.decode("utf-8", errors="replace"), size > self.max_output_bytes
