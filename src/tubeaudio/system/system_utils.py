import os
import subprocess
from pathlib import Path


class SystemUtils:
    """Facts about the host the service runs on, used to label log output."""

    @staticmethod
    def is_docker_environment() -> bool:
        """Check if running in a container."""
        return Path("/.dockerenv").exists() or os.environ.get("DOCKER_CONTAINER") == "true"

    @staticmethod
    def is_development_environment() -> bool:
        """Check if TUBEAUDIO_ENV marks this as a development checkout."""
        return os.environ.get("TUBEAUDIO_ENV", "production") == "development"

    @staticmethod
    def get_git_version() -> str:
        """Describe the running code as ``<ref>@<short sha>``.

        ``TUBEAUDIO_VERSION`` wins when set (release images have no .git);
        otherwise git is asked, and ``unknown`` is returned when that fails.
        """
        if version := os.environ.get("TUBEAUDIO_VERSION"):
            return version
        try:
            result = subprocess.run(
                ["git", "log", "-1", "--format=%D|%h", "--abbrev=8"],
                capture_output=True,
                text=True,
                timeout=5,
            )
        except (subprocess.SubprocessError, OSError):
            return "unknown"
        if result.returncode != 0 or "|" not in result.stdout:
            return "unknown"

        refs, sha = result.stdout.strip().split("|", 1)
        # "HEAD -> main, origin/main" names the checked out branch first
        ref = refs.split(",")[0].replace("HEAD -> ", "").strip() or "detached"
        return f"{ref}@{sha}"

    @staticmethod
    def get_deployment_environment() -> str:
        """Return ``docker``, ``development`` or ``unknown``."""
        if SystemUtils.is_docker_environment():
            return "docker"
        if SystemUtils.is_development_environment():
            return "development"
        return "unknown"
