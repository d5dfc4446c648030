"""YAML-backed configuration persistence."""

import logging
import shutil
from typing import Any

import yaml
from pydantic import BaseModel

from tubeaudio.config.models import TubeAudioConfig
from tubeaudio.system.path_resolver import PathResolver

logger = logging.getLogger(__name__)


def _known_keys(raw: dict[str, Any], model: type[BaseModel], prefix: str = "") -> dict[str, Any]:
    """Drop keys the model does not declare, descending into nested sections."""
    kept: dict[str, Any] = {}
    for key, value in raw.items():
        field = model.model_fields.get(key)
        if field is None:
            logger.warning("Ignoring unknown config key %s%s", prefix, key)
            continue
        section = field.annotation
        if (
            isinstance(value, dict)
            and isinstance(section, type)
            and issubclass(section, BaseModel)
        ):
            value = _known_keys(value, section, f"{prefix}{key}.")
        kept[key] = value
    return kept


class ConfigManager:
    """Reads and writes the service's YAML configuration file.

    The file is created with defaults on first load, so operators always have a
    complete file to edit.
    """

    def __init__(self, path_resolver: PathResolver | None = None):
        self.path_resolver = path_resolver or PathResolver()
        self.config_path = self.path_resolver.get_config_path()

    def load(self) -> TubeAudioConfig:
        """Return the validated configuration, writing a default file if none exists.

        Raises:
            pydantic.ValidationError: If a known key holds an invalid value
        """
        if not self.config_path.exists():
            self._write(TubeAudioConfig())
            logger.info("Wrote default configuration to %s", self.config_path)

        raw = yaml.safe_load(self.config_path.read_text()) or {}
        if not isinstance(raw, dict):
            logger.warning("Configuration %s is not a mapping, using defaults", self.config_path)
            raw = {}
        return TubeAudioConfig.model_validate(_known_keys(raw, TubeAudioConfig))

    def reload(self) -> TubeAudioConfig:
        return self.load()

    def save(self, config: TubeAudioConfig) -> None:
        """Persist ``config``, keeping the previous file as ``<name>.yaml.backup``."""
        if self.config_path.exists():
            backup = self.config_path.with_suffix(".yaml.backup")
            try:
                shutil.copy2(self.config_path, backup)
            except OSError as e:
                logger.warning("Could not back up %s: %s", self.config_path, e)
        self._write(config)
        logger.info("Saved configuration to %s", self.config_path)

    def _write(self, config: TubeAudioConfig) -> None:
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        self.config_path.write_text(
            yaml.safe_dump(
                config.model_dump(mode="json"), default_flow_style=False, sort_keys=False
            )
        )
