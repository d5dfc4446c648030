"""Logging setup shared by the web service and the CLIs.

Both structlog loggers and plain ``logging.getLogger`` loggers end up on one
stdout handler, rendered as JSON inside containers and as colourised console
lines elsewhere.
"""

import logging
import os
import sys
from collections.abc import Callable
from typing import Any

import structlog

from tubeaudio.config.models import TubeAudioConfig
from tubeaudio.system.system_utils import SystemUtils


def _add_static_context(extra_fields: dict[str, str]) -> Callable:
    """Processor stamping the same fields onto every event."""

    def processor(
        logger: structlog.BoundLogger, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        for key, value in extra_fields.items():
            event_dict.setdefault(key, value)
        return event_dict

    return processor


def _shared_processors(config: TubeAudioConfig) -> list:
    static = {
        "service": "tubeaudio",
        "version": SystemUtils.get_git_version(),
        "deployment": SystemUtils.get_deployment_environment(),
        "site_name": config.site_name,
        **config.logging.extra_fields,
    }
    processors = [
        structlog.contextvars.merge_contextvars,
        _add_static_context({k: v for k, v in static.items() if v}),
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    if config.logging.include_caller:
        processors.append(
            structlog.processors.CallsiteParameterAdder(
                {
                    structlog.processors.CallsiteParameter.MODULE,
                    structlog.processors.CallsiteParameter.LINENO,
                }
            )
        )
    return processors


def _renderer(config: TubeAudioConfig, is_docker: bool, is_development: bool) -> Callable:
    use_json = config.logging.json_logs if config.logging.json_logs is not None else is_docker
    if is_development and os.environ.get("TUBEAUDIO_JSON_LOGS", "false").lower() == "true":
        use_json = True
    if use_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())


def configure_structlog(config: TubeAudioConfig) -> None:
    """Route structlog and standard library logging through one stdout handler.

    Args:
        config: Loaded configuration; only the ``logging`` section and
            ``site_name`` are used.
    """
    level = getattr(logging, config.logging.level.upper(), logging.INFO)
    shared = _shared_processors(config)
    renderer = _renderer(
        config, SystemUtils.is_docker_environment(), SystemUtils.is_development_environment()
    )

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )
    root = logging.getLogger()
    for existing in root.handlers[:]:
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)

    structlog.get_logger(__name__).info(
        "Logging configured",
        level=config.logging.level,
        json=isinstance(renderer, structlog.processors.JSONRenderer),
    )
