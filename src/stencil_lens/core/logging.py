"""Structured logging for the plugin.

Log records go through structlog and are rendered by stdlib handlers, so a
host can redirect them (stderr, stdout or a log file) without touching code.
"""

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

import structlog

if TYPE_CHECKING:
    from stencil_lens.config import LoggingConfig

_LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

_HANDLER_NAME = "stencil_lens"


def _create_handler(destination: str) -> logging.Handler:
    """Create handler for stderr, stdout, or file path."""
    handler: logging.Handler
    if destination == "stderr":
        handler = logging.StreamHandler(sys.stderr)
    elif destination == "stdout":
        handler = logging.StreamHandler(sys.stdout)
    else:
        path = Path(destination)
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, mode="a")
    handler.set_name(_HANDLER_NAME)
    return handler


def configure_logging(
    *,
    config: Optional["LoggingConfig"] = None,
    level: str = "INFO",
) -> None:
    """Configure structlog. Pass config for format/destination, or just a level."""
    from stencil_lens.config import LoggingConfig

    if config is None:
        config = LoggingConfig(level=level)

    default_level = _LEVEL_MAP.get(config.level.upper(), logging.INFO)

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", key="timestamp"),
    ]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(default_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Don't cache - allows reconfiguration and respects level changes
        cache_logger_on_first_use=False,
    )

    renderer: structlog.types.Processor
    if config.format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    package_logger = logging.getLogger("stencil_lens")
    for existing in list(package_logger.handlers):
        if existing.get_name() == _HANDLER_NAME:
            package_logger.removeHandler(existing)
            existing.close()

    handler = _create_handler(config.destination)
    handler.setFormatter(formatter)
    package_logger.addHandler(handler)
    package_logger.setLevel(default_level)


def get_logger(name: Optional[str] = None) -> Any:
    """Get a structlog logger bound to `name`."""
    return structlog.get_logger(name)
