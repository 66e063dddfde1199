import logging
import sys
from typing import TextIO

import structlog

DEFAULT_LOGGER_NAME = "launchrank"


def build_processors(colors: bool) -> list:
    return [
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="%H:%M:%S"),
        structlog.dev.ConsoleRenderer(colors=colors),
    ]


def configure_logging(level: str = "INFO", file: TextIO | None = None, colors: bool | None = None):
    """Route launchrank logs to `file` (stderr by default), dropping records below `level`."""
    file = sys.stderr if file is None else file
    if colors is None:
        colors = file.isatty()
    structlog.configure(
        processors=build_processors(colors),
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(level.upper())),
        logger_factory=structlog.WriteLoggerFactory(file=file),
    )


def get_logger(name: str | None = None, **context):
    """Logger tagged with its module name plus any fixed context, e.g. a component."""
    return structlog.get_logger(logger=name or DEFAULT_LOGGER_NAME, **context)
