"""Structured logging configuration using structlog."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars, merge_contextvars

if TYPE_CHECKING:
    from cinode_core.config.settings import Settings

# Loggers whose request lines would flood the console during batch syncs
NOISY_LOGGERS = ("httpx", "httpcore")

_LEVELS: dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def configure_logging(settings: Settings) -> None:
    """Route structlog and stdlib logging through one handler set.

    The console gets the renderer chosen by log_format. When log_file is
    set, a second handler appends JSON lines to that file regardless of
    the console format.
    """
    pre_chain: list[structlog.types.Processor] = [
        merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    console = logging.StreamHandler()
    console.setFormatter(_formatter(settings.log_format, pre_chain))
    handlers: list[logging.Handler] = [console]

    log_file = settings.log_file
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(_formatter("json", pre_chain))
        handlers.append(file_handler)

    level = _resolve_level(settings.log_level)
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    for handler in handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def _formatter(
    log_format: str, pre_chain: list[structlog.types.Processor]
) -> structlog.stdlib.ProcessorFormatter:
    """ProcessorFormatter rendering JSON or colored console lines."""
    renderer: structlog.types.Processor
    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()
    return structlog.stdlib.ProcessorFormatter(
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        foreign_pre_chain=pre_chain,
    )


def bind_command_context(command: str) -> None:
    """Attach the running CLI command to every later log entry."""
    bind_contextvars(command=command)


def clear_command_context() -> None:
    """Drop everything bound with bind_command_context."""
    clear_contextvars()


def _resolve_level(level_name: str) -> int:
    """Level name to logging level, INFO for unknown names."""
    return _LEVELS.get(level_name.upper(), logging.INFO)
