"""Structured logging for the rules engine.

Engine modules log key/value events through structlog (``"Dice rolled"``,
``"Damage applied"``, ``"Next turn"``). Events are routed through the
standard library's logging tree, so an embedding application sees them
on the ``arcane_engine.*`` loggers alongside its own records.

The console gets either a readable or a JSON rendering; an optional log
file always receives one JSON object per line so an encounter can be
replayed from its dice and state events. Every event logged while a
combat operation runs carries that encounter's ``combat_id`` and round.

Example:
    >>> configure_logging_from_settings(get_settings())
    >>> logger = get_logger(__name__)
    >>> with combat_context("c0ffee", round=2):
    ...     logger.info("Damage applied", target="Goblin 1", amount=7)
"""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

import structlog
from structlog.types import Processor


if TYPE_CHECKING:
    from collections.abc import Iterator

    from structlog.types import EventDict, WrappedLogger

    from arcane_engine.core.config import Settings


ENGINE_LOGGER = "arcane_engine"


def add_engine_context(app_name: str, app_version: str | None = None) -> Processor:
    """Build a processor stamping the engine name and version on events.

    Args:
        app_name: Value for the ``app`` key.
        app_version: Value for the ``version`` key, omitted when None.

    Returns:
        A structlog processor.
    """

    def processor(
        logger: WrappedLogger,
        method_name: str,
        event_dict: EventDict,
    ) -> EventDict:
        event_dict.setdefault("app", app_name)
        if app_version is not None:
            event_dict.setdefault("version", app_version)
        return event_dict

    return processor


def _formatter(pre_chain: list[Processor], *renderers: Processor) -> logging.Formatter:
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=pre_chain,
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, *renderers],
    )


def configure_logging(
    *,
    level: str = "INFO",
    json_format: bool = False,
    log_file: str | None = None,
    app_name: str = ENGINE_LOGGER,
    app_version: str | None = None,
) -> None:
    """Configure engine logging.

    Replaces any handlers on the root logger with a stdout handler and,
    when ``log_file`` is given, a JSON lines file handler.

    Args:
        level: The logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_format: Render console output as JSON instead of text.
        log_file: Optional path receiving every event as JSON.
        app_name: Name stamped on each event.
        app_version: Version stamped on each event.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_engine_context(app_name, app_version),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    json_renderers: list[Processor] = [
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]
    console_renderers: list[Processor] = json_renderers if json_format else [
        structlog.dev.ConsoleRenderer(
            colors=sys.stdout.isatty(),
            exception_formatter=structlog.dev.plain_traceback,
        ),
    ]

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(_formatter(shared_processors, *console_renderers))
    handlers: list[logging.Handler] = [console]

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(_formatter(shared_processors, *json_renderers))
        handlers.append(file_handler)

    logging.basicConfig(level=numeric_level, handlers=handlers, force=True)

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Engine modules hold module-level loggers; reconfiguring must reach them
        cache_logger_on_first_use=False,
    )


def configure_logging_from_settings(settings: Settings) -> None:
    """Configure engine logging from the engine settings.

    Args:
        settings: Settings supplying level, format, log file and version.
    """
    configure_logging(
        level=settings.log_level,
        json_format=settings.json_logs,
        log_file=settings.log_file,
        app_version=settings.app_version,
    )


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a logger, typically ``get_logger(__name__)``."""
    return structlog.get_logger(name)


@contextmanager
def combat_context(combat_id: str, **context: Any) -> Iterator[None]:
    """Tag every event logged inside the block with an encounter id.

    Context bound by an enclosing block is restored on exit, so nested
    combat operations do not leak their round into the caller's events.

    Args:
        combat_id: Id of the encounter being resolved.
        **context: Extra key/value pairs, such as the round number.
    """
    with structlog.contextvars.bound_contextvars(combat_id=combat_id, **context):
        yield


__all__ = [
    "ENGINE_LOGGER",
    "add_engine_context",
    "configure_logging",
    "configure_logging_from_settings",
    "get_logger",
    "combat_context",
]
