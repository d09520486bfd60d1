"""Structured logging for the relay (structlog over the standard library).

Production renders one JSON object per line; other environments use the
console renderer. Every event carries the service name and version, and
Gemini API keys are masked wherever they show up in a string value.
"""

import logging
import re
import sys

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from phish_relay import __version__

SERVICE_NAME = "phish-relay"

# Gemini takes the key as a query parameter, so it leaks through URLs
_KEY_PARAM = re.compile(r"([?&]key=)[^&\s'\"]+")

# Libraries that log every request line (URL included) at INFO
_NOISY_LOGGERS = ("httpx", "httpcore", "asyncio", "uvicorn.access")


def add_service_context(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Tag events with the service name and version."""
    event_dict.setdefault("service", SERVICE_NAME)
    event_dict.setdefault("version", __version__)
    return event_dict


def mask_api_keys(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Replace `key=<secret>` query values in string fields with `key=***`."""
    for name, value in event_dict.items():
        if isinstance(value, str) and "key=" in value:
            event_dict[name] = _KEY_PARAM.sub(r"\1***", value)
    return event_dict


def _shared_processors(is_production: bool) -> list[Processor]:
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        add_service_context,
    ]
    if is_production:
        # Tracebacks become a string field, so they get masked too
        processors.append(structlog.processors.format_exc_info)
    processors.append(mask_api_keys)
    return processors


def configure_logging(log_level: str = "INFO", environment: str = "development") -> None:
    """Install structlog and a single stdout handler on the root logger.

    Args:
        log_level: Level name; unknown names fall back to INFO
        environment: "production" selects the JSON renderer
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    is_production = environment.lower() == "production"
    shared = _shared_processors(is_production)

    renderer: Processor
    if is_production:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())

    structlog.configure(
        processors=shared + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=shared)
    )
    handler.setLevel(level)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.get_logger(__name__).info(
        "Logging configured",
        log_level=logging.getLevelName(level),
        environment=environment,
        renderer="json" if is_production else "console",
    )
