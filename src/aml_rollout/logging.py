"""
Structured logging configuration for aml-rollout.

Every Azure CLI call emits one structured event. Captured CLI output can be
large JSON documents, so it is truncated before rendering.
"""

import logging
import sys
from typing import Any, Dict, Optional, cast

import structlog
from structlog.types import FilteringBoundLogger

DEFAULT_MAX_OUTPUT_CHARS = 2000
CONSOLE_HANDLER_NAME = "aml-rollout-console"


class OutputTruncationProcessor:
    """
    Structlog processor that shortens captured command output.

    Only the fields listed in ``OUTPUT_FIELDS`` are touched; everything else
    in the event dictionary passes through unchanged.
    """

    OUTPUT_FIELDS = {"stdout", "stderr", "output", "error"}

    def __init__(self, max_chars: int = DEFAULT_MAX_OUTPUT_CHARS):
        self.max_chars = max_chars

    def __call__(
        self, logger: FilteringBoundLogger, method_name: str, event_dict: Dict[str, Any]
    ) -> Dict[str, Any]:
        """
        Truncate output fields in the event.

        Args:
            logger: Structlog logger instance
            method_name: Log method name (info, error, etc.)
            event_dict: Event dictionary to process

        Returns:
            Event dictionary with long output fields truncated
        """
        for key in self.OUTPUT_FIELDS:
            value = event_dict.get(key)
            if isinstance(value, str):
                event_dict[key] = self._truncate(value.strip())
        return event_dict

    def _truncate(self, text: str) -> str:
        if self.max_chars <= 0 or len(text) <= self.max_chars:
            return text
        omitted = len(text) - self.max_chars
        return f"{text[: self.max_chars]}...[{omitted} chars truncated]"


def setup_logging(
    log_level: str = "INFO",
    log_format: str = "console",
    max_output_chars: int = DEFAULT_MAX_OUTPUT_CHARS,
    stream: Optional[Any] = None,
) -> None:
    """
    Set up structured logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Log format (console, json)
        max_output_chars: Maximum length of captured command output in events
        stream: Stream for the console handler, stdout by default
    """
    level = getattr(logging, log_level.upper())

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        OutputTruncationProcessor(max_output_chars),
    ]

    if log_format == "json":
        processors.extend(
            [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]
        )
    else:
        processors.extend([structlog.dev.ConsoleRenderer(colors=False)])

    structlog.configure(
        processors=processors,  # type: ignore[arg-type]
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.set_name(CONSOLE_HANDLER_NAME)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s"))

    logging.basicConfig(level=level, handlers=[handler], force=True)


def set_log_stream(stream: Any) -> None:
    """
    Point the console handlers installed by ``setup_logging`` at another stream.

    Level, format and processors stay as configured.
    """
    for handler in logging.getLogger().handlers:
        if isinstance(handler, logging.StreamHandler) and handler.get_name() == CONSOLE_HANDLER_NAME:
            handler.setStream(stream)


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a structured logger.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger
    """
    return cast(FilteringBoundLogger, structlog.get_logger(name))
