"""Process-wide logging setup for Drillbook.

Text or JSON-lines output, to stdout or a file. Call ``configure_logging``
once at startup (the CLI does this from ``AppConfig.logging``); library
code only ever asks for ``logging.getLogger(__name__)``.
"""

from __future__ import annotations

from datetime import UTC, datetime
import json
import logging
import sys
from typing import Any

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Attributes every LogRecord carries; anything else arrived via extra= or an adapter.
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))) | {
    "message",
    "asctime",
}


class StructuredJSONFormatter(logging.Formatter):
    """One JSON object per record: level, message, UTC timestamp, and a context dict.

    ``context`` always holds the logger name, module, function and line.
    Exception details (type, message, stack) and any ``extra=`` fields are
    merged into it.
    """

    def format(self, record: logging.LogRecord) -> str:
        context: dict[str, Any] = {
            "logger_name": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            exc_type, exc, _ = record.exc_info
            context["error_type"] = exc_type.__name__ if exc_type else None
            context["error_message"] = str(exc) if exc else None
            context["stack_trace"] = record.exc_text or self.formatException(record.exc_info)

        context.update(
            (key, value)
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS and not key.startswith("_")
        )

        return json.dumps(
            {
                "level": record.levelname,
                "message": record.getMessage(),
                "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
                "context": context,
            },
            default=str,
        )


def configure_logging(
    level: str = "INFO",
    format_string: str | None = None,
    filename: str | None = None,
    structured: bool = False,
) -> None:
    """Install a single root handler, replacing any existing ones.

    Safe to call again to reconfigure.

    Args:
        level: Level name, any case (e.g. "debug", "WARNING")
        format_string: ``logging.Formatter`` pattern for text output;
            unused when ``structured`` is True
        filename: Append to this file instead of writing to stdout
        structured: Emit JSON lines via StructuredJSONFormatter

    Example:
        >>> configure_logging(level="DEBUG", structured=True, filename="drill.jsonl")
    """
    handler: logging.Handler = (
        logging.FileHandler(filename) if filename else logging.StreamHandler(sys.stdout)
    )
    handler.setFormatter(
        StructuredJSONFormatter()
        if structured
        else logging.Formatter(format_string or DEFAULT_FORMAT)
    )

    logging.basicConfig(level=getattr(logging, level.upper()), handlers=[handler], force=True)


def get_logger(name: str, **context: Any) -> logging.Logger | logging.LoggerAdapter:
    """Module logger, wrapped in a LoggerAdapter when ``context`` is given.

    Example:
        >>> log = get_logger(__name__, chart_id=chart.id)
        >>> log.info("Saved")  # chart_id lands in the structured context
    """
    base = logging.getLogger(name)
    if context:
        return logging.LoggerAdapter(base, context)
    return base
