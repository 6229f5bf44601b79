"""
Logging setup for the analyzer.

Two output styles share one entry point: the human-readable pipe format
used during development and JSON lines for log shippers. Analysis
progress events are attached to records through the standard ``extra``
mechanism, so either formatter can render them.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional


TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-35s | %(message)s"
TEXT_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Loggers that are too chatty at INFO
NOISY_LOGGERS = ("httpcore", "httpx", "openai")

# Record attributes set by log_analysis_event
EVENT_ATTR = "analysis_event"
CONTEXT_ATTR = "analysis_context"


class StructuredFormatter(logging.Formatter):
    """
    Render each record as one JSON object.

    Keys: timestamp, level, logger, message, plus event/context when the
    record came from log_analysis_event and exception when exc_info is set.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        event = getattr(record, EVENT_ATTR, None)
        if event is not None:
            entry["event"] = event
            entry["context"] = getattr(record, CONTEXT_ATTR, {})

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


def setup_logging(
    level: int = logging.INFO,
    json_output: bool = False,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """
    Configure the root logger for the service.

    Args:
        level: Root logging level
        json_output: Emit JSON lines instead of the pipe format
        log_file: Also write to this file when given

    Returns:
        The root logger.
    """
    formatter: logging.Formatter
    if json_output:
        formatter = StructuredFormatter()
    else:
        formatter = logging.Formatter(TEXT_FORMAT, datefmt=TEXT_DATEFMT)

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    for handler in handlers:
        handler.setFormatter(formatter)

    # force=True replaces handlers installed by earlier basicConfig calls
    logging.basicConfig(level=level, handlers=handlers, force=True)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return logging.getLogger()


def log_analysis_event(
    event: str,
    state: Mapping[str, Any],
    extra: Optional[Dict[str, Any]] = None,
    logger: Optional[logging.Logger] = None,
) -> None:
    """
    Log a named analysis progress event with a summary of the graph state.

    Args:
        event: Event name, e.g. "agent_complete"
        state: Analysis graph state; only session, cursor and result count are kept
        extra: Additional context merged into the summary
        logger: Destination logger, "analyzer" by default
    """
    logger = logger or logging.getLogger("analyzer")

    context: Dict[str, Any] = {
        "session_id": state.get("session_id"),
        "agent_index": state.get("agent_index"),
        "results": len(state.get("results") or []),
    }
    if extra:
        context.update(extra)

    logger.info(
        f"Analysis event: {event}",
        extra={EVENT_ATTR: event, CONTEXT_ATTR: context},
    )
