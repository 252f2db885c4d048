"""
Structured JSON Logger
======================

One JSON object per record, emitted through the ``scorecut`` logger tree.

Design:
- The record message is the JSON entry itself, so any handler (or pytest's
  caplog) sees the same payload a log aggregator would
- Components log typed events (LogEvent), never free-form names
- Fixed context (page_number, target directory, ...) is attached once with
  bind() and merged into every entry's metadata
- Levels are inherited from the ``scorecut`` namespace unless a component
  sets its own; set_log_level() adjusts the whole tree
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional, Union

from .events import LogEvent

LOGGER_NAMESPACE = "scorecut"

_LEVEL_NAMES = {
    logging.DEBUG: 'DEBUG',
    logging.INFO: 'INFO',
    logging.WARNING: 'WARNING',
    logging.ERROR: 'ERROR',
}


class JSONFormatter(logging.Formatter):
    """Passes the pre-serialized entry through unchanged."""

    def format(self, record: logging.LogRecord) -> str:
        return record.getMessage()


class StructuredLogger:
    """
    Component logger writing JSON entries.

    Attributes:
        component: Component name (e.g., "partition", "session")
        context: Metadata merged into every entry
        logger: Underlying ``scorecut.<component>`` logger

    Example:
        >>> logger = StructuredLogger("partition")
        >>> logger.warning(
        ...     event=LogEvent.BAR_SKIPPED,
        ...     message="Break point could not be projected",
        ...     metadata={'index_in_row': 3}
        ... )
    """

    def __init__(
        self,
        component: str,
        level: Optional[int] = None,
        logger_name: Optional[str] = None,
        context: Optional[Mapping[str, Any]] = None,
    ):
        self.component = component
        self.context: Dict[str, Any] = dict(context or {})
        self.logger = logging.getLogger(logger_name or f"{LOGGER_NAMESPACE}.{component}")
        if level is not None:
            self.logger.setLevel(level)

        # first logger of a component installs the stream handler
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(JSONFormatter())
            self.logger.addHandler(handler)

    def bind(self, **context: Any) -> "StructuredLogger":
        """
        Logger for the same component with extra fixed metadata.

        The underlying logger (and its handlers) is shared.
        """
        return StructuredLogger(
            self.component,
            logger_name=self.logger.name,
            context={**self.context, **context},
        )

    def log(
        self,
        level: int,
        event: LogEvent,
        message: str,
        metadata: Optional[Mapping[str, Any]] = None,
        exc_info: Optional[BaseException] = None,
    ) -> None:
        if not self.logger.isEnabledFor(level):
            return

        entry: Dict[str, Any] = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': _LEVEL_NAMES.get(level, logging.getLevelName(level)),
            'component': self.component,
            'event': event.value,
            'message': message,
        }
        merged = {**self.context, **(metadata or {})}
        if merged:
            entry['metadata'] = merged
        if exc_info is not None:
            entry['exception'] = {
                'type': type(exc_info).__name__,
                'message': str(exc_info),
            }

        self.logger.log(level, json.dumps(entry, default=str), exc_info=exc_info)

    def debug(self, event: LogEvent, message: str, metadata: Optional[Mapping[str, Any]] = None) -> None:
        self.log(logging.DEBUG, event, message, metadata)

    def info(self, event: LogEvent, message: str, metadata: Optional[Mapping[str, Any]] = None) -> None:
        self.log(logging.INFO, event, message, metadata)

    def warning(self, event: LogEvent, message: str, metadata: Optional[Mapping[str, Any]] = None) -> None:
        self.log(logging.WARNING, event, message, metadata)

    def error(
        self,
        event: LogEvent,
        message: str,
        metadata: Optional[Mapping[str, Any]] = None,
        exc_info: Optional[BaseException] = None,
    ) -> None:
        """Log an ERROR entry; ``exc_info`` adds the exception type and message."""
        self.log(logging.ERROR, event, message, metadata, exc_info)

    def __repr__(self) -> str:
        return f"StructuredLogger(component={self.component!r}, logger={self.logger.name!r})"


def create_logger(component: str, level: Optional[int] = None) -> StructuredLogger:
    """Logger for a scorecut component (level inherited unless given)."""
    return StructuredLogger(component=component, level=level)


def set_log_level(level: Union[int, str]) -> None:
    """
    Set the level of every logger under the scorecut namespace.

    Raises:
        ValueError: If ``level`` is not a known level name
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")
        level = resolved
    logging.getLogger(LOGGER_NAMESPACE).setLevel(level)
