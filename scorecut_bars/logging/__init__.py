"""
Structured Logging for Scorecut
===============================

Bounded Context: Observability

JSON-structured logging shared by every scorecut component.

Design:
- JSON output (one object per line)
- Typed events (enums prevent typos)
- Contextual metadata (page_number, index_in_document, etc.)
- Loggers live under the ``scorecut`` namespace; the level is inherited
  from it unless a component asks for its own

Public API
----------
    LogEvent: Typed event names (enum)
    StructuredLogger: JSON logger implementation
    create_logger: Factory function
    set_log_level: Set the level of the whole ``scorecut`` namespace

Example:
    >>> from scorecut_bars.logging import create_logger, LogEvent
    >>> logger = create_logger("session")
    >>> logger.info(
    ...     event=LogEvent.SYSTEM_COMPLETED,
    ...     message="Cut 6 bars",
    ...     metadata={'page_number': 1, 'bar_count': 6}
    ... )

Output:
    {
        "timestamp": "2025-10-24T15:30:45.123456+00:00",
        "level": "INFO",
        "component": "session",
        "event": "session.system_completed",
        "message": "Cut 6 bars",
        "metadata": {"page_number": 1, "bar_count": 6}
    }
"""

from .events import LogEvent
from .structured import (
    LOGGER_NAMESPACE,
    JSONFormatter,
    StructuredLogger,
    create_logger,
    set_log_level,
)

__all__ = [
    'LOGGER_NAMESPACE',
    'LogEvent',
    'JSONFormatter',
    'StructuredLogger',
    'create_logger',
    'set_log_level',
]
