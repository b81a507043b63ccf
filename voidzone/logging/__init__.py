"""
Structured Logging for voidzone
===============================

Bounded Context: Observability

JSON-structured logging with typed event names.

Public API
----------
    LogEvent: Typed event names (enum)
    StructuredLogger: JSON logger implementation
    create_logger: Factory function

Example:
    >>> from voidzone.logging import create_logger, LogEvent
    >>> logger = create_logger("detector")
    >>> logger.info(
    ...     event=LogEvent.VOID_ZONE_CREATED,
    ...     message="Created void zone",
    ...     metadata={'zone_id': 'ZVOID01', 'vertices': 142}
    ... )
"""

from .events import LogEvent
from .structured import StructuredLogger, create_logger

__all__ = [
    'LogEvent',
    'StructuredLogger',
    'create_logger',
]
