"""
Log filters that attach request context to records.
"""

import logging
import threading
from typing import Any, Dict, Optional

_context = threading.local()


def set_correlation_id(correlation_id: str) -> None:
    """Set correlation ID for the current thread."""
    _context.correlation_id = correlation_id


def get_correlation_id() -> Optional[str]:
    return getattr(_context, 'correlation_id', None)


def clear_correlation_id() -> None:
    if hasattr(_context, 'correlation_id'):
        del _context.correlation_id


class CorrelationIdFilter(logging.Filter):
    """Adds ``correlation_id`` of the running request to every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        correlation_id = get_correlation_id()
        if correlation_id:
            record.correlation_id = correlation_id
        return True


class ExtraFieldsFilter(logging.Filter):
    """
    Adds static fields (service name, environment, ...) to every record.

    Fields already present on the record win.
    """

    def __init__(self, extra_fields: Dict[str, Any]):
        super().__init__()
        self.extra_fields = extra_fields

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in self.extra_fields.items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True
