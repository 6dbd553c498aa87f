"""
Structured logger used by the adapter.
"""

import logging
from typing import Any, Optional

from .config import LoggingConfig
from .filters import CorrelationIdFilter, ExtraFieldsFilter
from .formatters import get_formatter
from .handlers import create_console_handler, create_file_handler
from ...utils.sanitizer import mask_sensitive_data


class AdapterLogger:
    """
    Thin wrapper over a stdlib logger.

    Keyword arguments become structured fields; values under sensitive keys
    (authorization, token, client_secret, ...) are masked before they reach
    a handler.

    Example:
        >>> logger = AdapterLogger(LoggingConfig.create(level="DEBUG"))
        >>> logger.info("Request completed", method="GET", status_code=200)
    """

    def __init__(self, config: Optional[LoggingConfig] = None, name: str = "github_http"):
        self.config = config or LoggingConfig()
        self.name = name
        self._closed = False

        level = getattr(logging, self.config.level.value)

        self._logger = logging.getLogger(name)
        self._logger.setLevel(level)
        self._logger.propagate = False
        self._logger.handlers.clear()

        filters = []
        if self.config.enable_correlation_id:
            filters.append(CorrelationIdFilter())
        if self.config.extra_fields:
            filters.append(ExtraFieldsFilter(self.config.extra_fields))

        formatter = get_formatter(self.config.format.value)

        if self.config.enable_console:
            self._logger.addHandler(create_console_handler(level, formatter, filters))

        if self.config.enable_file and self.config.file_path:
            self._logger.addHandler(create_file_handler(
                file_path=self.config.file_path,
                level=level,
                formatter=formatter,
                max_bytes=self.config.max_bytes,
                backup_count=self.config.backup_count,
                filters=filters
            ))

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def _log(self, level: int, message: str, fields: dict) -> None:
        self._logger.log(level, message, extra=mask_sensitive_data(fields))

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._log(logging.ERROR, message, kwargs)

    def close(self) -> None:
        """Flush and detach handlers. Safe to call twice."""
        if self._closed:
            return

        for handler in self._logger.handlers[:]:
            handler.flush()
            handler.close()
            self._logger.removeHandler(handler)

        self._closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
