"""
Logging system for the adapter.

Example:
    >>> from github_http import HttpClientAdapter
    >>> from github_http.core.logging import LoggingConfig
    >>>
    >>> adapter = HttpClientAdapter({"logging": LoggingConfig.create(level="DEBUG", format="json")})
"""

from .config import LoggingConfig, LogLevel, LogFormat
from .logger import AdapterLogger
from .formatters import JSONFormatter, TextFormatter, get_formatter
from .filters import (
    CorrelationIdFilter,
    ExtraFieldsFilter,
    set_correlation_id,
    get_correlation_id,
    clear_correlation_id,
)
from .handlers import create_console_handler, create_file_handler

__all__ = [
    "LoggingConfig",
    "LogLevel",
    "LogFormat",
    "AdapterLogger",
    "JSONFormatter",
    "TextFormatter",
    "get_formatter",
    "CorrelationIdFilter",
    "ExtraFieldsFilter",
    "set_correlation_id",
    "get_correlation_id",
    "clear_correlation_id",
    "create_console_handler",
    "create_file_handler",
]
