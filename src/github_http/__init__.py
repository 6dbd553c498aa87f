"""GitHub HTTP adapter - listener based request/response pipeline over a pluggable transport."""

import logging
from importlib.metadata import version, PackageNotFoundError

from .core.adapter import HttpClientAdapter
from .core.config import AdapterOptions
from .core.settings import AdapterSettings, load_options_from_env
from .core.message import Request, RequestSnapshot, Response, RateLimitInfo
from .core.transport import Transport, RequestsTransport
from .core.exceptions import (
    ErrorKind,
    AdapterException,
    ConfigurationError,
    TransportError,
    MalformedRequestError,
    TransportIOError,
    RequestTimeoutError,
    NetworkConnectionError,
    ApiError,
    UnauthorizedError,
    NotFoundError,
    ValidationFailedError,
    RateLimitExceededError,
    ServerError,
    InvalidResponseError,
)
from .core.logging import LoggingConfig
from .listeners import (
    Listener,
    ListenerKind,
    AuthListener,
    AuthMethod,
    ErrorListener,
)

# Users can configure logging themselves using logging.getLogger('github_http')
logging.getLogger('github_http').addHandler(logging.NullHandler())

try:
    __version__ = version("github-http-adapter")
except PackageNotFoundError:
    # Package is not installed (development mode)
    __version__ = "0.0.0-dev"

__all__ = [
    # Core
    "HttpClientAdapter",
    "AdapterOptions",
    "AdapterSettings",
    "load_options_from_env",
    "LoggingConfig",

    # Model
    "Request",
    "RequestSnapshot",
    "Response",
    "RateLimitInfo",

    # Transport
    "Transport",
    "RequestsTransport",

    # Listeners
    "Listener",
    "ListenerKind",
    "AuthListener",
    "AuthMethod",
    "ErrorListener",

    # Exceptions
    "ErrorKind",
    "AdapterException",
    "ConfigurationError",
    "TransportError",
    "MalformedRequestError",
    "TransportIOError",
    "RequestTimeoutError",
    "NetworkConnectionError",
    "ApiError",
    "UnauthorizedError",
    "NotFoundError",
    "ValidationFailedError",
    "RateLimitExceededError",
    "ServerError",
    "InvalidResponseError",

    "__version__",
]
