"""Core модули адаптера."""

from .config import AdapterOptions
from .exceptions import (
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
    classify_transport_exception,
)
from .message import Request, RequestSnapshot, Response, RateLimitInfo
from .transport import Transport, RequestsTransport
from .adapter import HttpClientAdapter

__all__ = [
    # Config
    "AdapterOptions",
    # Model
    "Request",
    "RequestSnapshot",
    "Response",
    "RateLimitInfo",
    # Transport
    "Transport",
    "RequestsTransport",
    # Core
    "HttpClientAdapter",
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
    "classify_transport_exception",
]
