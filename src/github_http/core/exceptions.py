"""
Иерархия исключений адаптера.

Классификация:
- TransportError - запрос не дошёл до API (ошибка транспорта)
- ApiError - обмен состоялся, но API сообщил о логической ошибке
- ConfigurationError - неверные опции или учётные данные

Каждое исключение несёт ``kind`` (ErrorKind), по которому вызывающий код
должен ветвиться вместо анализа статус кода.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

import requests

from ..utils.sanitizer import mask_string, mask_url

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# BASE
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


class ErrorKind(str, Enum):
    """Тип ошибки."""
    MALFORMED = "malformed"
    TRANSPORT = "transport"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    VALIDATION_FAILED = "validation_failed"
    RATE_LIMIT_EXCEEDED = "rate_limit_exceeded"
    SERVER_ERROR = "server_error"
    API_ERROR = "api_error"
    CONFIGURATION = "configuration"


class AdapterException(Exception):
    """Базовое исключение адаптера."""

    kind: ErrorKind = ErrorKind.API_ERROR
    retryable: bool = False

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ConfigurationError(AdapterException):
    """Ошибка конфигурации (опции, учётные данные)."""
    kind = ErrorKind.CONFIGURATION

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# TRANSPORT
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


class TransportError(AdapterException):
    """
    Ошибка на уровне транспорта.

    Args:
        message: Сообщение об ошибке
        url: URL запроса
    """

    def __init__(self, message: str, url: Optional[str] = None):
        self.url = url
        full_message = message
        if url:
            full_message += f" (url: {url})"
        # Текст исключения requests тоже может содержать query string запроса
        super().__init__(mask_string(full_message))


class MalformedRequestError(TransportError):
    """
    Запрос отвергнут транспортом как некорректный.

    Примеры: невалидный URL, отсутствует схема, битый заголовок.
    """
    kind = ErrorKind.MALFORMED


class TransportIOError(TransportError):
    """Сетевая или runtime ошибка при отправке."""
    kind = ErrorKind.TRANSPORT
    retryable = True


class RequestTimeoutError(TransportIOError):
    """
    Таймаут запроса.

    Args:
        message: Сообщение об ошибке
        url: URL запроса
        timeout: Значение таймаута (сек)
    """

    def __init__(self, message: str, url: Optional[str] = None, timeout: Optional[float] = None):
        self.timeout = timeout
        if timeout:
            message += f" (timeout: {timeout}s)"
        super().__init__(message, url)


class NetworkConnectionError(TransportIOError):
    """
    Ошибка подключения.

    Примеры:
    - Connection refused
    - DNS resolution failed
    - TLS handshake failed
    """
    pass

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# API
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


class ApiError(AdapterException):
    """
    Ошибка, о которой сообщил API.

    Args:
        status_code: HTTP статус
        url: URL
        message: Сообщение (обычно поле ``message`` из тела ответа)
        body: Тело ответа (для диагностики)
    """

    def __init__(self, status_code: int, url: str, message: str = "", body: Any = None):
        self.status_code = status_code
        self.url = url
        self.body = body

        # URL может содержать client_secret из query string
        msg = f"HTTP {status_code} error for {mask_url(url) if url else url}"
        if message:
            msg += f": {message}"

        super().__init__(msg)
        self.api_message = message


class UnauthorizedError(ApiError):
    """401 Unauthorized / 403 Forbidden."""
    kind = ErrorKind.UNAUTHORIZED


class NotFoundError(ApiError):
    """404 Not Found."""
    kind = ErrorKind.NOT_FOUND


class ServerError(ApiError):
    """5xx ошибка сервера."""
    kind = ErrorKind.SERVER_ERROR
    retryable = True


class ValidationFailedError(ApiError):
    """
    422 (или 400) с описанием ошибок полей.

    Args:
        status_code: HTTP статус
        url: URL
        message: Сообщение API (например "Validation Failed")
        errors: Список ошибок полей как пришёл от API
        body: Тело ответа
    """
    kind = ErrorKind.VALIDATION_FAILED

    def __init__(
        self,
        status_code: int,
        url: str,
        message: str = "",
        errors: Optional[List[Dict[str, Any]]] = None,
        body: Any = None
    ):
        self.errors = list(errors or [])
        self.error_messages = [describe_field_error(error) for error in self.errors]

        details = message
        if self.error_messages:
            details = f"{message}: {', '.join(self.error_messages)}" if message else ', '.join(self.error_messages)

        super().__init__(status_code, url, details, body)
        self.api_message = message


class RateLimitExceededError(ApiError):
    """
    Исчерпан лимит запросов к API.

    Args:
        status_code: HTTP статус
        url: URL
        limit: Потолок запросов (из X-RateLimit-Limit или опции api_limit)
        remaining: Остаток (X-RateLimit-Remaining)
        reset: Unix время сброса лимита (X-RateLimit-Reset)
    """
    kind = ErrorKind.RATE_LIMIT_EXCEEDED
    retryable = True

    def __init__(
        self,
        status_code: int,
        url: str,
        limit: Optional[int] = None,
        remaining: Optional[int] = None,
        reset: Optional[int] = None,
        body: Any = None
    ):
        self.limit = limit
        self.remaining = remaining
        self.reset = reset

        message = "API rate limit exceeded"
        if limit is not None:
            message += f" (limit: {limit})"
        if reset is not None:
            message += f", resets at {reset}"

        super().__init__(status_code, url, message, body)


class InvalidResponseError(AdapterException):
    """Тело ответа не удалось разобрать как JSON."""
    kind = ErrorKind.API_ERROR

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# УТИЛИТЫ
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

_FIELD_ERROR_TEMPLATES = {
    'missing': 'Resource "{resource}" not exists anymore',
    'missing_field': 'Field "{field}" is missing, for resource "{resource}"',
    'invalid': 'Field "{field}" is invalid, for resource "{resource}"',
    'already_exists': 'Field "{field}" already exists, for resource "{resource}"',
}


def describe_field_error(error: Any) -> str:
    """
    Превратить элемент ``errors`` из ответа API в читаемую строку.

    Examples:
        >>> describe_field_error({"code": "missing_field", "field": "title", "resource": "Issue"})
        'Field "title" is missing, for resource "Issue"'
        >>> describe_field_error({"field": "name"})
        'name'
    """
    if not isinstance(error, dict):
        return str(error)

    template = _FIELD_ERROR_TEMPLATES.get(error.get('code'))
    if template:
        return template.format(
            resource=error.get('resource', ''),
            field=error.get('field', ''),
        )

    if error.get('message'):
        return str(error['message'])
    if error.get('field'):
        return str(error['field'])
    return str(error)


# Ошибки программиста: запрос нельзя отправить в принципе
_MALFORMED_REQUEST_EXCEPTIONS = (
    requests.exceptions.MissingSchema,
    requests.exceptions.InvalidSchema,
    requests.exceptions.InvalidURL,
    requests.exceptions.InvalidHeader,
    requests.exceptions.URLRequired,
    ValueError,
    TypeError,
    LookupError,
)

# Всё, что транспорт может бросить при отправке
TRANSPORT_FAILURES = (
    requests.exceptions.RequestException,
    ValueError,
    TypeError,
    LookupError,
    OSError,
    RuntimeError,
)


def classify_transport_exception(
    exc: Exception,
    url: str,
    timeout: Optional[float] = None
) -> TransportError:
    """
    Конвертировать исключение транспорта в наше.

    Args:
        exc: Исключение из транспорта (requests или builtin)
        url: URL запроса
        timeout: Таймаут транспорта (для сообщения)

    Returns:
        MalformedRequestError для логических ошибок,
        TransportIOError (или подкласс) для сетевых/runtime ошибок

    Examples:
        >>> err = classify_transport_exception(requests.exceptions.Timeout(), "https://api.github.com")
        >>> assert isinstance(err, RequestTimeoutError)
        >>> assert err.kind is ErrorKind.TRANSPORT
    """
    if isinstance(exc, TransportError):
        return exc

    detail = str(exc) or type(exc).__name__

    if isinstance(exc, requests.exceptions.Timeout):
        return RequestTimeoutError(f"Request timeout: {detail}", url, timeout)

    if isinstance(exc, _MALFORMED_REQUEST_EXCEPTIONS):
        return MalformedRequestError(f"Malformed request: {detail}", url)

    if isinstance(exc, requests.exceptions.ConnectionError):
        return NetworkConnectionError(f"Connection error: {detail}", url)

    return TransportIOError(f"Transport failure: {detail}", url)
