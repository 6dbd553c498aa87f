# src/github_http/listeners/error_listener.py

from typing import Any

from ..core.exceptions import (
    ApiError,
    NotFoundError,
    RateLimitExceededError,
    ServerError,
    UnauthorizedError,
    ValidationFailedError,
)
from ..core.message import Request, Response
from .listener import Listener, ListenerKind


class ErrorListener(Listener):
    """
    Превращает ответы API со статусом >= 400 в типизированные исключения.

    Args:
        api_limit: Потолок запросов, если API не прислал X-RateLimit-Limit
    """

    kind = ListenerKind.ERROR

    def __init__(self, api_limit: int = 5000):
        self.api_limit = api_limit

    def post_send(self, request: Request, response: Response) -> None:
        """Обрабатывает HTTP ошибки по статус коду"""
        status_code = response.status_code
        if status_code < 400:
            return

        url = response.url or request.url
        content = response.content
        message = _extract_message(content)

        rate_limit = response.rate_limit
        if rate_limit.exhausted:
            raise RateLimitExceededError(
                status_code,
                url,
                limit=rate_limit.limit if rate_limit.limit is not None else self.api_limit,
                remaining=rate_limit.remaining,
                reset=rate_limit.reset,
                body=content,
            )

        if status_code in (401, 403):
            raise UnauthorizedError(status_code, url, message, body=content)

        elif status_code == 404:
            raise NotFoundError(status_code, url, message, body=content)

        elif status_code in (400, 422) and isinstance(content, dict) and isinstance(content.get('errors'), list):
            raise ValidationFailedError(
                status_code,
                url,
                message=str(content.get('message', '')),
                errors=content['errors'],
                body=content,
            )

        elif 500 <= status_code < 600:
            raise ServerError(status_code, url, message, body=content)

        else:
            raise ApiError(status_code, url, message, body=content)


def _extract_message(content: Any) -> str:
    """Поле ``message`` из JSON тела, либо начало текста."""
    if isinstance(content, dict):
        return str(content.get('message', ''))
    if isinstance(content, str):
        return content[:200]
    return ""
