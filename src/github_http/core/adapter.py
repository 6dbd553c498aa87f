# src/github_http/core/adapter.py
import json
import time
import uuid
from typing import Any, List, Mapping, Optional, Union, TYPE_CHECKING

from ..listeners.auth_listener import AuthListener, AuthMethod
from ..listeners.error_listener import ErrorListener
from ..listeners.listener import Listener, ListenerRegistry
from ..utils.sanitizer import mask_header_lines, mask_url
from .config import AdapterOptions, resolve_options
from .exceptions import TRANSPORT_FAILURES, classify_transport_exception
from .message import HeadersInput, Request, RequestSnapshot, Response, append_query, normalize_header_lines
from .transport import RequestsTransport, Transport

# Delayed import to avoid circular dependency
if TYPE_CHECKING:
    from .logging import AdapterLogger


class HttpClientAdapter:
    """
    Адаптер HTTP клиента для версионированного REST API.

    Pipeline запроса:
        build Request -> pre_send хуки -> Transport.send -> post_send хуки
        -> снимок последнего обмена -> Response

    Не потокобезопасен: состояние (опции, заголовки, слушатели, последний
    обмен) принадлежит экземпляру. Для конкурентного использования нужна
    внешняя блокировка или отдельный адаптер на поток.

    Example:
        >>> adapter = HttpClientAdapter({"api_version": "v3"})
        >>> adapter.authenticate("token", "ghp_xxx")
        >>> response = adapter.get("repos/KnpLabs/php-github-api")
        >>> response.content["full_name"]
        'KnpLabs/php-github-api'
    """

    def __init__(
        self,
        options: Union[AdapterOptions, Mapping[str, Any], None] = None,
        transport: Optional[Transport] = None
    ):
        """
        Args:
            options: Опции поверх значений по умолчанию (словарь или AdapterOptions)
            transport: Транспорт; по умолчанию RequestsTransport с таймаутом
                       из опций и отключённой проверкой сертификата
        """
        self._options = resolve_options(options)

        if transport is None:
            transport = RequestsTransport(timeout=self._options.timeout, verify_ssl=False)
        self._transport = transport

        self._listeners = ListenerRegistry()
        self._headers: List[str] = []
        self._last_request: Optional[RequestSnapshot] = None
        self._last_response: Optional[Response] = None

        self._logger: Optional['AdapterLogger'] = None
        if self._options.logging:
            from .logging import AdapterLogger
            self._logger = AdapterLogger(config=self._options.logging, name="github_http.adapter")

        self.add_listener(ErrorListener(api_limit=self._options.api_limit))
        self.clear_headers()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def close(self) -> None:
        """Закрыть транспорт и обработчики логов."""
        self._transport.close()
        if self._logger is not None:
            self._logger.close()

    # ==================== Опции и заголовки ====================

    @property
    def options(self) -> AdapterOptions:
        return self._options

    @property
    def transport(self) -> Transport:
        return self._transport

    def set_option(self, name: str, value: Any) -> None:
        """
        Изменить одну опцию. Заголовки не пересчитываются (нужен clear_headers).

        Raises:
            ConfigurationError: неизвестная опция или невалидное значение
        """
        self._options = self._options.with_option(name, value)

    def get_headers(self) -> List[str]:
        return list(self._headers)

    def set_headers(self, headers: HeadersInput) -> None:
        """
        Дописать заголовки к текущему набору.

        Args:
            headers: Словарь {имя: значение} или строки ``"Name: value"``
        """
        self._headers.extend(normalize_header_lines(headers))

    def clear_headers(self) -> None:
        """Сбросить заголовки к Accept и User-Agent из текущих опций."""
        self._headers = [
            self._options.accept_header,
            self._options.user_agent_header,
        ]

    # ==================== Слушатели ====================

    def add_listener(self, listener: Listener) -> None:
        """Зарегистрировать слушателя; слушатель того же вида заменяется."""
        self._listeners.add(listener)

    def get_listeners(self) -> List[Listener]:
        return self._listeners.as_list()

    def authenticate(
        self,
        method: Union[AuthMethod, str],
        token_or_login: Optional[str],
        password: Optional[str] = None
    ) -> None:
        """
        Зарегистрировать AuthListener (заменяет предыдущий).

        Args:
            method: basic, token, oauth_token (oauth-token) или client_id (client-id/secret)
            token_or_login: Токен, логин или client_id
            password: Пароль или client_secret

        Raises:
            ConfigurationError: неизвестный метод или не хватает данных
        """
        self.add_listener(AuthListener.from_method(method, token_or_login, password))

    # ==================== Запросы ====================

    def _resolve_url(self, path: str) -> str:
        base_url = self._options.base_url
        if not base_url or path.startswith(base_url):
            return path
        return f"{base_url.rstrip('/')}/{path.lstrip('/')}".strip('/')

    def request(
        self,
        path: str,
        parameters: Optional[Mapping[str, Any]] = None,
        http_method: str = "GET",
        headers: HeadersInput = None
    ) -> Response:
        """
        Выполнить запрос через pipeline слушателей.

        Args:
            path: Путь относительно base_url или абсолютный URL
            parameters: Параметры, отправляемые JSON телом (если не пусты)
            http_method: HTTP метод
            headers: Дополнительные заголовки этого вызова

        Returns:
            Response

        Raises:
            MalformedRequestError: транспорт отверг запрос как некорректный
            TransportIOError: сетевая/runtime ошибка транспорта
            ApiError: (и подклассы) API сообщил об ошибке
        """
        url = self._resolve_url(path)

        request = Request(http_method, url, list(self._headers))
        request.add_headers(headers)
        if parameters:
            request.body = json.dumps(parameters)

        correlation_id = str(uuid.uuid4())
        if self._logger:
            from .logging.filters import set_correlation_id
            set_correlation_id(correlation_id)
            self._logger.debug(
                "Request started",
                method=request.method,
                url=mask_url(request.url),
                has_body=request.body is not None,
                headers=mask_header_lines(request.headers),
            )

        start_time = time.time()

        try:
            self._listeners.run_pre_send(request)

            try:
                response = self._transport.send(request)
            except TRANSPORT_FAILURES as e:
                raise classify_transport_exception(
                    e, request.url, getattr(self._transport, 'timeout', None)
                ) from e

            self._listeners.run_post_send(request, response)

        except Exception as e:
            if self._logger:
                self._logger.error(
                    "Request failed",
                    method=request.method,
                    url=mask_url(request.url),
                    error=str(e),
                    error_type=type(e).__name__,
                    duration_ms=round((time.time() - start_time) * 1000, 2),
                )
            raise

        else:
            # Снимок обновляется только после полностью успешного прохода
            self._last_request, self._last_response = request.snapshot(), response

            if self._logger:
                self._logger.info(
                    "Request completed",
                    method=request.method,
                    url=mask_url(request.url),
                    status_code=response.status_code,
                    duration_ms=round((time.time() - start_time) * 1000, 2),
                )

        finally:
            if self._logger:
                from .logging.filters import clear_correlation_id
                clear_correlation_id()

        return response

    def get(
        self,
        path: str,
        parameters: Optional[Mapping[str, Any]] = None,
        headers: HeadersInput = None
    ) -> Response:
        """
        GET запрос; параметры уходят в query string.

        Example:
            >>> adapter.get("users/octocat/repos", {"page": 2})
        """
        if parameters:
            path = append_query(path, parameters)
        return self.request(path, {}, "GET", headers)

    def post(self, path: str, parameters: Optional[Mapping[str, Any]] = None,
             headers: HeadersInput = None) -> Response:
        """POST запрос; параметры уходят JSON телом."""
        return self.request(path, parameters, "POST", headers)

    def put(self, path: str, parameters: Optional[Mapping[str, Any]] = None,
            headers: HeadersInput = None) -> Response:
        """PUT запрос."""
        return self.request(path, parameters, "PUT", headers)

    def patch(self, path: str, parameters: Optional[Mapping[str, Any]] = None,
              headers: HeadersInput = None) -> Response:
        """PATCH запрос."""
        return self.request(path, parameters, "PATCH", headers)

    def delete(self, path: str, parameters: Optional[Mapping[str, Any]] = None,
               headers: HeadersInput = None) -> Response:
        """DELETE запрос."""
        return self.request(path, parameters, "DELETE", headers)

    # ==================== Последний обмен ====================

    def get_last_response(self) -> Optional[Response]:
        """Ответ последнего успешного запроса или None."""
        return self._last_response

    def get_last_request(self) -> Optional[RequestSnapshot]:
        """Снимок последнего успешного запроса или None."""
        return self._last_request
