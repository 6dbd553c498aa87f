# src/github_http/core/transport.py
"""
Транспорт: единственная возможность, которую адаптер требует от сети -
"отправить Request, получить Response, возможно упасть".
"""

from abc import ABC, abstractmethod
from typing import Optional

import requests
from requests.adapters import HTTPAdapter

from .message import Request, Response


class Transport(ABC):
    """Базовый класс транспорта."""

    @abstractmethod
    def send(self, request: Request) -> Response:
        """
        Отправить запрос.

        Raises:
            Любое исключение транспорта; адаптер классифицирует его
            как MalformedRequestError или TransportIOError.
        """
        pass

    def close(self) -> None:
        """Освободить ресурсы (по умолчанию ничего)."""
        pass


class RequestsTransport(Transport):
    """
    Транспорт на базе requests.Session.

    Args:
        timeout: Таймаут запроса (сек)
        verify_ssl: Проверять SSL сертификаты
        session: Готовая сессия (иначе создаётся своя)

    Example:
        >>> transport = RequestsTransport(timeout=10, verify_ssl=False)
        >>> response = transport.send(Request("GET", "https://api.github.com/users/octocat"))
    """

    def __init__(
        self,
        timeout: float = 10,
        verify_ssl: bool = False,
        session: Optional[requests.Session] = None
    ):
        self.timeout = timeout
        self.verify_ssl = verify_ssl
        self._owns_session = session is None
        self._session = session or self._create_session()

    @staticmethod
    def _create_session() -> requests.Session:
        session = requests.Session()
        # Ретраи не делаем: это ответственность вызывающего кода
        adapter = HTTPAdapter(max_retries=0)
        session.mount('http://', adapter)
        session.mount('https://', adapter)
        return session

    @property
    def session(self) -> requests.Session:
        return self._session

    def send(self, request: Request) -> Response:
        headers = dict(request.header_items())
        data = None
        if request.body is not None:
            data = request.body.encode('utf-8')
            if not any(name.lower() == 'content-type' for name in headers):
                headers['Content-Type'] = 'application/json'

        raw = self._session.request(
            method=request.method,
            url=request.url,
            headers=headers,
            data=data,
            timeout=self.timeout,
            verify=self.verify_ssl,
        )

        return Response(
            status_code=raw.status_code,
            headers=raw.headers,
            body=raw.text,
            url=raw.url or request.url,
            reason=raw.reason or "",
        )

    def close(self) -> None:
        if self._owns_session:
            self._session.close()
