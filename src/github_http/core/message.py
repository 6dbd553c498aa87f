"""
Модель запроса и ответа.

Request изменяем только пока идёт pipeline (pre-send хуки добавляют
заголовки и query параметры). Response и RequestSnapshot неизменяемы.
"""

import json
import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union
from urllib.parse import urlencode

from requests.structures import CaseInsensitiveDict

from .exceptions import InvalidResponseError

HTTP_METHODS = ('GET', 'POST', 'PUT', 'PATCH', 'DELETE')

HeadersInput = Union[Mapping[str, Any], Iterable[str], None]

_LINK_PATTERN = re.compile(r'<(.*)>; rel="(.*)"', re.IGNORECASE)


def normalize_header_lines(headers: HeadersInput) -> List[str]:
    """
    Привести заголовки к списку строк вида ``"Name: value"``.

    Args:
        headers: Словарь {имя: значение}, последовательность строк или None

    Returns:
        Новый список строк заголовков (порядок сохраняется)

    Examples:
        >>> normalize_header_lines({"X-Trace": "1"})
        ['X-Trace: 1']
        >>> normalize_header_lines(["Accept: text/plain"])
        ['Accept: text/plain']
    """
    if not headers:
        return []
    if isinstance(headers, Mapping):
        return [f"{name}: {value}" for name, value in headers.items()]
    if isinstance(headers, str):
        return [headers]
    return [str(line) for line in headers]


def split_header_line(line: str) -> Tuple[str, str]:
    """Разбить ``"Name: value"`` на (name, value)."""
    name, _, value = line.partition(':')
    return name.strip(), value.strip()


def find_header(lines: Iterable[str], name: str) -> Optional[str]:
    """Значение последнего заголовка с таким именем (без учёта регистра)."""
    value = None
    for line in lines:
        header_name, header_value = split_header_line(line)
        if header_name.lower() == name.lower():
            value = header_value
    return value


def append_query(url: str, parameters: Mapping[str, Any]) -> str:
    """
    Дописать query string к URL через ``?`` или ``&``.

    Examples:
        >>> append_query("repos/a/b", {"page": 2})
        'repos/a/b?page=2'
        >>> append_query("search?q=x", {"page": 2})
        'search?q=x&page=2'
    """
    if not parameters:
        return url
    separator = '&' if '?' in url else '?'
    return url + separator + urlencode(parameters, doseq=True)


@dataclass
class Request:
    """
    Исходящий запрос.

    Attributes:
        method: HTTP метод (GET, POST, PUT, PATCH, DELETE)
        url: Абсолютный URL
        headers: Строки заголовков ``"Name: value"`` в порядке добавления
        body: JSON тело (или None)
    """

    method: str
    url: str
    headers: List[str] = field(default_factory=list)
    body: Optional[str] = None

    def __post_init__(self):
        self.method = self.method.upper()
        if self.method not in HTTP_METHODS:
            raise ValueError(
                f"Unsupported HTTP method: {self.method}. "
                f"Available: {', '.join(HTTP_METHODS)}"
            )
        self.headers = normalize_header_lines(self.headers)

    def add_header(self, line: str) -> None:
        self.headers.append(line)

    def add_headers(self, headers: HeadersInput) -> None:
        """Дописать заголовки в конец (без дедупликации)."""
        self.headers.extend(normalize_header_lines(headers))

    def get_header(self, name: str) -> Optional[str]:
        """Значение заголовка (последнее, без учёта регистра имени)."""
        return find_header(self.headers, name)

    def header_items(self) -> List[Tuple[str, str]]:
        return [split_header_line(line) for line in self.headers]

    def add_query_parameters(self, parameters: Mapping[str, Any]) -> None:
        """Дописать query параметры к URL запроса."""
        self.url = append_query(self.url, parameters)

    def snapshot(self) -> 'RequestSnapshot':
        """Неизменяемая копия запроса."""
        return RequestSnapshot(
            method=self.method,
            url=self.url,
            headers=tuple(self.headers),
            body=self.body,
        )


@dataclass(frozen=True)
class RequestSnapshot:
    """Снимок отправленного запроса (LastRequest)."""

    method: str
    url: str
    headers: Tuple[str, ...] = ()
    body: Optional[str] = None

    def get_header(self, name: str) -> Optional[str]:
        return find_header(self.headers, name)


@dataclass(frozen=True)
class RateLimitInfo:
    """
    Лимиты API из заголовков ``X-RateLimit-*``.

    Поля равны None, если заголовок отсутствует или не число.
    """

    limit: Optional[int] = None
    remaining: Optional[int] = None
    reset: Optional[int] = None

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> 'RateLimitInfo':
        return cls(
            limit=_int_header(headers, 'X-RateLimit-Limit'),
            remaining=_int_header(headers, 'X-RateLimit-Remaining'),
            reset=_int_header(headers, 'X-RateLimit-Reset'),
        )

    @property
    def exhausted(self) -> bool:
        return self.remaining is not None and self.remaining < 1


def _int_header(headers: Mapping[str, str], name: str) -> Optional[int]:
    value = headers.get(name)
    if value is None:
        return None
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def _freeze_headers(headers: Any) -> Mapping[str, str]:
    """Заголовки ответа -> read-only case-insensitive mapping."""
    if isinstance(headers, MappingProxyType):
        return headers
    if headers is None:
        headers = {}
    elif not isinstance(headers, Mapping):
        headers = dict(split_header_line(line) for line in normalize_header_lines(headers))
    return MappingProxyType(CaseInsensitiveDict(headers))


@dataclass(frozen=True)
class Response:
    """
    Результат обмена. Только для чтения.

    Attributes:
        status_code: HTTP статус
        headers: Заголовки (без учёта регистра)
        body: Тело как текст
        url: URL, с которого пришёл ответ
        reason: Reason phrase

    Example:
        >>> resp = Response(200, {"Content-Type": "application/json"}, '{"id": 1}')
        >>> resp.content
        {'id': 1}
        >>> resp.headers["content-type"]
        'application/json'
    """

    status_code: int
    headers: Mapping[str, str] = field(default_factory=dict, hash=False)
    body: str = ""
    url: str = ""
    reason: str = ""

    def __post_init__(self):
        object.__setattr__(self, 'headers', _freeze_headers(self.headers))
        if self.body is None:
            object.__setattr__(self, 'body', "")

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    @property
    def is_client_error(self) -> bool:
        return 400 <= self.status_code < 500

    @property
    def is_server_error(self) -> bool:
        return 500 <= self.status_code < 600

    @property
    def text(self) -> str:
        return self.body

    def json(self) -> Any:
        """
        Декодировать тело как JSON.

        Raises:
            InvalidResponseError: тело не является JSON
        """
        try:
            return json.loads(self.body)
        except ValueError as e:
            raise InvalidResponseError(f"Response body is not valid JSON: {e}") from e

    @property
    def content(self) -> Any:
        """JSON тело, либо исходный текст если это не JSON."""
        try:
            return json.loads(self.body)
        except ValueError:
            return self.body

    @property
    def pagination(self) -> Optional[Dict[str, str]]:
        """
        Ссылки пагинации из заголовка ``Link``.

        Returns:
            {rel: url}, например {"next": "...", "last": "..."}, или None

        Example:
            >>> resp = Response(200, {"Link": '<https://api.github.com/x?page=2>; rel="next"'})
            >>> resp.pagination
            {'next': 'https://api.github.com/x?page=2'}
        """
        header = self.headers.get('Link')
        if not header:
            return None

        links = {}
        for link in header.split(','):
            match = _LINK_PATTERN.search(link.strip())
            if match:
                links[match.group(2)] = match.group(1)
        return links

    @property
    def rate_limit(self) -> RateLimitInfo:
        return RateLimitInfo.from_headers(self.headers)
