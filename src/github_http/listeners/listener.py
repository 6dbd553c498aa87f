# src/github_http/listeners/listener.py

from enum import Enum
from typing import Dict, Iterator, List, Optional, Union

from ..core.message import Request, Response


class ListenerKind(str, Enum):
    """
    Виды встроенных слушателей.

    Реестр хранит не более одного слушателя каждого вида. Собственные
    слушатели могут использовать любую строку в качестве вида.
    """
    AUTH = "auth"
    ERROR = "error"


class Listener:
    """
    Базовый класс хука pipeline.

    Оба хука необязательны: по умолчанию ничего не делают.

    Attributes:
        kind: Вид слушателя (ключ в реестре). Подклассы обязаны задать.

    Example:
        >>> class TraceListener(Listener):
        ...     kind = "trace"
        ...
        ...     def pre_send(self, request):
        ...         request.add_header("X-Trace: on")
    """

    kind: Union[ListenerKind, str, None] = None

    def pre_send(self, request: Request) -> None:
        """Вызывается перед отправкой; может менять request."""
        pass

    def post_send(self, request: Request, response: Response) -> None:
        """Вызывается после получения ответа; может бросить исключение."""
        pass


class ListenerRegistry:
    """
    Реестр слушателей: вид -> экземпляр.

    Порядок обхода - порядок первой регистрации вида. Повторная
    регистрация вида заменяет экземпляр, не меняя его позицию.
    """

    def __init__(self):
        self._listeners: Dict[str, Listener] = {}

    @staticmethod
    def _key(kind: Union[ListenerKind, str]) -> str:
        return kind.value if isinstance(kind, ListenerKind) else str(kind)

    def add(self, listener: Listener) -> Optional[Listener]:
        """
        Зарегистрировать слушателя.

        Returns:
            Заменённый слушатель того же вида или None

        Raises:
            ValueError: у слушателя не задан kind
        """
        if listener.kind is None:
            raise ValueError(f"{listener.__class__.__name__} must define a listener kind")

        key = self._key(listener.kind)
        previous = self._listeners.get(key)
        # dict сохраняет позицию существующего ключа при присваивании
        self._listeners[key] = listener
        return previous

    def get(self, kind: Union[ListenerKind, str]) -> Optional[Listener]:
        return self._listeners.get(self._key(kind))

    def remove(self, kind: Union[ListenerKind, str]) -> Optional[Listener]:
        return self._listeners.pop(self._key(kind), None)

    def __contains__(self, kind: object) -> bool:
        if not isinstance(kind, (ListenerKind, str)):
            return False
        return self._key(kind) in self._listeners

    def __iter__(self) -> Iterator[Listener]:
        # Копия: хук может зарегистрировать другого слушателя
        return iter(list(self._listeners.values()))

    def __len__(self) -> int:
        return len(self._listeners)

    def as_list(self) -> List[Listener]:
        return list(self._listeners.values())

    def run_pre_send(self, request: Request) -> None:
        for listener in self:
            listener.pre_send(request)

    def run_post_send(self, request: Request, response: Response) -> None:
        for listener in self:
            listener.post_send(request, response)
