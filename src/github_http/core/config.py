"""
Опции адаптера.

Опции immutable (frozen dataclass): изменение через set_option адаптера
создаёт новый экземпляр, который действует на последующие вызовы.
"""

from dataclasses import dataclass, fields, replace
from typing import Any, Dict, List, Mapping, Optional, Union, TYPE_CHECKING

from .exceptions import ConfigurationError

if TYPE_CHECKING:
    from .logging import LoggingConfig

DEFAULT_BASE_URL = "https://api.github.com/"
DEFAULT_USER_AGENT = "github-http-adapter (https://github.com/KnpLabs/php-github-api)"


@dataclass(frozen=True)
class AdapterOptions:
    """
    Конфигурация HttpClientAdapter.

    Args:
        base_url: Базовый URL API
        user_agent: Значение заголовка User-Agent
        timeout: Таймаут транспорта (сек), задаётся один раз при создании
        api_limit: Потолок запросов API (для RateLimitExceededError)
        api_version: Версия API в заголовке Accept
        api_name: Имя API в заголовке Accept (application/vnd.<api_name>...)
        cache_dir: Зарезервировано, адаптером не используется
        logging: Конфигурация логирования (None = без логов)

    Examples:
        >>> AdapterOptions()
        >>> AdapterOptions.create(timeout=30, api_version="v3")
    """
    base_url: str = DEFAULT_BASE_URL
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = 10
    api_limit: int = 5000
    api_version: str = "beta"
    api_name: str = "github"
    cache_dir: Optional[str] = None
    logging: Optional['LoggingConfig'] = None

    def __post_init__(self):
        """Валидация."""
        if self.base_url is None:
            object.__setattr__(self, 'base_url', "")
        if self.timeout is None or self.timeout <= 0:
            raise ConfigurationError("timeout must be positive")
        if self.api_limit is None or self.api_limit <= 0:
            raise ConfigurationError("api_limit must be positive")
        if not self.api_version:
            raise ConfigurationError("api_version must not be empty")
        if not self.api_name:
            raise ConfigurationError("api_name must not be empty")

    @classmethod
    def option_names(cls) -> List[str]:
        return [f.name for f in fields(cls)]

    @classmethod
    def create(cls, overlay: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> 'AdapterOptions':
        """
        Наложить опции поверх значений по умолчанию.

        Args:
            overlay: Словарь опций
            **kwargs: Опции (переопределяют overlay)

        Raises:
            ConfigurationError: неизвестное имя опции или невалидное значение

        Example:
            >>> AdapterOptions.create({"api_version": "v3"}, timeout=5)
        """
        merged: Dict[str, Any] = dict(overlay or {})
        merged.update(kwargs)
        _check_names(merged)
        return cls(**merged)

    def with_option(self, name: str, value: Any) -> 'AdapterOptions':
        """
        Новый экземпляр с изменённой опцией.

        Example:
            >>> options = AdapterOptions().with_option("api_version", "v3")
        """
        _check_names({name: value})
        return replace(self, **{name: value})

    def as_dict(self) -> Dict[str, Any]:
        return {name: getattr(self, name) for name in self.option_names()}

    @property
    def accept_header(self) -> str:
        return f"Accept: application/vnd.{self.api_name}.{self.api_version}+json"

    @property
    def user_agent_header(self) -> str:
        return f"User-Agent: {self.user_agent}"


def _check_names(options: Mapping[str, Any]) -> None:
    known = AdapterOptions.option_names()
    unknown = [name for name in options if name not in known]
    if unknown:
        raise ConfigurationError(
            f"Unknown option(s): {', '.join(sorted(unknown))}. "
            f"Available: {', '.join(known)}"
        )


def resolve_options(options: Union[AdapterOptions, Mapping[str, Any], None]) -> AdapterOptions:
    """Принять AdapterOptions, словарь-overlay или None."""
    if isinstance(options, AdapterOptions):
        return options
    return AdapterOptions.create(options)
