"""
Загрузка опций адаптера из переменных окружения и .env файла.

Приоритет (от высшего к низшему):
1. **overrides - явные параметры
2. Переменные окружения (GITHUB_HTTP_*)
3. .env файл
4. Значения по умолчанию
"""

from typing import Any, Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .config import DEFAULT_BASE_URL, DEFAULT_USER_AGENT, AdapterOptions
from .logging.config import LoggingConfig


class AdapterSettings(BaseSettings):
    """
    Опции адаптера из окружения.

    Example .env file:
        GITHUB_HTTP_BASE_URL=https://github.example.com/api/v3/
        GITHUB_HTTP_TIMEOUT=30
        GITHUB_HTTP_API_VERSION=v3
        GITHUB_HTTP_LOG_ENABLED=true
        GITHUB_HTTP_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_prefix='GITHUB_HTTP_',
        env_file=None,
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore',
    )

    base_url: str = Field(default=DEFAULT_BASE_URL)
    user_agent: str = Field(default=DEFAULT_USER_AGENT, min_length=1)
    timeout: float = Field(default=10, gt=0, description="Transport timeout in seconds")
    api_limit: int = Field(default=5000, gt=0)
    api_version: str = Field(default="beta", min_length=1)
    api_name: str = Field(default="github", min_length=1)
    cache_dir: Optional[str] = None

    # Logging
    log_enabled: bool = Field(default=False)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")
    log_format: Literal["json", "text"] = Field(default="text")
    log_file_path: Optional[str] = None

    @field_validator('log_level', mode='before')
    @classmethod
    def normalize_level(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v

    @field_validator('log_format', mode='before')
    @classmethod
    def normalize_format(cls, v: Any) -> Any:
        return v.lower() if isinstance(v, str) else v

    def to_logging_config(self) -> Optional[LoggingConfig]:
        """LoggingConfig, если логирование включено."""
        if not self.log_enabled:
            return None
        return LoggingConfig.create(
            level=self.log_level,
            format=self.log_format,
            enable_file=self.log_file_path is not None,
            file_path=self.log_file_path,
        )

    def to_options(self, **overrides: Any) -> AdapterOptions:
        values = {
            'base_url': self.base_url,
            'user_agent': self.user_agent,
            'timeout': self.timeout,
            'api_limit': self.api_limit,
            'api_version': self.api_version,
            'api_name': self.api_name,
            'cache_dir': self.cache_dir,
            'logging': self.to_logging_config(),
        }
        values.update(overrides)
        return AdapterOptions.create(values)


def load_options_from_env(env_file: Optional[str] = None, **overrides: Any) -> AdapterOptions:
    """
    Собрать AdapterOptions из окружения.

    Args:
        env_file: Путь к .env файлу (опционально)
        **overrides: Явные опции, перекрывают окружение

    Raises:
        pydantic.ValidationError: значение из окружения не прошло валидацию
        ConfigurationError: неизвестная опция в overrides

    Example:
        >>> options = load_options_from_env(api_version="v3")
        >>> adapter = HttpClientAdapter(options)
    """
    settings = AdapterSettings(_env_file=env_file)
    return settings.to_options(**overrides)
