# src/github_http/listeners/auth_listener.py

import base64
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from ..core.exceptions import ConfigurationError
from ..core.message import Request
from .listener import Listener, ListenerKind


class AuthMethod(str, Enum):
    """Способы аутентификации."""
    BASIC = "basic"
    TOKEN = "token"
    OAUTH_TOKEN = "oauth_token"
    CLIENT_ID = "client_id"


def _normalize_method(method: Union[AuthMethod, str]) -> Union[AuthMethod, str]:
    """
    ``oauth-token`` -> ``oauth_token``, ``client-id/secret`` -> ``client_id``.
    """
    if isinstance(method, AuthMethod) or not isinstance(method, str):
        return method
    name = method.strip().lower().replace('-', '_')
    if name.endswith('/secret'):
        name = name[:-len('/secret')]
    return name


def _require(value: Optional[str], message: str) -> None:
    if value is None or value == "":
        raise ConfigurationError(message)


@dataclass(frozen=True)
class BasicCredentials:
    """Логин и пароль (HTTP Basic)."""
    login: str
    password: str = field(repr=False)
    method = AuthMethod.BASIC

    def __post_init__(self):
        _require(self.login, "You need to set username with password!")
        _require(self.password, "You need to set username with password!")


@dataclass(frozen=True)
class TokenCredentials:
    """Токен, передаваемый как ``Authorization: token <value>``."""
    token: str = field(repr=False)
    method = AuthMethod.TOKEN

    def __post_init__(self):
        _require(self.token, "You need to set OAuth token!")


@dataclass(frozen=True)
class OAuthTokenCredentials:
    """OAuth токен, передаваемый как ``Authorization: Bearer <value>``."""
    token: str = field(repr=False)
    method = AuthMethod.OAUTH_TOKEN

    def __post_init__(self):
        _require(self.token, "You need to set OAuth token!")


@dataclass(frozen=True)
class ClientIdCredentials:
    """client_id/client_secret приложения, передаются в query string."""
    client_id: str
    client_secret: str = field(repr=False)
    method = AuthMethod.CLIENT_ID

    def __post_init__(self):
        _require(self.client_id, "You need to set client_id and client_secret!")
        _require(self.client_secret, "You need to set client_id and client_secret!")


AuthCredentials = Union[BasicCredentials, TokenCredentials, OAuthTokenCredentials, ClientIdCredentials]


def build_credentials(
    method: Union[AuthMethod, str],
    token_or_login: Optional[str],
    password: Optional[str] = None
) -> AuthCredentials:
    """
    Собрать учётные данные по имени метода.

    Args:
        method: basic, token, oauth_token (oauth-token) или client_id (client-id/secret)
        token_or_login: Токен, логин или client_id
        password: Пароль или client_secret

    Raises:
        ConfigurationError: неизвестный метод или не хватает полей

    Examples:
        >>> build_credentials("token", "abc").method
        <AuthMethod.TOKEN: 'token'>
        >>> build_credentials("basic", "octocat", "secret")
        BasicCredentials(login='octocat')
    """
    try:
        method = AuthMethod(_normalize_method(method))
    except ValueError:
        raise ConfigurationError(
            f"Unknown authentication method: {method}. "
            f"Available: {', '.join(m.value for m in AuthMethod)}"
        ) from None

    if method is AuthMethod.BASIC:
        return BasicCredentials(token_or_login, password)
    if method is AuthMethod.TOKEN:
        return TokenCredentials(token_or_login)
    if method is AuthMethod.OAUTH_TOKEN:
        return OAuthTokenCredentials(token_or_login)
    return ClientIdCredentials(token_or_login, password)


class AuthListener(Listener):
    """Добавляет учётные данные в запрос перед отправкой."""

    kind = ListenerKind.AUTH

    def __init__(self, credentials: AuthCredentials):
        self.credentials = credentials

    @classmethod
    def from_method(
        cls,
        method: Union[AuthMethod, str],
        token_or_login: Optional[str],
        password: Optional[str] = None
    ) -> 'AuthListener':
        return cls(build_credentials(method, token_or_login, password))

    @property
    def method(self) -> AuthMethod:
        return self.credentials.method

    def pre_send(self, request: Request) -> None:
        credentials = self.credentials

        if isinstance(credentials, BasicCredentials):
            raw = f"{credentials.login}:{credentials.password}".encode('utf-8')
            request.add_header(f"Authorization: Basic {base64.b64encode(raw).decode('ascii')}")

        elif isinstance(credentials, TokenCredentials):
            request.add_header(f"Authorization: token {credentials.token}")

        elif isinstance(credentials, OAuthTokenCredentials):
            request.add_header(f"Authorization: Bearer {credentials.token}")

        elif isinstance(credentials, ClientIdCredentials):
            request.add_query_parameters({
                'client_id': credentials.client_id,
                'client_secret': credentials.client_secret,
            })

        else:
            raise ConfigurationError(f"{type(credentials).__name__} is not supported")
