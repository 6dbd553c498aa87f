"""Pipeline listeners: pre-send/post-send hooks of the adapter."""

from .listener import Listener, ListenerKind, ListenerRegistry
from .auth_listener import (
    AuthListener,
    AuthMethod,
    AuthCredentials,
    BasicCredentials,
    TokenCredentials,
    OAuthTokenCredentials,
    ClientIdCredentials,
    build_credentials,
)
from .error_listener import ErrorListener

__all__ = [
    "Listener",
    "ListenerKind",
    "ListenerRegistry",
    "AuthListener",
    "AuthMethod",
    "AuthCredentials",
    "BasicCredentials",
    "TokenCredentials",
    "OAuthTokenCredentials",
    "ClientIdCredentials",
    "build_credentials",
    "ErrorListener",
]
