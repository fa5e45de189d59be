"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que implementan adaptadores concretos.
- Permite invertir dependencias: el Core depende de abstracciones.
"""

from core.interfaces.notifier import ERROR_EVENT, LOGIN_INVALID_EVENT, Notifier
from core.interfaces.store import API_KEY_KEY, TOKEN_NAME_KEY, TOKEN_VALUE_KEY, CredentialStore

__all__ = [
    "API_KEY_KEY",
    "CredentialStore",
    "ERROR_EVENT",
    "LOGIN_INVALID_EVENT",
    "Notifier",
    "TOKEN_NAME_KEY",
    "TOKEN_VALUE_KEY",
]
