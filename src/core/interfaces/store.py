"""Contrato del store de credenciales.

Por qué Protocol:
- El backend real (dbStorage del host, fichero JSON, keyring...) es externo.
- En tests se sustituye por un dict en memoria sin herencia rígida.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

TOKEN_NAME_KEY = "tokenName"
TOKEN_VALUE_KEY = "tokenValue"
API_KEY_KEY = "fishpi_api_key"


@runtime_checkable
class CredentialStore(Protocol):
    """Key-value síncrono sobre claves string.

    Reglas de diseño:
    - `get` devuelve `None` (o vacío) cuando la clave no existe.
    - Atomicidad por clave; no hay transacciones entre claves.
    """

    def get(self, key: str) -> str | None:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def remove(self, key: str) -> None:
        ...
