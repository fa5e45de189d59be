"""Errores del cliente.

Solo los fallos del *envelope* tienen tipo propio. Los fallos de transporte
(red, HTTP sin envelope, JSON inválido) se propagan tal cual desde `httpx`.
"""

from __future__ import annotations

from typing import Any

DEFAULT_ERROR_MESSAGE = "request failed"


class RequestError(Exception):
    """The server answered with a failure envelope."""

    def __init__(
        self,
        message: str = DEFAULT_ERROR_MESSAGE,
        *,
        code: int | None = None,
        envelope: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.envelope = envelope or {}


class AuthFailure(RequestError):
    """Envelope code `-1` or `401`.

    `login_invalid` is True when the message matched an auth-failure pattern
    and the stored credentials were purged.
    """

    def __init__(
        self,
        message: str = DEFAULT_ERROR_MESSAGE,
        *,
        code: int | None = None,
        envelope: dict[str, Any] | None = None,
        login_invalid: bool = False,
    ) -> None:
        super().__init__(message, code=code, envelope=envelope)
        self.login_invalid = login_invalid
