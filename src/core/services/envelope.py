"""Response-side handling of the `{code, msg, ...}` envelope."""

from __future__ import annotations

from typing import Any

from core.domain.models import ErrorEventDetail
from core.errors import DEFAULT_ERROR_MESSAGE, AuthFailure
from core.interfaces.notifier import ERROR_EVENT, LOGIN_INVALID_EVENT, Notifier
from core.interfaces.store import API_KEY_KEY, TOKEN_NAME_KEY, TOKEN_VALUE_KEY, CredentialStore
from core.observability import get_logger

AUTH_FAILURE_CODES = frozenset({-1, 401})
INVALID_API_KEY_MESSAGE = "Invalid API Key"
# "未登录" = not logged in
AUTH_FAILURE_PATTERNS = ("API Key", "未登录", "token")

logger = get_logger("core.services.envelope")


def is_auth_failure_code(code: Any) -> bool:
    """Strict check: only the ints `-1` and `401` count (not `"401"`, not `True`)."""

    return type(code) is int and code in AUTH_FAILURE_CODES


def is_auth_failure_message(message: str | None) -> bool:
    """Substring heuristic deciding whether stored credentials are stale."""

    if not message:
        return False
    if message == INVALID_API_KEY_MESSAGE:
        return True
    return any(pattern in message for pattern in AUTH_FAILURE_PATTERNS)


def purge_credentials(store: CredentialStore) -> None:
    for key in (API_KEY_KEY, TOKEN_NAME_KEY, TOKEN_VALUE_KEY):
        store.remove(key)


def normalize_envelope(
    payload: dict[str, Any],
    *,
    store: CredentialStore,
    notifier: Notifier,
) -> dict[str, Any]:
    """Return `payload` untouched on success, raise `AuthFailure` otherwise.

    On failure the error event is always published; the login-invalid event and
    the credential purge only happen when the message matches an auth pattern.
    """

    code = payload.get("code")
    if not is_auth_failure_code(code):
        return payload

    raw_msg = payload.get("msg")
    msg = "" if raw_msg is None else str(raw_msg)

    login_invalid = is_auth_failure_message(msg)
    if login_invalid:
        logger.warning("Credentials rejected (code=%s, msg=%r); clearing store", code, msg)
        purge_credentials(store)
        notifier.publish(LOGIN_INVALID_EVENT)

    message = msg or DEFAULT_ERROR_MESSAGE
    logger.warning("Request failed (code=%s): %s", code, message)
    detail = ErrorEventDetail(message=message, code=code)
    notifier.publish(ERROR_EVENT, detail.model_dump())
    raise AuthFailure(message, code=code, envelope=payload, login_invalid=login_invalid)
