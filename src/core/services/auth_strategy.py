"""Request-side auth: decide which credential goes where.

The header token is the current scheme. The legacy API key is only consulted
when no complete token pair is stored, and it is placed according to the shape
of the request, because a raw string body cannot gain a field.
"""

from __future__ import annotations

from typing import Literal
from urllib.parse import quote

from core.domain.request import (
    EmptyBody,
    MultipartBody,
    OutgoingRequest,
    RawBody,
    StructuredBody,
)
from core.interfaces.store import API_KEY_KEY, TOKEN_NAME_KEY, TOKEN_VALUE_KEY, CredentialStore

API_KEY_PARAM = "apiKey"

AppliedStrategy = Literal["token", "api_key"]


def apply_credentials(request: OutgoingRequest, store: CredentialStore) -> AppliedStrategy | None:
    """Mutate `request` in place with at most one credential.

    Returns the strategy that was applied, or None when nothing is stored.
    """

    token_name = store.get(TOKEN_NAME_KEY)
    token_value = store.get(TOKEN_VALUE_KEY)
    if token_name and token_value:
        request.headers[token_name] = token_value
        return "token"

    api_key = store.get(API_KEY_KEY)
    if not api_key:
        return None

    _inject_api_key(request, api_key)
    return "api_key"


def _inject_api_key(request: OutgoingRequest, api_key: str) -> None:
    body = request.body

    if isinstance(body, MultipartBody):
        request.append_query(API_KEY_PARAM, quote(api_key, safe=""))
    elif request.method == "GET":
        request.params = {**request.params, API_KEY_PARAM: api_key}
    elif isinstance(body, RawBody):
        request.append_query(API_KEY_PARAM, quote(api_key, safe=""))
    elif isinstance(body, StructuredBody):
        request.body = StructuredBody({**body.data, API_KEY_PARAM: api_key})
    elif isinstance(body, EmptyBody):
        request.body = StructuredBody({API_KEY_PARAM: api_key})
    else:
        raise TypeError(f"Unhandled request body variant: {type(body).__name__}")
