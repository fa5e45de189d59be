"""Tests for the request-side credential injection."""

from __future__ import annotations

import pytest

from adapters.credential_store import MemoryCredentialStore
from core.domain.models import UploadFile
from core.domain.request import (
    EmptyBody,
    MultipartBody,
    OutgoingRequest,
    RawBody,
    StructuredBody,
)
from core.interfaces.store import API_KEY_KEY, TOKEN_NAME_KEY, TOKEN_VALUE_KEY
from core.services.auth_strategy import apply_credentials


def _token_store() -> MemoryCredentialStore:
    return MemoryCredentialStore(
        {TOKEN_NAME_KEY: "X-Token", TOKEN_VALUE_KEY: "tok-1", API_KEY_KEY: "legacy"}
    )


def _legacy_store() -> MemoryCredentialStore:
    return MemoryCredentialStore({API_KEY_KEY: "k123"})


_FILES = MultipartBody((UploadFile(filename="a.txt", content=b"a"),))

_SHAPES = [
    ("GET", EmptyBody()),
    ("POST", StructuredBody({"a": 1})),
    ("POST", RawBody("hello")),
    ("PUT", StructuredBody({})),
    ("DELETE", EmptyBody()),
    ("POST", _FILES),
]


class TestTokenPrecedence:
    @pytest.mark.parametrize(("method", "body"), _SHAPES)
    def test_token_goes_to_header_only(self, method, body) -> None:
        """A stored token is always sent as a header and the legacy key is ignored."""
        request = OutgoingRequest(method=method, url="/x", body=body)

        applied = apply_credentials(request, _token_store())

        assert applied == "token"
        assert request.headers == {"X-Token": "tok-1"}
        assert request.url == "/x"
        assert request.params == {}
        assert request.body == body

    def test_incomplete_token_falls_back_to_legacy_key(self) -> None:
        store = MemoryCredentialStore({TOKEN_NAME_KEY: "X-Token", API_KEY_KEY: "k123"})
        request = OutgoingRequest(method="GET", url="/x")

        applied = apply_credentials(request, store)

        assert applied == "api_key"
        assert "X-Token" not in request.headers
        assert request.params == {"apiKey": "k123"}


class TestLegacyKeyPlacement:
    def test_get_merges_into_params(self) -> None:
        request = OutgoingRequest(method="get", url="/x", params={"page": 2})

        apply_credentials(request, _legacy_store())

        assert request.params == {"page": 2, "apiKey": "k123"}
        assert request.url == "/x"

    def test_multipart_goes_to_url(self) -> None:
        request = OutgoingRequest(method="POST", url="/upload", body=_FILES)

        apply_credentials(request, _legacy_store())

        assert request.url == "/upload?apiKey=k123"
        assert request.params == {}
        assert request.body == _FILES

    def test_multipart_appends_with_ampersand_when_query_present(self) -> None:
        request = OutgoingRequest(method="POST", url="/upload?dir=img", body=_FILES)

        apply_credentials(request, _legacy_store())

        assert request.url == "/upload?dir=img&apiKey=k123"

    def test_raw_body_goes_to_url(self) -> None:
        request = OutgoingRequest(method="POST", url="/chat", body=RawBody("hello"))

        apply_credentials(request, _legacy_store())

        assert request.url == "/chat?apiKey=k123"
        assert request.body == RawBody("hello")

    def test_structured_body_gains_field(self) -> None:
        original = {"content": "hi"}
        request = OutgoingRequest(method="PUT", url="/x", body=StructuredBody(original))

        apply_credentials(request, _legacy_store())

        assert request.body == StructuredBody({"content": "hi", "apiKey": "k123"})
        assert request.url == "/x"
        assert original == {"content": "hi"}

    def test_empty_body_on_delete_becomes_structured(self) -> None:
        request = OutgoingRequest(method="DELETE", url="/x")

        apply_credentials(request, _legacy_store())

        assert request.body == StructuredBody({"apiKey": "k123"})
        assert request.url == "/x"

    def test_key_is_url_quoted(self) -> None:
        store = MemoryCredentialStore({API_KEY_KEY: "a b&c"})
        request = OutgoingRequest(method="POST", url="/chat", body=RawBody("x"))

        apply_credentials(request, store)

        assert request.url == "/chat?apiKey=a%20b%26c"


def test_no_credentials_leaves_request_untouched() -> None:
    request = OutgoingRequest(method="POST", url="/x", headers={"A": "1"}, body=RawBody("x"))

    applied = apply_credentials(request, MemoryCredentialStore())

    assert applied is None
    assert request == OutgoingRequest(method="POST", url="/x", headers={"A": "1"}, body=RawBody("x"))
