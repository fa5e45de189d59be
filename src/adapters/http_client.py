"""Wrapper de httpx para la API de FishPi.

Por qué un wrapper:
- Estandariza base URL, timeouts y headers en un único `httpx.AsyncClient`.
- Centraliza la autenticación (token en header o API key legacy) y el manejo
  del envelope `{code, msg}` para que ningún caller lo repita.
- Facilita testeo: store, notifier y transporte se inyectan.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Sequence, Union

import httpx

from adapters.credential_store import build_file_store
from adapters.event_bus import events
from core.config import AppSettings
from core.domain.models import LegacyKey, TokenCredential, UploadFile
from core.domain.request import (
    EmptyBody,
    MultipartBody,
    OutgoingRequest,
    RawBody,
    StructuredBody,
    body_from_data,
)
from core.interfaces.notifier import Notifier
from core.interfaces.store import API_KEY_KEY, TOKEN_NAME_KEY, TOKEN_VALUE_KEY, CredentialStore
from core.observability import get_logger
from core.services.auth_strategy import apply_credentials
from core.services.envelope import normalize_envelope

TEXT_CONTENT_TYPE = "text/plain;charset=UTF-8"
POST_OPTION_KEYS = frozenset({"headers", "params", "timeout"})

FileInput = Union[UploadFile, Path, tuple[str, bytes]]

logger = get_logger("adapters.http_client")


def build_async_client(
    settings: AppSettings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    **overrides: Any,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con los defaults de `AppSettings`.

    `overrides` (`base_url`, `timeout`) tienen prioridad sobre los settings.
    Los headers por defecto NO se fijan aquí: se mezclan por petición en
    `RequestClient`, porque httpx no deja que el body reemplace un
    `Content-Type` ya presente en el cliente.
    """

    settings = settings or AppSettings()
    return httpx.AsyncClient(
        base_url=overrides.get("base_url", settings.base_url),
        timeout=httpx.Timeout(overrides.get("timeout", settings.http_timeout_seconds)),
        headers={"User-Agent": settings.user_agent},
        follow_redirects=True,
        transport=transport,
    )


def _coerce_upload(item: FileInput) -> UploadFile:
    if isinstance(item, UploadFile):
        return item
    if isinstance(item, Path):
        return UploadFile.from_path(item)
    filename, content = item
    return UploadFile(filename=filename, content=content)


class RequestClient:
    """Fachada HTTP autenticada.

    Cada verbo construye su propio `OutgoingRequest`, lo pasa por el
    interceptor de auth, lo envía y normaliza el envelope. No hay estado
    mutable compartido entre llamadas concurrentes salvo el store.
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        store: CredentialStore | None = None,
        notifier: Notifier | None = None,
        client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        **overrides: Any,
    ) -> None:
        self._settings = settings or AppSettings()
        self._store = store if store is not None else build_file_store(self._settings)
        self._notifier = notifier if notifier is not None else events
        self._default_headers: dict[str, str] = {
            **self._settings.default_headers,
            **overrides.pop("headers", {}),
        }
        self._owns_client = client is None
        self._client = client or build_async_client(self._settings, transport=transport, **overrides)

    @property
    def store(self) -> CredentialStore:
        return self._store

    @property
    def notifier(self) -> Notifier:
        return self._notifier

    async def __aenter__(self) -> "RequestClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    # ------------------------------------------------------------------
    # Credenciales
    # ------------------------------------------------------------------

    def get_token_name(self) -> str | None:
        return self._store.get(TOKEN_NAME_KEY)

    def get_token_value(self) -> str | None:
        return self._store.get(TOKEN_VALUE_KEY)

    def get_token(self) -> TokenCredential | None:
        name, value = self.get_token_name(), self.get_token_value()
        if not name or not value:
            return None
        return TokenCredential(name=name, value=value)

    def set_token(self, token_name: str, token_value: str) -> None:
        self._store.set(TOKEN_NAME_KEY, token_name)
        self._store.set(TOKEN_VALUE_KEY, token_value)

    def clear_token(self) -> None:
        self._store.remove(TOKEN_NAME_KEY)
        self._store.remove(TOKEN_VALUE_KEY)

    def get_api_key(self) -> str | None:
        return self._store.get(API_KEY_KEY)

    def set_api_key(self, api_key: str) -> None:
        self._store.set(API_KEY_KEY, api_key)

    def clear_api_key(self) -> None:
        self._store.remove(API_KEY_KEY)

    def active_credential(self) -> TokenCredential | LegacyKey | None:
        """Credencial que el interceptor aplicaría ahora mismo."""

        token = self.get_token()
        if token is not None:
            return token
        api_key = self.get_api_key()
        return LegacyKey(value=api_key) if api_key else None

    # ------------------------------------------------------------------
    # Verbos
    # ------------------------------------------------------------------

    async def get(self, path: str, params: Mapping[str, Any] | None = None) -> dict[str, Any]:
        request = self._build("GET", path, params=params)
        return await self._send(request)

    async def post(
        self,
        path: str,
        data: dict[str, Any] | str | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """POST con body JSON (mapping) o crudo (str).

        Solo se admiten mappings y strings como `data`; cualquier otro tipo
        (listas incluidas) lanza `TypeError`. `options` acepta únicamente
        `headers`, `params` y `timeout`; una clave desconocida lanza `TypeError`.
        """

        options = options or {}
        unknown = sorted(set(options) - POST_OPTION_KEYS)
        if unknown:
            raise TypeError(f"Unsupported post options: {', '.join(unknown)}")
        request = self._build(
            "POST",
            path,
            body=body_from_data({} if data is None else data),
            headers=options.get("headers"),
            params=options.get("params"),
            timeout=options.get("timeout"),
        )
        return await self._send(request)

    async def post_text(self, path: str, data: Any = "") -> dict[str, Any]:
        """POST con body de texto plano, enviado tal cual (sin comillas JSON)."""

        text = data if isinstance(data, str) else str(data)
        request = self._build(
            "POST",
            path,
            body=RawBody(text),
            headers={"Content-Type": TEXT_CONTENT_TYPE},
        )
        return await self._send(request)

    async def put(self, path: str, data: dict[str, Any] | str | None = None) -> dict[str, Any]:
        """PUT con body JSON (mapping) o crudo (str); otros tipos lanzan `TypeError`."""

        request = self._build("PUT", path, body=body_from_data({} if data is None else data))
        return await self._send(request)

    async def delete(self, path: str) -> dict[str, Any]:
        request = self._build("DELETE", path)
        return await self._send(request)

    async def upload(self, path: str, files: Sequence[FileInput]) -> dict[str, Any]:
        """Sube archivos como multipart; todos bajo el campo repetido `file[]`."""

        uploads = tuple(_coerce_upload(f) for f in files)
        request = self._build("POST", path, body=MultipartBody(uploads))
        return await self._send(request)

    # ------------------------------------------------------------------
    # Internos
    # ------------------------------------------------------------------

    def _build(
        self,
        method: str,
        path: str,
        *,
        body: EmptyBody | RawBody | StructuredBody | MultipartBody | None = None,
        headers: Mapping[str, str] | None = None,
        params: Mapping[str, Any] | None = None,
        timeout: float | None = None,
    ) -> OutgoingRequest:
        merged = {**self._default_headers, **(headers or {})}
        if isinstance(body, MultipartBody):
            # httpx genera `multipart/form-data; boundary=...`
            merged = {k: v for k, v in merged.items() if k.lower() != "content-type"}
        return OutgoingRequest(
            method=method,
            url=path,
            headers=merged,
            params=dict(params or {}),
            body=body or EmptyBody(),
            timeout=timeout,
        )

    def _httpx_kwargs(self, request: OutgoingRequest) -> dict[str, Any]:
        kwargs: dict[str, Any] = {"headers": request.headers}
        if request.params:
            kwargs["params"] = request.params
        if request.timeout is not None:
            kwargs["timeout"] = request.timeout

        body = request.body
        if isinstance(body, RawBody):
            kwargs["content"] = body.text.encode("utf-8")
        elif isinstance(body, StructuredBody):
            kwargs["json"] = body.data
        elif isinstance(body, MultipartBody):
            kwargs["files"] = body.as_httpx_files()
        return kwargs

    async def _send(self, request: OutgoingRequest) -> dict[str, Any]:
        strategy = apply_credentials(request, self._store)
        logger.debug("%s %s (auth=%s)", request.method, request.url, strategy or "none")

        try:
            response = await self._client.request(request.method, request.url, **self._httpx_kwargs(request))
            payload = self._read_envelope(response)
            logger.debug("API response: %s", payload)
            result = normalize_envelope(payload, store=self._store, notifier=self._notifier)
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("API error on %s %s: %s", request.method, request.url, exc)
            raise

        if response.is_error:
            # Envelope de éxito con status HTTP de error: se trata como fallo de transporte.
            logger.error("API error on %s %s: HTTP %s", request.method, request.url, response.status_code)
            response.raise_for_status()
        return result

    @staticmethod
    def _read_envelope(response: httpx.Response) -> dict[str, Any]:
        try:
            payload = response.json()
        except ValueError:
            if response.is_error:
                response.raise_for_status()
            raise

        if not isinstance(payload, dict):
            if response.is_error:
                response.raise_for_status()
            raise httpx.DecodingError("Expected a JSON object envelope", request=response.request)
        return payload


def build_request_client(settings: AppSettings | None = None, **overrides: Any) -> RequestClient:
    """Cliente con store en fichero y el canal de eventos global del proceso."""

    settings = settings or AppSettings()
    return RequestClient(settings, store=build_file_store(settings), notifier=events, **overrides)
