"""Petición saliente y variantes de body.

El body es una unión etiquetada (`EmptyBody | RawBody | StructuredBody |
MultipartBody`) para que la inyección de credenciales sea un `match` exhaustivo
en lugar de adivinar el tipo del payload.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

from core.domain.models import UploadFile

MULTIPART_FIELD_NAME = "file[]"


@dataclass(frozen=True)
class EmptyBody:
    pass


@dataclass(frozen=True)
class RawBody:
    """String sent byte-for-byte, never JSON-encoded."""

    text: str


@dataclass(frozen=True)
class StructuredBody:
    """Mapping sent as JSON."""

    data: dict[str, Any]


@dataclass(frozen=True)
class MultipartBody:
    files: tuple[UploadFile, ...]

    def as_httpx_files(self) -> list[tuple[str, tuple[str, bytes, str]]]:
        return [(MULTIPART_FIELD_NAME, f.as_httpx_file()) for f in self.files]


RequestBody = Union[EmptyBody, RawBody, StructuredBody, MultipartBody]


def body_from_data(data: Any) -> RequestBody:
    """Clasifica un payload de caller en su variante de body.

    Solo `None`, `str` y `dict`: un array JSON no puede recibir el campo `apiKey`
    del esquema legacy, así que se rechaza en lugar de enviarse a medias.
    """

    if data is None:
        return EmptyBody()
    if isinstance(data, str):
        return RawBody(data)
    if isinstance(data, dict):
        return StructuredBody(dict(data))
    raise TypeError(f"Unsupported request body type: {type(data).__name__}")


@dataclass
class OutgoingRequest:
    """Configuración de una sola petición; vive lo que dura la llamada."""

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    params: dict[str, Any] = field(default_factory=dict)
    body: RequestBody = field(default_factory=EmptyBody)
    timeout: float | None = None

    def __post_init__(self) -> None:
        self.method = self.method.upper()

    def append_query(self, key: str, value: str) -> None:
        separator = "&" if "?" in self.url else "?"
        self.url = f"{self.url}{separator}{key}={value}"
