"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Validación estricta y documentación autocontenida (Field) sin acoplar el Core
  a `httpx` ni al backend de persistencia.
- El envelope de la API NO se modela aquí: viaja como dict sin validar hasta el
  caller.

Nota:
- Estos modelos describen *qué* viaja por el cable, no *cómo* se envía.
"""

from __future__ import annotations

import mimetypes
from pathlib import Path

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class TokenCredential(BaseModel):
    """Credencial del esquema nuevo: un header dinámico nombre/valor."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Nombre del header (p.ej. 'Authorization').")
    value: str = Field(..., min_length=1, description="Valor del header.")


class LegacyKey(BaseModel):
    """Credencial del esquema antiguo: una API key opaca inyectada por posición."""

    model_config = ConfigDict(frozen=True)

    value: str = Field(..., min_length=1, description="API key en claro.")


class ErrorEventDetail(BaseModel):
    """Payload del evento `fishpi:error`."""

    message: str
    code: int | None = None


class UploadFile(BaseModel):
    """Archivo a subir como parte `file[]` de un multipart."""

    filename: str = Field(..., min_length=1)
    content: bytes
    content_type: str = Field(default="application/octet-stream")

    @classmethod
    def from_path(cls, path: Path) -> "UploadFile":
        guessed, _ = mimetypes.guess_type(path.name)
        return cls(
            filename=path.name,
            content=path.read_bytes(),
            content_type=guessed or "application/octet-stream",
        )

    def as_httpx_file(self) -> tuple[str, bytes, str]:
        return (self.filename, self.content, self.content_type)
