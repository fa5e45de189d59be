"""Backends del store de credenciales.

Por qué dos implementaciones:
- `MemoryCredentialStore` para tests y para embeber el cliente en otro proceso.
- `JsonFileCredentialStore` persiste entre ejecuciones de la CLI, igual que el
  `dbStorage` del host original.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path

from core.config import AppSettings
from core.interfaces.store import CredentialStore


class MemoryCredentialStore(CredentialStore):
    """Store en memoria (dict)."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def snapshot(self) -> dict[str, str]:
        return dict(self._data)


class JsonFileCredentialStore(CredentialStore):
    """Store persistido en un JSON UTF-8.

    Cada `set`/`remove` reescribe el fichero completo vía fichero temporal +
    `os.replace`, de modo que una clave nunca queda a medio escribir.
    """

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        raw = self._path.read_text(encoding="utf-8")
        if not raw.strip():
            return {}
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise ValueError(f"Credential file {self._path} must contain a JSON object")
        return {str(k): str(v) for k, v in data.items() if v is not None}

    def _dump(self, data: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, prefix=".credentials-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh, ensure_ascii=False, indent=2, sort_keys=True)
                fh.write("\n")
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def get(self, key: str) -> str | None:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._dump(data)

    def remove(self, key: str) -> None:
        data = self._load()
        if key not in data:
            return
        del data[key]
        self._dump(data)


def build_file_store(settings: AppSettings | None = None) -> JsonFileCredentialStore:
    settings = settings or AppSettings()
    return JsonFileCredentialStore(settings.resolved_credentials_path())
