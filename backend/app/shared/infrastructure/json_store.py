"""
Local key-value store backed by a single JSON document.
Each key holds one collection (or the signed-in user), like browser storage.
"""
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Optional, Union

from app.shared.domain.errors import PersistenceFailure

logger = logging.getLogger(__name__)


class JsonFileStore:
    def __init__(self, path: Union[str, Path]) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_document(self) -> dict:
        if not self._path.exists():
            return {}
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                document = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise PersistenceFailure(f"could not read {self._path}: {e}") from e
        if not isinstance(document, dict):
            raise PersistenceFailure(f"unexpected content in {self._path}")
        return document

    def _write_document(self, document: dict) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent, prefix=self._path.name, suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(document, f, ensure_ascii=False, indent=2)
                os.replace(tmp_name, self._path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except (OSError, TypeError, ValueError) as e:
            raise PersistenceFailure(f"could not write {self._path}: {e}") from e

    def get(self, key: str) -> Optional[Any]:
        return self._read_document().get(key)

    def set(self, key: str, value: Any) -> None:
        document = self._read_document()
        document[key] = value
        self._write_document(document)
        logger.debug(f"Stored key '{key}' in {self._path}")

    def remove(self, key: str) -> None:
        document = self._read_document()
        if key in document:
            del document[key]
            self._write_document(document)
