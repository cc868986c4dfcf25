"""Preference store persisted as a single JSON object on disk."""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path

from adsdash.adapters.preferences.base import AbstractPreferenceStore
from adsdash.core.errors import StorageAppError

logger = logging.getLogger(__name__)


class JsonFilePreferenceStore(AbstractPreferenceStore):
    """Store preferences in ``{"key": "value", ...}`` form.

    A missing file reads as empty. Writes replace the file through a
    temporary sibling so a crash never leaves half a document behind. A
    file that cannot be parsed is overwritten by the next write.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._lock = threading.RLock()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, str]:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as exc:
            raise StorageAppError(
                code="preference_store_unreadable",
                message="Preference store could not be read",
                details={"path": str(self._path)},
            ) from exc
        try:
            data = json.loads(raw)
        except ValueError as exc:
            raise StorageAppError(
                code="preference_store_unreadable",
                message="Preference store could not be read",
                details={"path": str(self._path)},
            ) from exc
        if not isinstance(data, dict):
            raise StorageAppError(
                code="preference_store_corrupt",
                message="Preference store does not contain a JSON object",
                details={"path": str(self._path)},
            )
        return {str(k): str(v) for k, v in data.items()}

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            try:
                data = self._load()
            except StorageAppError as exc:
                logger.warning(
                    "preferences.store_reset",
                    extra={"error_code": exc.code, "path": str(self._path)},
                )
                data = {}
            data[key] = value
            tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
            try:
                self._path.parent.mkdir(parents=True, exist_ok=True)
                tmp_path.write_text(json.dumps(data, indent=2, sort_keys=True), encoding="utf-8")
                tmp_path.replace(self._path)
            except OSError as exc:
                raise StorageAppError(
                    code="preference_store_unwritable",
                    message="Preference store could not be written",
                    details={"path": str(self._path), "storage_key": key},
                ) from exc
        logger.debug("preferences.saved", extra={"storage_key": key, "path": str(self._path)})
