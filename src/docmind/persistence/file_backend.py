"""File-based persistence backend: one JSON document per key in a directory."""

from __future__ import annotations

import logging
from pathlib import Path

from docmind.exceptions import PersistenceError

log = logging.getLogger(__name__)


class FilePersistenceBackend:
    """Stores each record as ``<key>.json`` under ``base_path``.

    Writes go through a temporary sibling file and a rename, so a reader never
    sees a half-written record.
    """

    def __init__(self, base_path: Path) -> None:
        self._base = Path(base_path)
        try:
            self._base.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise PersistenceError(f"Cannot create store directory {self._base}: {exc}") from exc

    @property
    def base_path(self) -> Path:
        return self._base

    def _key_path(self, key: str) -> Path:
        safe_key = key.replace("/", "_").replace("\\", "_")
        return self._base / f"{safe_key}.json"

    def save(self, key: str, data: str) -> None:
        path = self._key_path(key)
        tmp = path.with_suffix(".json.tmp")
        try:
            tmp.write_text(data, encoding="utf-8")
            tmp.replace(path)
        except OSError as exc:
            raise PersistenceError(f"Cannot write {key} to {path}: {exc}") from exc
        log.debug("Saved %s to %s", key, path)

    def load(self, key: str) -> str:
        path = self._key_path(key)
        if not path.is_file():
            raise KeyError(f"Not found: {key} (path: {path})")
        return path.read_text(encoding="utf-8")

    def list_keys(self, prefix: str = "") -> list[str]:
        return sorted(p.stem for p in self._base.glob("*.json") if p.stem.startswith(prefix))
