"""File-backed catalog backend: loads the rule catalog from YAML or JSON on disk."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from docmind.catalog.models import DocumentTypeDefinition, RuleCatalog
from docmind.catalog.parser import parse_catalog
from docmind.exceptions import CatalogError, UnknownDocumentTypeError

log = logging.getLogger(__name__)


class FileCatalogBackend:
    """Loads the catalog from a YAML or JSON file on disk.

    The file is lazy-loaded on first access and cached until
    :meth:`reload` or :meth:`update_catalog` is called.
    """

    def __init__(self, path: Path, *, strict_weights: bool = False) -> None:
        self._path = path
        self._strict_weights = strict_weights
        self._catalog: RuleCatalog | None = None

    def get_catalog(self) -> RuleCatalog:
        self._ensure_loaded()
        assert self._catalog is not None
        return self._catalog

    def get_document_type(self, document_type: str) -> DocumentTypeDefinition:
        doc_type = self.get_catalog().find(document_type)
        if doc_type is None:
            raise UnknownDocumentTypeError(document_type)
        return doc_type

    def list_document_types(self) -> list[dict[str, Any]]:
        return [dt.summary() for dt in self.get_catalog().document_types]

    def get_version(self) -> str:
        return self.get_catalog().version

    def load_raw(self) -> dict[str, Any]:
        """Return the undecorated catalog blob as stored on disk."""
        if not self._path.exists():
            raise CatalogError(f"Catalog file not found: {self._path}")

        raw_text = self._path.read_text(encoding="utf-8")
        try:
            if self._path.suffix in (".yaml", ".yml"):
                data = yaml.safe_load(raw_text)
            else:
                data = json.loads(raw_text)
        except (yaml.YAMLError, json.JSONDecodeError) as exc:
            raise CatalogError(f"Cannot decode catalog {self._path}: {exc}") from exc
        return data or {}

    def update_catalog(self, raw: dict[str, Any]) -> RuleCatalog:
        """Validate and persist a replacement catalog blob.

        The blob is parsed first so a malformed catalog never reaches disk,
        and the file is swapped in by rename so readers never see a partial one.
        """
        catalog = parse_catalog(raw, strict_weights=self._strict_weights)

        if self._path.suffix in (".yaml", ".yml"):
            text = yaml.safe_dump(raw, sort_keys=False, allow_unicode=True)
        else:
            text = json.dumps(raw, indent=2)
        tmp = self._path.with_name(self._path.name + ".tmp")
        try:
            tmp.write_text(text, encoding="utf-8")
            tmp.replace(self._path)
        except OSError as exc:
            raise CatalogError(f"Cannot write catalog {self._path}: {exc}") from exc

        self._catalog = catalog
        log.info("Catalog updated at %s (version %s)", self._path, catalog.version)
        return catalog

    def reload(self) -> None:
        """Drop the cached catalog; the next access re-reads the file."""
        self._catalog = None

    def _ensure_loaded(self) -> None:
        if self._catalog is not None:
            return
        self._catalog = parse_catalog(self.load_raw(), strict_weights=self._strict_weights)
        log.info(
            "Loaded %d document types from %s (version %s)",
            len(self._catalog.document_types),
            self._path,
            self._catalog.version,
        )
