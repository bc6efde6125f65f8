"""Local filesystem storage backend."""

from __future__ import annotations

import logging
import os
import re
import tempfile
from pathlib import Path
from typing import List, Optional

from formbuilder.lib.errors import StorageError
from formbuilder.lib.storage.base import StorageBackend

logger = logging.getLogger(__name__)

__all__ = ["LocalStorage"]

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


class LocalStorage(StorageBackend):
    """Store each key as ``<base_path>/<key>.json``.

    Example:
        >>> storage = LocalStorage("./.formbuilder")
        >>> storage.set("formConfig", "[]")
        >>> storage.get("formConfig")
        '[]'
    """

    suffix = ".json"

    @property
    def scheme(self) -> str:
        return "local"

    def _path_for(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key) or key in (".", ".."):
            raise StorageError(
                "Storage keys may only contain letters, digits, '.', '_' and '-'",
                backend=self.scheme,
                key=key,
            )
        return Path(self.base_path) / f"{key}{self.suffix}"

    def get(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        if not path.exists():
            logger.debug("No file for key %r at %s", key, path)
            return None
        try:
            return path.read_text(encoding="utf-8")
        except OSError as exc:
            raise StorageError(
                f"Failed to read {path}", backend=self.scheme, key=key, cause=exc
            ) from exc

    def set(self, key: str, text: str) -> None:
        path = self._path_for(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            # Write to a sibling temp file first so readers never see half a schema
            fd, tmp_name = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(text)
            os.replace(tmp_name, path)
        except OSError as exc:
            raise StorageError(
                f"Failed to write {path}", backend=self.scheme, key=key, cause=exc
            ) from exc
        logger.debug("Wrote %d characters to %s", len(text), path)

    def delete(self, key: str) -> bool:
        path = self._path_for(key)
        if path.exists():
            path.unlink()
            logger.info("Deleted %s", path)
            return True
        return False

    def keys(self) -> List[str]:
        root = Path(self.base_path)
        if not root.exists():
            return []
        return sorted(p.name[: -len(self.suffix)] for p in root.glob(f"*{self.suffix}") if p.is_file())
