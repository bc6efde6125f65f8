"""In-memory storage backend, used for previews and tests."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from formbuilder.lib.storage.base import StorageBackend

__all__ = ["MemoryStorage"]


class MemoryStorage(StorageBackend):
    """Keep schemas in a dict for the lifetime of the process."""

    def __init__(self, base_path: str = "", **options: Any) -> None:
        super().__init__(base_path, **options)
        self._data: Dict[str, str] = {}

    @property
    def scheme(self) -> str:
        return "memory"

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, text: str) -> None:
        self._data[key] = text

    def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    def keys(self) -> List[str]:
        return sorted(self._data)
