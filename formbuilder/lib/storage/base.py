"""Abstract base class for schema storage backends.

Defines the key-value interface the codec persists schemas through.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, List, Optional

logger = logging.getLogger(__name__)

__all__ = ["StorageBackend"]


class StorageBackend(ABC):
    """Abstract base class for storage backends.

    A backend maps string keys to text documents. Reads of a missing key
    return None; they never raise.

    Subclasses must implement all abstract methods.
    """

    def __init__(self, base_path: str = "", **options: Any) -> None:
        """Initialize the storage backend.

        Args:
            base_path: Location the keys are stored under
            **options: Backend-specific options
        """
        self.base_path = base_path
        self.options = options

    @property
    @abstractmethod
    def scheme(self) -> str:
        """Return the scheme for this backend (e.g., 'memory', 'local', 's3')."""
        pass

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Read the text stored under a key.

        Args:
            key: Storage key

        Returns:
            Stored text, or None if the key is absent
        """
        pass

    @abstractmethod
    def set(self, key: str, text: str) -> None:
        """Store text under a key, replacing any previous value.

        Args:
            key: Storage key
            text: Text to store
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Delete a key.

        Returns:
            True if deleted, False if not found
        """
        pass

    @abstractmethod
    def keys(self) -> List[str]:
        """List the stored keys in sorted order."""
        pass

    def exists(self, key: str) -> bool:
        """Check if a key is stored."""
        return self.get(key) is not None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(base_path={self.base_path!r})"
