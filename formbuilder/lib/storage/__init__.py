"""Storage backends for saved form schemas.

Every backend implements the same key-value capability the codec uses:
``get(key) -> text | None`` and ``set(key, text)``.

Usage:
    from formbuilder.lib.storage import get_storage

    storage = get_storage("memory://")              # In-process only
    storage = get_storage("./.formbuilder/")        # Local directory
    storage = get_storage("s3://my-bucket/forms/")  # AWS S3
"""

from formbuilder.lib.storage.base import StorageBackend
from formbuilder.lib.storage.local import LocalStorage
from formbuilder.lib.storage.memory import MemoryStorage

__all__ = [
    "StorageBackend",
    "LocalStorage",
    "MemoryStorage",
    "S3Storage",
    "get_storage",
    "parse_uri",
]


def parse_uri(path: str) -> tuple[str, str]:
    """Parse a storage URI into scheme and path.

    Examples:
        >>> parse_uri("./.formbuilder/")
        ('local', './.formbuilder/')
        >>> parse_uri("s3://my-bucket/forms/")
        ('s3', 'my-bucket/forms/')
        >>> parse_uri("memory://")
        ('memory', '')
    """
    if path.startswith("s3://"):
        return ("s3", path[5:])
    elif path.startswith("memory://"):
        return ("memory", path[9:])
    elif path.startswith("file://"):
        return ("local", path[7:])
    else:
        return ("local", path)


def get_storage(path: str, **options) -> StorageBackend:
    """Get the appropriate storage backend for a path.

    Args:
        path: Storage location (local path or URI)
        **options: Backend-specific options (credentials, etc.)

    Returns:
        StorageBackend instance for the detected scheme
    """
    scheme, location = parse_uri(path)

    if scheme == "s3":
        from formbuilder.lib.storage.s3 import S3Storage

        return S3Storage(path, **options)
    elif scheme == "memory":
        return MemoryStorage(location, **options)
    else:
        return LocalStorage(location, **options)


def __getattr__(name: str):
    """Lazy import of the S3 backend so boto3 loads only when used."""
    if name == "S3Storage":
        from formbuilder.lib.storage.s3 import S3Storage

        return S3Storage
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
