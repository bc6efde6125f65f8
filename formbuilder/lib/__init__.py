"""Supporting library modules: errors, logging, env handling, storage."""

from formbuilder.lib.env import expand_env_vars, expand_options, load_env_file
from formbuilder.lib.errors import (
    FormBuilderError,
    InvalidInput,
    NotFound,
    ParseError,
    StorageError,
)
from formbuilder.lib.logging import JSONFormatter, setup_logging
from formbuilder.lib.storage import StorageBackend, get_storage

__all__ = [
    "FormBuilderError",
    "InvalidInput",
    "JSONFormatter",
    "NotFound",
    "ParseError",
    "StorageBackend",
    "StorageError",
    "expand_env_vars",
    "expand_options",
    "get_storage",
    "load_env_file",
    "setup_logging",
]
