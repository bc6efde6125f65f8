"""Environment handling for builder settings.

Settings values may reference the environment as ``${NAME}``, ``$NAME`` or
``${NAME:-fallback}``; a project's ``.env`` file is read with python-dotenv
before the references are resolved.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any, Dict, Optional, Union

from dotenv import load_dotenv

__all__ = ["expand_env_vars", "expand_options", "load_env_file"]

_REFERENCE = re.compile(
    r"\$\{(?P<braced>[A-Za-z_][A-Za-z0-9_]*)(?::-(?P<fallback>[^}]*))?\}"
    r"|\$(?P<bare>[A-Za-z_][A-Za-z0-9_]*)"
)


def load_env_file(path: Optional[Union[str, Path]] = None, *, override: bool = False) -> bool:
    """Read ``KEY=value`` lines from a .env file into ``os.environ``.

    Variables already set win unless ``override`` is given. Returns False
    when the file is missing or empty.
    """
    return load_dotenv(dotenv_path=path, override=override)


def expand_env_vars(value: str, *, strict: bool = False) -> str:
    """Resolve environment references in one string.

    Unset variables without a fallback are left as written, or raise
    KeyError when ``strict`` is set.

    Example:
        >>> os.environ["FORMS_BUCKET"] = "team-forms"
        >>> expand_env_vars("s3://${FORMS_BUCKET}/schemas")
        's3://team-forms/schemas'
        >>> expand_env_vars("${SCHEMA_KEY:-formConfig}")
        'formConfig'
    """

    def resolve(match: re.Match[str]) -> str:
        name = match.group("braced") or match.group("bare")
        if name in os.environ:
            return os.environ[name]
        if match.group("fallback") is not None:
            return match.group("fallback")
        if strict:
            raise KeyError(f"Environment variable not set: {name}")
        return match.group(0)

    return _REFERENCE.sub(resolve, value)


def _expand(value: Any, strict: bool) -> Any:
    if isinstance(value, str):
        return expand_env_vars(value, strict=strict)
    if isinstance(value, dict):
        return {key: _expand(item, strict) for key, item in value.items()}
    if isinstance(value, list):
        return [_expand(item, strict) for item in value]
    return value


def expand_options(options: Dict[str, Any], *, strict: bool = False) -> Dict[str, Any]:
    """Return a copy of a settings mapping with every string expanded."""
    return _expand(options, strict)
