"""Project settings loader.

Reads form builder configuration from .formbuilder.yaml in the project
root, so teams can point the builder at a shared schema location.

Example .formbuilder.yaml:
    formbuilder:
      storage_path: s3://${FORMS_BUCKET}/schemas   # or ./.formbuilder
      schema_key: formConfig

Environment variables FORMBUILDER_STORAGE and FORMBUILDER_SCHEMA_KEY take
precedence over the file. A .env file in the working directory is loaded
first, so either may be set there.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

from formbuilder.constants import DEFAULT_SCHEMA_KEY
from formbuilder.lib.env import expand_options, load_env_file

logger = logging.getLogger(__name__)

SETTINGS_FILE = ".formbuilder.yaml"


@dataclass
class BuilderSettings:
    """Form builder configuration settings."""

    # Local directory or s3:// URI the schema is saved under
    storage_path: str = "./.formbuilder"

    # Key the schema is saved as
    schema_key: str = DEFAULT_SCHEMA_KEY

    @classmethod
    def load(cls, project_root: Optional[Path] = None) -> "BuilderSettings":
        """Load settings from .formbuilder.yaml and the environment.

        Args:
            project_root: Project root directory. Defaults to cwd.

        Returns:
            BuilderSettings with values from the config file, the
            environment, or defaults.
        """
        root = project_root or Path.cwd()
        load_env_file(root / ".env")

        settings = cls._from_file(root / SETTINGS_FILE)

        storage = os.environ.get("FORMBUILDER_STORAGE")
        if storage:
            settings.storage_path = storage
        schema_key = os.environ.get("FORMBUILDER_SCHEMA_KEY")
        if schema_key:
            settings.schema_key = schema_key

        return settings

    @classmethod
    def _from_file(cls, config_path: Path) -> "BuilderSettings":
        if not config_path.exists():
            return cls()

        try:
            with open(config_path, encoding="utf-8") as f:
                config = yaml.safe_load(f) or {}
            section = expand_options(config.get("formbuilder") or {})
        except (OSError, yaml.YAMLError, AttributeError) as exc:
            # If config file is malformed, use defaults
            logger.warning("Ignoring malformed %s: %s", config_path, exc)
            return cls()

        return cls(
            storage_path=str(section.get("storage_path", cls.storage_path)),
            schema_key=str(section.get("schema_key", cls.schema_key)),
        )

    def resolve_storage_path(self, project_root: Optional[Path] = None) -> str:
        """Get the storage location, with local paths made absolute."""
        if "://" in self.storage_path:
            return self.storage_path
        root = project_root or Path.cwd()
        return str((root / self.storage_path).resolve())


_settings: Optional[BuilderSettings] = None


def get_settings(reload: bool = False) -> BuilderSettings:
    """Get the global builder settings.

    Args:
        reload: Force reload from config file.
    """
    global _settings
    if _settings is None or reload:
        _settings = BuilderSettings.load()
    return _settings
