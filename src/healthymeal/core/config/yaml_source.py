"""Custom YAML settings source with environment-based file merging."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml
from pydantic_settings import PydanticBaseSettingsSource


if TYPE_CHECKING:
    from pydantic.fields import FieldInfo


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge override into base dict.

    Args:
        base: Base dictionary to merge into.
        override: Dictionary with values to override.

    Returns:
        New dictionary with merged values.
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _default_config_dir() -> Path:
    # src/healthymeal/core/config/yaml_source.py -> project root
    return Path(__file__).resolve().parents[4] / "config"


class MultiYamlConfigSettingsSource(PydanticBaseSettingsSource):
    """Load and merge YAML files based on APP_ENV.

    1. Every ``*.yaml`` in ``config/base/`` (sorted by name)
    2. Every ``*.yaml`` in ``config/environments/{APP_ENV}/``, deep-merged on top

    ``HEALTHYMEAL_CONFIG_DIR`` overrides the config directory location, which
    matters once the package is installed outside the source tree.
    """

    def __init__(self, settings_cls: type[Any]) -> None:
        super().__init__(settings_cls)
        override = os.getenv("HEALTHYMEAL_CONFIG_DIR")
        self._config_dir = Path(override) if override else _default_config_dir()
        self._app_env = os.getenv("APP_ENV", "development")
        self._yaml_data = self._load_yaml_files()

    def _load_dir(self, directory: Path, merged: dict[str, Any]) -> dict[str, Any]:
        if not directory.exists():
            return merged
        for yaml_file in sorted(directory.glob("*.yaml")):
            with yaml_file.open(encoding="utf-8") as f:
                merged = deep_merge(merged, yaml.safe_load(f) or {})
        return merged

    def _load_yaml_files(self) -> dict[str, Any]:
        merged = self._load_dir(self._config_dir / "base", {})
        return self._load_dir(
            self._config_dir / "environments" / self._app_env, merged
        )

    def get_field_value(
        self,
        _field: FieldInfo,
        field_name: str,
    ) -> tuple[Any, str, bool]:
        """Get the value for a specific field from YAML data."""
        value = self._yaml_data.get(field_name)
        return value, field_name, isinstance(value, (dict, list))

    def __call__(self) -> dict[str, Any]:
        """Return all merged YAML configuration data."""
        return self._yaml_data
